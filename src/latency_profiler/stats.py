"""
Descriptive statistics over a finished profiling run.

Every statistic that needs at least one successful response is None when
there are none, and ``report_lines`` prints those as not available.
"""

import statistics
from typing import List, Optional

from pydantic import BaseModel

from latency_profiler.models import ProfileRun

NOT_AVAILABLE = "not available (no successful responses)"


class ProfileStatistics(BaseModel):
    total_requests: int
    success_count: int
    failure_count: int
    success_percentage: Optional[float] = None
    non_200_status_codes: List[int] = []
    non_200_percentage: Optional[float] = None
    unique_non_200_codes: List[int] = []
    fastest: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    p95: Optional[float] = None
    p99: Optional[float] = None
    slowest: Optional[float] = None
    smallest_size: Optional[int] = None
    largest_size: Optional[int] = None
    representative_document: Optional[str] = None
    failures: List[str] = []


def calculate_percentile(data: List[float], percentile: float) -> float:
    """Calculate the given percentile of a list of values."""
    sorted_data = sorted(data)
    index = (percentile / 100) * (len(sorted_data) - 1)
    lower = int(index)
    upper = lower + 1
    if upper >= len(sorted_data):
        return sorted_data[-1]
    weight = index - lower
    return sorted_data[lower] * (1 - weight) + sorted_data[upper] * weight


def _percentage(part: int, whole: int) -> Optional[float]:
    if whole == 0:
        return None
    return part / whole * 100


def summarize(run: ProfileRun) -> ProfileStatistics:
    successes = run.successful_responses
    total = run.total_requests
    non_200 = [r.status_code for r in successes if r.status_code != 200]

    result = ProfileStatistics(
        total_requests=total,
        success_count=len(successes),
        failure_count=len(run.failed_responses),
        success_percentage=_percentage(len(successes), total),
        non_200_status_codes=non_200,
        non_200_percentage=_percentage(len(non_200), len(successes)),
        unique_non_200_codes=sorted(set(non_200)),
        failures=[str(f) for f in run.failed_responses],
    )
    if not successes:
        return result

    durations = [r.time_taken for r in successes]
    sizes = [r.size for r in successes]
    # max() keeps the first of equally long bodies
    representative = max(successes, key=lambda r: r.size)

    result.fastest = min(durations)
    result.mean = statistics.mean(durations)
    result.median = statistics.median(durations)
    result.p95 = calculate_percentile(durations, 95)
    result.p99 = calculate_percentile(durations, 99)
    result.slowest = max(durations)
    result.smallest_size = min(sizes)
    result.largest_size = max(sizes)
    result.representative_document = representative.document
    return result


def _ms(seconds: Optional[float]) -> str:
    if seconds is None:
        return NOT_AVAILABLE
    return f"{seconds * 1000:.2f} ms"


def _pct(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}%"


def _bytes(size: Optional[int]) -> str:
    if size is None:
        return NOT_AVAILABLE
    return f"{size} B"


def report_lines(stats: ProfileStatistics) -> List[str]:
    lines = []
    if stats.representative_document is None:
        lines.append("Could not display representative response body (no successful responses)")
    else:
        lines.append("The following is the longest raw response body we received, which we take as representative:")
        lines.append("")
        lines.append(repr(stats.representative_document))
        lines.append("")

    codes = ", ".join(str(c) for c in stats.unique_non_200_codes) or "none"
    lines.extend([
        f"Number of requests: {stats.total_requests}",
        f"Percentage succeeded connecting: {_pct(stats.success_percentage)}",
        f"Percentage of successful responses with non-200 response codes (includes redirects, etc.): {_pct(stats.non_200_percentage)}",
        f"Unique non-200 status codes encountered: {codes}",
        f"Fastest response time: {_ms(stats.fastest)}",
        f"Mean response time: {_ms(stats.mean)}",
        f"Median response time: {_ms(stats.median)}",
        f"P95 response time: {_ms(stats.p95)}",
        f"P99 response time: {_ms(stats.p99)}",
        f"Slowest response time: {_ms(stats.slowest)}",
        f"Smallest size: {_bytes(stats.smallest_size)}",
        f"Largest size: {_bytes(stats.largest_size)}",
    ])
    if stats.failures:
        lines.append(f"Connection errors encountered ({stats.failure_count}):")
        lines.extend(f"  {failure}" for failure in stats.failures)
    else:
        lines.append("Connection errors encountered: none")
    return lines
