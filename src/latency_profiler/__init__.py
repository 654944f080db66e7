"""Profile the latency of a single HTTP(S) endpoint over raw sockets."""

from latency_profiler.config import ProfilerConfig
from latency_profiler.models import FailureKind, FailureRecord, ProfileRun, ResponseProperties, Target
from latency_profiler.profiler import Profiler
from latency_profiler.stats import ProfileStatistics, report_lines, summarize

__all__ = [
    "FailureKind",
    "FailureRecord",
    "ProfileRun",
    "ProfileStatistics",
    "Profiler",
    "ProfilerConfig",
    "ResponseProperties",
    "Target",
    "report_lines",
    "summarize",
]

__version__ = "0.1.0"
