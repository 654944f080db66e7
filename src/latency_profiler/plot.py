import statistics

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from latency_profiler.models import ProfileRun  # noqa: E402


def plot_latencies(run: ProfileRun, path: str) -> str:
    """
    Plot per-attempt latency (ms) of the successful responses with mean and
    median lines, and save it to ``path``.
    """
    latencies = [r.time_taken * 1000 for r in run.successful_responses]
    if not latencies:
        raise ValueError("No successful responses to plot")

    attempts = list(range(1, len(latencies) + 1))
    mean = statistics.mean(latencies)
    median = statistics.median(latencies)

    fig = plt.figure(figsize=(10, 6))
    plt.plot(attempts, latencies, marker='o', linewidth=2, markersize=6,
             color='blue', label='Latency')
    plt.axhline(mean, color='orange', linestyle='--', linewidth=1.5, label=f'Mean ({mean:.2f} ms)')
    plt.axhline(median, color='green', linestyle=':', linewidth=1.5, label=f'Median ({median:.2f} ms)')

    plt.xlabel('Request', fontsize=12)
    plt.ylabel('Response Time (ms)', fontsize=12)
    plt.title(f'Response Time per Request\n{run.target}', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.ylim(bottom=0)
    plt.legend(loc='upper left', fontsize=10)

    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close(fig)
    return path
