from src.lib.models.docker_stats_models import ContainerStats
from src.lib.models.docker_stats_models import UtilizationSample


def compute_memory_utilization(stats: ContainerStats) -> float:
    """
    Memory usage as a percentage of the container's memory limit, 0.0 when no limit is reported.
    """
    if stats.memory_stats.limit == 0:
        return 0.0
    return stats.memory_stats.usage / stats.memory_stats.limit * 100.0


def compute_cpu_utilization(stats: ContainerStats) -> float:
    """
    CPU usage between the previous and the current sample, the same way `docker stats` computes it.

    Both the container and the system cumulative counters have to move forward, otherwise (first sample,
    counter reset) the result is 0.0.
    """
    cpu_delta = stats.cpu_stats.cpu_usage.total_usage - stats.precpu_stats.cpu_usage.total_usage
    system_delta = stats.cpu_stats.system_cpu_usage - stats.precpu_stats.system_cpu_usage

    online_cpus = stats.cpu_stats.online_cpus
    if online_cpus == 0:
        online_cpus = len(stats.cpu_stats.cpu_usage.percpu_usage or [])

    if cpu_delta > 0 and system_delta > 0:
        return (cpu_delta / system_delta) * online_cpus * 100.0
    return 0.0


def compute_utilization(stats: ContainerStats) -> UtilizationSample:
    return UtilizationSample(
        cpu_percent=compute_cpu_utilization(stats),
        memory_percent=compute_memory_utilization(stats),
    )
