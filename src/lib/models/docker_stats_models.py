from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseStatsModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class MemoryStats(BaseStatsModel):
    usage: int = 0
    limit: int = 0


class CPUUsage(BaseStatsModel):
    total_usage: int = 0
    percpu_usage: Optional[List[int]] = None


class CPUStats(BaseStatsModel):
    cpu_usage: CPUUsage = Field(default_factory=CPUUsage)
    system_cpu_usage: int = 0
    online_cpus: int = 0


class ContainerStats(BaseStatsModel):
    """
    A single container's docker stats entry from `GET ${ECS_CONTAINER_METADATA_URI}/task/stats`.
    `precpu_stats` holds the previous sample taken by the agent.
    """
    memory_stats: MemoryStats = Field(default_factory=MemoryStats)
    cpu_stats: CPUStats = Field(default_factory=CPUStats)
    precpu_stats: CPUStats = Field(default_factory=CPUStats)


class UtilizationSample(BaseModel):
    cpu_percent: float
    memory_percent: float
