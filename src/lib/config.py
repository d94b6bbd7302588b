import os
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.lib.constants import AWS_REGION_ENV_VAR
from src.lib.constants import CLOUDWATCH_NAMESPACE
from src.lib.constants import CONTAINER_METADATA_ENV_VAR
from src.lib.constants import CPU_UTILIZATION_METRIC
from src.lib.constants import DEFAULT_MAX_ATTEMPTS
from src.lib.constants import DEFAULT_METRIC_NAMES
from src.lib.constants import DEFAULT_METRICS_INTERVAL_SECONDS
from src.lib.constants import DEFAULT_READINESS_POLL_INTERVAL_SECONDS
from src.lib.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from src.lib.constants import DEFAULT_RETRY_DELAY_SECONDS
from src.lib.constants import DEFAULT_STARTUP_DELAY_SECONDS
from src.lib.constants import MEMORY_UTILIZATION_METRIC
from src.lib.constants import METADATA_MAX_ATTEMPTS_ENV_VAR
from src.lib.constants import METADATA_REQUEST_TIMEOUT_ENV_VAR
from src.lib.constants import METADATA_RETRY_DELAY_ENV_VAR
from src.lib.constants import METRICS_INTERVAL_ENV_VAR
from src.lib.constants import METRICS_NAMES_ENV_VAR
from src.lib.constants import METRICS_NAMESPACE_ENV_VAR
from src.lib.constants import READINESS_POLL_INTERVAL_ENV_VAR
from src.lib.constants import STARTUP_DELAY_ENV_VAR

SUPPORTED_METRIC_NAMES = (MEMORY_UTILIZATION_METRIC, CPU_UTILIZATION_METRIC)


class SidecarConfig(BaseModel):
    """
    Everything the sidecar needs to run. Built once at startup by `from_env` and passed
    down to the metadata client, the publisher and the polling loop.
    """
    metadata_base_url: str = ""
    interval_seconds: float = Field(default=DEFAULT_METRICS_INTERVAL_SECONDS, gt=0)
    metric_names: Tuple[str, ...] = DEFAULT_METRIC_NAMES
    namespace: str = CLOUDWATCH_NAMESPACE
    request_timeout_seconds: float = Field(default=DEFAULT_REQUEST_TIMEOUT_SECONDS, gt=0)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    retry_delay_seconds: float = Field(default=DEFAULT_RETRY_DELAY_SECONDS, ge=0)
    readiness_poll_interval_seconds: float = Field(default=DEFAULT_READINESS_POLL_INTERVAL_SECONDS, ge=0)
    startup_delay_seconds: float = Field(default=DEFAULT_STARTUP_DELAY_SECONDS, ge=0)
    aws_region: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("metric_names", mode="before")
    @classmethod
    def split_metric_names(cls, value):
        if isinstance(value, str):
            value = [name.strip() for name in value.split(",") if name.strip()]
        return tuple(value)

    @field_validator("metric_names")
    @classmethod
    def validate_metric_names(cls, value):
        if not value:
            raise ValueError("At least one metric name is required")
        unsupported = [name for name in value if name not in SUPPORTED_METRIC_NAMES]
        if unsupported:
            raise ValueError(f"Unsupported metric names {unsupported}, expected any of {SUPPORTED_METRIC_NAMES}")
        return value

    @classmethod
    def from_env(cls) -> "SidecarConfig":
        env_to_field = {
            CONTAINER_METADATA_ENV_VAR: "metadata_base_url",
            METRICS_INTERVAL_ENV_VAR: "interval_seconds",
            METRICS_NAMES_ENV_VAR: "metric_names",
            METRICS_NAMESPACE_ENV_VAR: "namespace",
            METADATA_REQUEST_TIMEOUT_ENV_VAR: "request_timeout_seconds",
            METADATA_MAX_ATTEMPTS_ENV_VAR: "max_attempts",
            METADATA_RETRY_DELAY_ENV_VAR: "retry_delay_seconds",
            READINESS_POLL_INTERVAL_ENV_VAR: "readiness_poll_interval_seconds",
            STARTUP_DELAY_ENV_VAR: "startup_delay_seconds",
            AWS_REGION_ENV_VAR: "aws_region",
        }
        values = {
            field_name: os.environ[env_var]
            for env_var, field_name in env_to_field.items()
            if os.environ.get(env_var)
        }
        return cls(**values)
