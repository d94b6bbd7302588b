# Environment variables
CONTAINER_METADATA_ENV_VAR = "ECS_CONTAINER_METADATA_URI"
METRICS_INTERVAL_ENV_VAR = "METRICS_INTERVAL_SECONDS"
METRICS_NAMES_ENV_VAR = "METRICS_NAMES"
METRICS_NAMESPACE_ENV_VAR = "METRICS_NAMESPACE"
METADATA_REQUEST_TIMEOUT_ENV_VAR = "METADATA_REQUEST_TIMEOUT_SECONDS"
METADATA_MAX_ATTEMPTS_ENV_VAR = "METADATA_MAX_ATTEMPTS"
METADATA_RETRY_DELAY_ENV_VAR = "METADATA_RETRY_DELAY_SECONDS"
READINESS_POLL_INTERVAL_ENV_VAR = "READINESS_POLL_INTERVAL_SECONDS"
STARTUP_DELAY_ENV_VAR = "STARTUP_DELAY_SECONDS"
AWS_REGION_ENV_VAR = "AWS_REGION"

SERVICE_NAME = "taskmetadata-cloudwatch"

# Task metadata endpoint (v3)
TASK_METADATA_PATH = "{base}/task"
TASK_STATS_PATH = "{base}/task/stats"
TASK_KNOWN_STATUS_RUNNING = "RUNNING"
PAUSE_CONTAINER_TYPE = "CNI_PAUSE"
UNKNOWN_CONTAINER_NAME = "unknown"

DEFAULT_REQUEST_TIMEOUT_SECONDS = 5.0
DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_RETRY_DELAY_SECONDS = 1.0
DEFAULT_READINESS_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_STARTUP_DELAY_SECONDS = 5.0
DEFAULT_METRICS_INTERVAL_SECONDS = 5.0

# CloudWatch
CLOUDWATCH_CLIENT_NAME = "cloudwatch"
CLOUDWATCH_NAMESPACE = "ECS/Containers"
CLOUDWATCH_MAX_METRIC_DATA_PER_REQUEST = 1000
METRIC_UNIT_PERCENT = "Percent"
MEMORY_UTILIZATION_METRIC = "MemoryUtilization"
CPU_UTILIZATION_METRIC = "CPUUtilization"
DEFAULT_METRIC_NAMES = (MEMORY_UTILIZATION_METRIC, CPU_UTILIZATION_METRIC)
CLUSTER_NAME_DIMENSION = "ClusterName"
CONTAINER_NAME_DIMENSION = "ContainerName"

EXIT_CODE_SUCCESS = 0
EXIT_CODE_FAILURE = 1
