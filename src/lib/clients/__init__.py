from src.lib.clients.cloudwatch import CloudWatchMetricsClient
from src.lib.clients.task_metadata import TaskMetadataClient

__all__ = [
    'CloudWatchMetricsClient',
    'TaskMetadataClient',
]
