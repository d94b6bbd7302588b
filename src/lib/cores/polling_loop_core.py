import threading
import time
from enum import StrEnum
from typing import Callable, List, Optional

from src.lib.clients.cloudwatch import CloudWatchMetricsClient
from src.lib.clients.task_metadata import TaskMetadataClient, TaskStats
from src.lib.config import SidecarConfig
from src.lib.constants import CPU_UTILIZATION_METRIC
from src.lib.constants import EXIT_CODE_FAILURE
from src.lib.constants import EXIT_CODE_SUCCESS
from src.lib.constants import MEMORY_UTILIZATION_METRIC
from src.lib.constants import SERVICE_NAME
from src.lib.cores.container_registry import ContainerRegistry
from src.lib.cores.utilization_core import compute_utilization
from src.lib.exceptions import InvalidTaskArnException
from src.lib.exceptions import MetadataClientError
from src.lib.exceptions import MetricPublishError
from src.lib.logger import logger
from src.lib.models.ecs_models import TaskMetadata
from src.lib.models.metric_models import MetricDatum

PublisherFactory = Callable[[str], CloudWatchMetricsClient]


class SidecarState(StrEnum):
    AWAITING_READY = "awaiting_ready"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


class MetricsSidecar:
    """
    Polls the task stats on a fixed interval and publishes per container utilization metrics.

    AWAITING_READY -> RUNNING once the task metadata reports the task as RUNNING.
    Any state -> SHUTTING_DOWN once `shutdown_event` is set. The event is only looked at between ticks,
    so a tick that already started always finishes, publish included.
    """

    def __init__(
            self,
            config: SidecarConfig,
            metadata_client: TaskMetadataClient,
            publisher_factory: Optional[PublisherFactory] = None,
            shutdown_event: Optional[threading.Event] = None,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.metadata_client = metadata_client
        self.publisher_factory = publisher_factory or self._cloudwatch_publisher
        self.shutdown_event = shutdown_event or threading.Event()
        self.clock = clock

        self.state = SidecarState.AWAITING_READY
        self.task_metadata: Optional[TaskMetadata] = None
        self.registry: Optional[ContainerRegistry] = None
        self.publisher: Optional[CloudWatchMetricsClient] = None

    def _cloudwatch_publisher(self, region_name: str) -> CloudWatchMetricsClient:
        return CloudWatchMetricsClient(region_name=region_name, namespace=self.config.namespace)

    def request_shutdown(self) -> None:
        self.shutdown_event.set()

    def run(self) -> int:
        """
        Runs the sidecar until a shutdown is requested and returns the process exit code.
        """
        try:
            task_metadata = self.wait_for_task_ready()
            if task_metadata is None:
                self.state = SidecarState.SHUTTING_DOWN
                logger.info("Shutdown requested before the task was ready, exiting")
                return EXIT_CODE_SUCCESS
            self.start(task_metadata)
        except MetadataClientError as e:
            logger.error(f"Unable to get task metadata: {e.message}")
            return EXIT_CODE_FAILURE
        except InvalidTaskArnException as e:
            logger.error(e.message)
            return EXIT_CODE_FAILURE

        logger.info(f"{SERVICE_NAME} is up and running, awaiting termination signal")
        self.run_forever()
        logger.info("Exiting")
        return EXIT_CODE_SUCCESS

    def wait_for_task_ready(self) -> Optional[TaskMetadata]:
        """
        Polls the task metadata until the task is RUNNING.
        Returns None if a shutdown was requested while waiting. A failed fetch is raised to the caller.
        """
        logger.info("Waiting for the task to be ready")
        if self.shutdown_event.wait(self.config.startup_delay_seconds):
            return None

        while True:
            task_metadata = self.metadata_client.get_task_metadata()
            if task_metadata.is_running:
                logger.info(f"Task {task_metadata.task_arn} is {task_metadata.known_status}")
                return task_metadata

            logger.info(f"Task {task_metadata.task_arn} is {task_metadata.known_status}, waiting for it to run")
            if self.shutdown_event.wait(self.config.readiness_poll_interval_seconds):
                return None

    def start(self, task_metadata: TaskMetadata) -> None:
        region_name = self.config.aws_region or task_metadata.region
        logger.info(f"Detected aws region: {region_name}")

        self.task_metadata = task_metadata
        self.registry = ContainerRegistry.from_task_metadata(task_metadata)
        self.publisher = self.publisher_factory(region_name)
        self.state = SidecarState.RUNNING

    def run_forever(self) -> None:
        interval = self.config.interval_seconds
        next_tick = self.clock() + interval
        while not self.shutdown_event.wait(max(0.0, next_tick - self.clock())):
            self.run_tick()

            next_tick += interval
            now = self.clock()
            if next_tick < now:
                skipped_ticks = int((now - next_tick) // interval) + 1
                logger.warning(f"Tick took longer than {interval} seconds, skipping {skipped_ticks} ticks")
                next_tick += skipped_ticks * interval

        self.state = SidecarState.SHUTTING_DOWN
        logger.info("Shutdown requested, stopped polling task stats")

    def run_tick(self) -> int:
        """
        Fetches the task stats once and publishes the resulting metrics in a single batch.
        Returns the number of published metrics. Never raises on fetch or publish failures.
        """
        try:
            task_stats = self.metadata_client.get_task_stats()
        except MetadataClientError as e:
            logger.error(f"Unable to get task stats: {e.message}")
            return 0

        metrics = self.build_metrics(task_stats)
        if not metrics:
            logger.debug("No metrics to publish this tick")
            return 0

        try:
            self.publisher.put_metrics(metrics)
        except MetricPublishError as e:
            logger.error(f"Unable to put metrics: {e.message}", extra={"metrics_count": len(metrics)})
            return 0

        return len(metrics)

    def build_metrics(self, task_stats: TaskStats) -> List[MetricDatum]:
        metrics = []
        for container_id, container_stats in task_stats.items():
            # the pause container's usage is not the application's
            if container_stats is None or self.registry.is_excluded(container_id):
                continue

            utilization = compute_utilization(container_stats)
            values = {
                MEMORY_UTILIZATION_METRIC: utilization.memory_percent,
                CPU_UTILIZATION_METRIC: utilization.cpu_percent,
            }
            container_name = self.registry.display_name(container_id)
            for metric_name in self.config.metric_names:
                metrics.append(MetricDatum.for_container(
                    metric_name=metric_name,
                    value=values[metric_name],
                    cluster_name=self.task_metadata.cluster,
                    container_name=container_name,
                ))

        return metrics
