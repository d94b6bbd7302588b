from typing import Dict, Optional

from src.lib.constants import UNKNOWN_CONTAINER_NAME
from src.lib.logger import logger
from src.lib.models.ecs_models import TaskMetadata


class ContainerRegistry:
    """
    Read-only view over the task's containers, built once the task is RUNNING.
    The container set of a task does not change afterwards.
    """

    def __init__(self, container_names: Dict[str, str], pause_container_id: Optional[str] = None):
        self._container_names = dict(container_names)
        self.pause_container_id = pause_container_id

    @classmethod
    def from_task_metadata(cls, task_metadata: TaskMetadata) -> "ContainerRegistry":
        container_names = {}
        pause_container_id = None
        for container in task_metadata.containers:
            if container.is_pause_container:
                # only tasks using the awsvpc networking mode have a pause container
                logger.info(f"Detected the awsvpc networking mode, excluding pause container {container.docker_id}")
                pause_container_id = container.docker_id
            container_names[container.docker_id] = container.docker_name or container.name

        return cls(container_names=container_names, pause_container_id=pause_container_id)

    def is_excluded(self, container_id: str) -> bool:
        return self.pause_container_id is not None and container_id == self.pause_container_id

    def display_name(self, container_id: str) -> str:
        return self._container_names.get(container_id) or UNKNOWN_CONTAINER_NAME
