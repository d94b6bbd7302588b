import time
from http import HTTPStatus
from typing import Dict, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from src.lib.constants import DEFAULT_MAX_ATTEMPTS
from src.lib.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from src.lib.constants import DEFAULT_RETRY_DELAY_SECONDS
from src.lib.constants import TASK_METADATA_PATH
from src.lib.constants import TASK_STATS_PATH
from src.lib.exceptions import MetadataFetchError
from src.lib.exceptions import MetadataParseError
from src.lib.logger import logger
from src.lib.models.docker_stats_models import ContainerStats
from src.lib.models.ecs_models import TaskMetadata

TaskStats = Dict[str, Optional[ContainerStats]]

_task_stats_adapter = TypeAdapter(TaskStats)


class TaskMetadataClient:
    """
    A client for the ECS task metadata endpoint (v3) exposed to every container of the task.

    Each call makes up to `max_attempts` GET requests, waiting `retry_delay` seconds between them,
    as long as the endpoint can't be reached or answers with a non-200 status.
    A body that can't be parsed fails the call right away.
    """

    def __init__(
            self,
            base_url: str,
            session: Optional[requests.Session] = None,
            timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
            max_attempts: int = DEFAULT_MAX_ATTEMPTS,
            retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
    ):
        self.task_metadata_url = TASK_METADATA_PATH.format(base=base_url)
        self.task_stats_url = TASK_STATS_PATH.format(base=base_url)
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    def get_task_metadata(self) -> TaskMetadata:
        body = self._get_json(self.task_metadata_url)
        try:
            return TaskMetadata.model_validate(body)
        except ValidationError as e:
            raise MetadataParseError(
                endpoint=self.task_metadata_url,
                message=f"Unable to parse task metadata: {e}",
            ) from e

    def get_task_stats(self) -> TaskStats:
        """
        Returns the stats of every container of the task keyed by docker id.
        A `None` value means the agent has no stats for that container at the moment.
        """
        body = self._get_json(self.task_stats_url)
        try:
            return _task_stats_adapter.validate_python(body)
        except ValidationError as e:
            raise MetadataParseError(
                endpoint=self.task_stats_url,
                message=f"Unable to parse task stats: {e}",
            ) from e

    def _get_json(self, url: str):
        response = self._get_with_retries(url)
        try:
            return response.json()
        except ValueError as e:
            raise MetadataParseError(endpoint=url, message=f"Unable to parse response body from '{url}': {e}") from e

    def _get_with_retries(self, url: str) -> requests.Response:
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._get_once(url)
            except requests.RequestException as e:
                last_error = e
                logger.warning(
                    f"Attempt [{attempt}/{self.max_attempts}]: unable to get metadata response from '{url}': {e}"
                )
            if attempt < self.max_attempts:
                time.sleep(self.retry_delay)

        raise MetadataFetchError(
            endpoint=url,
            attempts=self.max_attempts,
            message=f"Unable to get metadata response from '{url}' after {self.max_attempts} attempts: {last_error}",
        )

    def _get_once(self, url: str) -> requests.Response:
        response = self.session.get(url, timeout=self.timeout)
        if response.status_code != HTTPStatus.OK:
            raise requests.HTTPError(f"Incorrect status code {response.status_code}", response=response)
        return response
