from typing import Optional


class MetadataClientError(Exception):
    """Base class for failures talking to the task metadata endpoint."""

    def __init__(self, *, endpoint: str, message: str):
        self.endpoint = endpoint
        self.message = message
        super().__init__(self.message)


class MetadataFetchError(MetadataClientError):
    """
    Raise when every attempt to reach the task metadata endpoint failed
    (transport error or non-200 status).
    """

    def __init__(self, *, endpoint: str, attempts: int, message: Optional[str] = None):
        self.attempts = attempts
        super().__init__(
            endpoint=endpoint,
            message=message or f"Unable to get metadata response from '{endpoint}' after {attempts} attempts",
        )


class MetadataParseError(MetadataClientError):
    """Raise if the task metadata endpoint returned a body we could not parse. Never retried."""

    def __init__(self, *, endpoint: str, message: Optional[str] = None):
        super().__init__(endpoint=endpoint, message=message or f"Unable to parse response body from '{endpoint}'")


class MetricPublishError(Exception):
    def __init__(self, *, namespace: str, metrics_count: int, message: Optional[str] = None):
        self.namespace = namespace
        self.metrics_count = metrics_count
        self.message = message or f"Unable to put {metrics_count} metrics to namespace {namespace}"
        super().__init__(self.message)


class InvalidTaskArnException(Exception):
    def __init__(self, task_arn: str):
        self.task_arn = task_arn
        self.message = f"Unable to detect aws region from task ARN {task_arn=}"
        super().__init__(self.message)
