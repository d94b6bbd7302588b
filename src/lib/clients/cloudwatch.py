from typing import List

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.lib.constants import CLOUDWATCH_CLIENT_NAME
from src.lib.constants import CLOUDWATCH_MAX_METRIC_DATA_PER_REQUEST
from src.lib.constants import CLOUDWATCH_NAMESPACE
from src.lib.exceptions import MetricPublishError
from src.lib.logger import logger
from src.lib.models.metric_models import MetricDatum

CLOUDWATCH_CLIENT_CONFIG = Config(connect_timeout=5, read_timeout=10, retries={'max_attempts': 2})


class CloudWatchMetricsClient:
    """
    A client for publishing metrics to AWS CloudWatch
    """

    def __init__(self, region_name: str, namespace: str = CLOUDWATCH_NAMESPACE, client=None):
        self.namespace = namespace
        self.client = client or boto3.client(
            CLOUDWATCH_CLIENT_NAME,
            region_name=region_name,
            config=CLOUDWATCH_CLIENT_CONFIG,
        )

    def put_metrics(self, metrics: List[MetricDatum]) -> None:
        """
        Sends the whole batch with a single PutMetricData call.
        Batches are not split, an oversized batch is rejected by CloudWatch.
        """
        if not metrics:
            return

        if len(metrics) > CLOUDWATCH_MAX_METRIC_DATA_PER_REQUEST:
            logger.warning(
                f"Sending {len(metrics)} metrics in a single request, "
                f"CloudWatch accepts up to {CLOUDWATCH_MAX_METRIC_DATA_PER_REQUEST}"
            )

        try:
            self.client.put_metric_data(
                Namespace=self.namespace,
                MetricData=[metric.to_cloudwatch() for metric in metrics],
            )
        except (BotoCoreError, ClientError) as e:
            raise MetricPublishError(
                namespace=self.namespace,
                metrics_count=len(metrics),
                message=f"Unable to put {len(metrics)} metrics to namespace {self.namespace}: {e}",
            ) from e

        logger.debug(f"Put {len(metrics)} metrics to namespace {self.namespace}")
