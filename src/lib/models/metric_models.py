from typing import Any, Dict, List

from pydantic import BaseModel

from src.lib.constants import CLUSTER_NAME_DIMENSION, CONTAINER_NAME_DIMENSION, METRIC_UNIT_PERCENT


class Dimension(BaseModel):
    name: str
    value: str


class MetricDatum(BaseModel):
    metric_name: str
    value: float
    unit: str = METRIC_UNIT_PERCENT
    dimensions: List[Dimension]

    @classmethod
    def for_container(cls, *, metric_name: str, value: float, cluster_name: str, container_name: str) -> "MetricDatum":
        return cls(
            metric_name=metric_name,
            value=value,
            dimensions=[
                Dimension(name=CLUSTER_NAME_DIMENSION, value=cluster_name),
                Dimension(name=CONTAINER_NAME_DIMENSION, value=container_name),
            ],
        )

    def to_cloudwatch(self) -> Dict[str, Any]:
        return {
            'MetricName': self.metric_name,
            'Unit': self.unit,
            'Value': self.value,
            'Dimensions': [{'Name': dimension.name, 'Value': dimension.value} for dimension in self.dimensions],
        }
