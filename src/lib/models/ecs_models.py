from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.lib.constants import PAUSE_CONTAINER_TYPE, TASK_KNOWN_STATUS_RUNNING
from src.lib.exceptions import InvalidTaskArnException


class BaseTaskMetadataModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class LimitsResponse(BaseTaskMetadataModel):
    cpu: Optional[float] = Field(default=None, alias="CPU")
    memory: Optional[int] = Field(default=None, alias="Memory")


class ContainerMetadata(BaseTaskMetadataModel):
    docker_id: str = Field(alias="DockerId")
    name: str = Field(default="", alias="Name")
    docker_name: str = Field(default="", alias="DockerName")
    image: Optional[str] = Field(default=None, alias="Image")
    image_id: Optional[str] = Field(default=None, alias="ImageID")
    desired_status: Optional[str] = Field(default=None, alias="DesiredStatus")
    known_status: Optional[str] = Field(default=None, alias="KnownStatus")
    type: str = Field(default="", alias="Type")
    labels: Dict[str, str] = Field(default_factory=dict, alias="Labels")
    limits: Optional[LimitsResponse] = Field(default=None, alias="Limits")

    @property
    def is_pause_container(self) -> bool:
        return self.type == PAUSE_CONTAINER_TYPE


class TaskMetadata(BaseTaskMetadataModel):
    """
    Task metadata as returned by `GET ${ECS_CONTAINER_METADATA_URI}/task`
    """
    cluster: str = Field(default="", alias="Cluster")
    task_arn: str = Field(default="", alias="TaskARN")
    family: Optional[str] = Field(default=None, alias="Family")
    revision: Optional[str] = Field(default=None, alias="Revision")
    desired_status: Optional[str] = Field(default=None, alias="DesiredStatus")
    known_status: str = Field(default="", alias="KnownStatus")
    availability_zone: Optional[str] = Field(default=None, alias="AvailabilityZone")
    containers: List[ContainerMetadata] = Field(default_factory=list, alias="Containers")
    limits: Optional[LimitsResponse] = Field(default=None, alias="Limits")

    @property
    def is_running(self) -> bool:
        return self.known_status == TASK_KNOWN_STATUS_RUNNING

    @property
    def region(self) -> str:
        # arn:aws:ecs:<region>:<account_id>:task/<cluster>/<task_id>
        arn_parts = self.task_arn.split(":")
        if len(arn_parts) < 4 or not arn_parts[3]:
            raise InvalidTaskArnException(self.task_arn)
        return arn_parts[3]
