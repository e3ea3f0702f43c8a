"""Data transfer objects returned by governance operations."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Serializes to camelCase, accepts both spellings on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InstanceDTO(_CamelModel):
    """A proxy instance and whether it accepts traffic."""

    instance_id: str
    enabled: bool


class ReplicaDataSourceDTO(_CamelModel):
    """One primary to replica edge of a schema's replica topology."""

    schema_name: str
    primary_data_source_name: str
    replica_data_source_name: str
    enabled: bool


class StatusUpdate(_CamelModel):
    """Request body for status updates."""

    enabled: bool


class ResponseResult(_CamelModel):
    """Envelope wrapping every governance API response."""

    success: bool = True
    error_code: str | None = None
    error_msg: str | None = None
    model: Any = Field(default=None, description="Response payload")
