"""Instance and replica data source governance."""

from shardgov.governance.models import (
    InstanceDTO,
    ReplicaDataSourceDTO,
    ResponseResult,
    StatusUpdate,
)
from shardgov.governance.schema import ShardingSchemaService
from shardgov.governance.service import GovernanceService

__all__ = [
    "GovernanceService",
    "ShardingSchemaService",
    "InstanceDTO",
    "ReplicaDataSourceDTO",
    "StatusUpdate",
    "ResponseResult",
]
