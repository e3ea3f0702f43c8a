"""API routes for the ShardGov server."""

import logging
from typing import Callable, TypeVar

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shardgov import __version__
from shardgov.config.schema import ShardGovConfig
from shardgov.errors import (
    GovernanceError,
    MalformedConfiguration,
    PreconditionViolation,
    StoreUnavailable,
)
from shardgov.governance.models import ResponseResult, StatusUpdate
from shardgov.governance.service import GovernanceService

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Error class -> (HTTP status, error code)
ERROR_RESPONSES: dict[type[GovernanceError], tuple[int, str]] = {
    StoreUnavailable: (503, "STORE_UNAVAILABLE"),
    PreconditionViolation: (500, "PRECONDITION_VIOLATION"),
    MalformedConfiguration: (422, "MALFORMED_CONFIGURATION"),
}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    registry: str
    schemas: int | None = None


def _failure(error: GovernanceError) -> JSONResponse:
    status_code, error_code = ERROR_RESPONSES.get(type(error), (500, "GOVERNANCE_ERROR"))
    logger.warning(f"{error_code}: {error}")
    body = ResponseResult(success=False, error_code=error_code, error_msg=str(error))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _respond(operation: Callable[[], T]) -> ResponseResult | JSONResponse:
    try:
        return ResponseResult(model=operation())
    except GovernanceError as e:
        return _failure(e)


def create_router(config: ShardGovConfig, service: GovernanceService) -> APIRouter:
    """Create API router over a governance service.

    Args:
        config: ShardGov configuration
        service: Governance service bound to the registry center

    Returns:
        Configured API router
    """
    router = APIRouter()
    governance = APIRouter(prefix="/api/governance", tags=["governance"])

    @router.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        """Health check endpoint. Reports how many schemas the store declares."""
        try:
            schemas: int | None = len(service.schema_service.get_all_schema_names())
            status = "healthy"
        except StoreUnavailable as e:
            logger.warning(f"Health check could not reach the registry center: {e}")
            schemas = None
            status = "degraded"
        return HealthResponse(
            status=status,
            version=__version__,
            registry=config.registry.backend,
            schemas=schemas,
        )

    @governance.get("/instances", response_model=ResponseResult)
    def list_instances():
        """List proxy instances with their enabled flag."""
        return _respond(service.get_all_instances)

    @governance.put("/instance/{instance_id}/status", response_model=ResponseResult)
    def update_instance_status(instance_id: str, request: StatusUpdate):
        """Enable or disable a proxy instance."""
        return _respond(lambda: service.update_instance_status(instance_id, request.enabled))

    @governance.get("/replica-data-sources", response_model=ResponseResult)
    def list_replica_data_sources():
        """List replica data sources declared by schema rules."""
        return _respond(service.get_all_replica_data_sources)

    @governance.put(
        "/replica-data-source/{schema_name}/{data_source_name}/status",
        response_model=ResponseResult,
    )
    def update_replica_data_source_status(
        schema_name: str, data_source_name: str, request: StatusUpdate
    ):
        """Enable or disable a replica data source."""
        return _respond(
            lambda: service.update_replica_data_source_status(
                schema_name, data_source_name, request.enabled
            )
        )

    router.include_router(governance)
    return router
