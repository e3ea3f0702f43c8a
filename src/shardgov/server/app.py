"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shardgov import __version__
from shardgov.config.schema import ShardGovConfig
from shardgov.governance.schema import ShardingSchemaService
from shardgov.governance.service import GovernanceService
from shardgov.registry.store import create_registry_center
from shardgov.server.routes import create_router


def create_service(config: ShardGovConfig) -> GovernanceService:
    """Build a governance service on the configured registry center."""
    registry_center = create_registry_center(config.registry)
    return GovernanceService(registry_center, ShardingSchemaService(registry_center))


def create_app(config: ShardGovConfig, service: Optional[GovernanceService] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: ShardGov configuration
        service: Governance service to expose. Built from the config if None.

    Returns:
        Configured FastAPI app
    """
    if service is None:
        service = create_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        service.registry_center.close()

    app = FastAPI(
        title="ShardGov",
        description="Governance API for sharded database proxy clusters",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_router(config, service))

    return app
