"""Pydantic models for shardgov.yaml configuration."""

from typing import Literal

from pydantic import BaseModel, Field


class RegistryConfig(BaseModel):
    """Coordination store (registry center) configuration."""

    backend: Literal["memory", "etcd"] = Field(
        default="memory",
        description="Store backend: 'memory' for a local in-process tree, 'etcd' for an etcd v3 cluster",
    )
    server_lists: str = Field(
        default="http://localhost:2379",
        description="Base URL of the etcd v3 JSON gateway",
    )
    namespace: str = Field(
        default="governance_ds",
        description="Namespace prepended to every node path",
    )
    timeout: float = Field(default=5.0, description="Store request timeout in seconds", gt=0)
    seed: dict[str, str] = Field(
        default_factory=dict,
        description="Node path to value pairs preloaded into the memory backend",
    )


class ServerConfig(BaseModel):
    """API server configuration."""

    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=8088, description="Server port", ge=1, le=65535)
    cors_origins: list[str] = Field(
        default=["http://localhost:8080"],
        description="Allowed CORS origins for the console UI",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level for the shardgov logger",
    )
    rich: bool = Field(default=True, description="Render log records with rich")


class ShardGovConfig(BaseModel):
    """Root configuration schema for ShardGov."""

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
