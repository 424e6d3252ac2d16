"""Pydantic configuration models for Waitroom.

For loading logic, see loader.py.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class StoreConfig(BaseModel):
    """Configuration for the ordered store backend."""

    backend: Literal["redis", "memory"] = Field(
        default="redis", description="Store backend: redis, or memory (single process, testing only)"
    )
    url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    max_connections: int = Field(default=50, ge=1, description="Connection pool size")
    socket_timeout: float = Field(default=5.0, gt=0, description="Socket timeout in seconds")


class SchedulerConfig(BaseModel):
    """Configuration for the admission scheduler.

    Fixed at process start; the scheduler never toggles at runtime.
    """

    enabled: bool = Field(default=False, description="Run periodic batch admission")
    batch_size: int = Field(default=100, ge=1, description="Max users admitted per queue per tick")
    interval_seconds: float = Field(default=10.0, gt=0, description="Seconds between ticks")
    initial_delay_seconds: float = Field(default=5.0, ge=0, description="Delay before the first tick")
    scan_count: int = Field(default=100, ge=1, description="SCAN COUNT hint used to discover queues")

    model_config = ConfigDict(frozen=True)


class TokenConfig(BaseModel):
    """Configuration for admission tokens and their cookie binding."""

    algorithm: str = Field(default="sha256", description="hashlib algorithm used to derive tokens")
    cookie_max_age_seconds: int = Field(default=300, ge=1, description="Token cookie lifetime")
    cookie_path: str = Field(default="/", description="Token cookie path")


class ApiConfig(BaseModel):
    """Configuration for the HTTP API."""

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=9010, description="Bind port")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    default_queue: str = Field(default="default", description="Queue used when none is given")


class LoggingConfig(BaseModel):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    directory: str = Field(default="logs", description="Directory for log files")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(default=5, description="Number of backup log files to keep")


class Config(BaseModel):
    """Root configuration for Waitroom."""

    store: StoreConfig = Field(default_factory=StoreConfig, description="Ordered store configuration")
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig, description="Admission scheduler")
    token: TokenConfig = Field(default_factory=TokenConfig, description="Admission token configuration")
    api: ApiConfig = Field(default_factory=ApiConfig, description="HTTP API configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    model_config = {"extra": "forbid"}
