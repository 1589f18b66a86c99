"""Health check schemas for monitoring application status."""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Literal, Union
from datetime import datetime, timezone


class DatabaseDetails(BaseModel):
    type: Optional[str] = Field(default=None, description="SQLAlchemy dialect name")
    initialized: bool
    connected: bool = False


class SystemResourceDetails(BaseModel):
    cpu_percent: float
    memory_percent: float
    memory_available_mb: float
    disk_percent: float
    disk_free_gb: float


class ConfigurationDetails(BaseModel):
    environment: Literal["dev", "prod"]
    llm_configured: bool = Field(description="Whether categorization and insights can reach the LLM")
    email_enabled: bool
    email_provider: str
    issues: List[str] = Field(default_factory=list)


class ComponentHealth(BaseModel):
    """Health status of a single component."""
    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        description="Component health status"
    )
    message: Optional[str] = Field(
        default=None,
        description="Additional information about the component status"
    )
    latency_ms: Optional[float] = Field(
        default=None,
        description="Component response latency in milliseconds"
    )
    details: Optional[Union[DatabaseDetails, SystemResourceDetails, ConfigurationDetails]] = Field(
        default=None,
        description="Additional component-specific details"
    )


class HealthCheckResponse(BaseModel):
    """Comprehensive health check response."""
    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        description="Overall system health status"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Time of health check"
    )
    version: str = Field(
        description="Application version"
    )
    uptime_seconds: float = Field(
        description="Application uptime in seconds"
    )
    components: Dict[str, ComponentHealth] = Field(
        description="Health status of individual components"
    )


class LivenessResponse(BaseModel):
    """Simple liveness probe response."""
    status: str = Field(default="alive")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReadinessResponse(BaseModel):
    """Readiness probe response."""
    status: Literal["ready", "not_ready"] = Field(
        description="Whether the application is ready to serve traffic"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: Dict[str, bool] = Field(
        description="Status of individual readiness checks"
    )
