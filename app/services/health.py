"""Health check service for monitoring application components."""
import time
import psutil
import asyncio
from datetime import datetime, timezone
from typing import Dict, Tuple
from app.schemas.health import (
    ComponentHealth,
    ConfigurationDetails,
    DatabaseDetails,
    HealthCheckResponse,
    SystemResourceDetails,
)
from app.core.config import settings
from app.core.database import db_manager


APPLICATION_START_TIME = time.time()


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 2)


class HealthCheckService:
    """Service for checking application and component health."""

    def __init__(self):
        self.version = "1.0.0"

    async def check_database(self) -> ComponentHealth:
        """Check that the database answers a trivial query."""
        start_time = time.time()

        if not db_manager.is_initialized:
            return ComponentHealth(
                status="unhealthy",
                message="Database not initialized",
                latency_ms=_elapsed_ms(start_time),
                details=DatabaseDetails(initialized=False)
            )

        is_connected = await db_manager.check_connection()

        return ComponentHealth(
            status="healthy" if is_connected else "unhealthy",
            message="Database connection successful" if is_connected else "Database connection failed",
            latency_ms=_elapsed_ms(start_time),
            details=DatabaseDetails(
                type=db_manager.dialect_name,
                initialized=True,
                connected=is_connected
            )
        )

    async def check_system_resources(self) -> ComponentHealth:
        """Check system resource usage (CPU, Memory, Disk)."""
        start_time = time.time()

        try:
            cpu_percent = await asyncio.to_thread(psutil.cpu_percent, 0.1)
            memory = psutil.virtual_memory()
            disk = psutil.disk_usage('/')
        except (psutil.Error, OSError) as e:
            return ComponentHealth(
                status="unhealthy",
                message=f"System resource check failed: {e}",
                latency_ms=_elapsed_ms(start_time)
            )

        status = "healthy"
        message = "System resources within normal limits"
        if cpu_percent > 90 or memory.percent > 90 or disk.percent > 90:
            status = "unhealthy"
            message = "System resources critically high"
        elif cpu_percent > 75 or memory.percent > 75 or disk.percent > 85:
            status = "degraded"
            message = "System resources elevated"

        return ComponentHealth(
            status=status,
            message=message,
            latency_ms=_elapsed_ms(start_time),
            details=SystemResourceDetails(
                cpu_percent=round(cpu_percent, 2),
                memory_percent=round(memory.percent, 2),
                memory_available_mb=round(memory.available / (1024 * 1024), 2),
                disk_percent=round(disk.percent, 2),
                disk_free_gb=round(disk.free / (1024 * 1024 * 1024), 2)
            )
        )

    async def check_configuration(self) -> ComponentHealth:
        """Check application configuration validity."""
        start_time = time.time()
        issues = []

        if settings.ENVIRONMENT == "prod":
            if len(settings.SECRET_KEY) < 32:
                issues.append("SECRET_KEY too short for production")
            if not settings.BASE_URL.startswith("https://"):
                issues.append("BASE_URL should use HTTPS in production")
        if not settings.llm_configured:
            issues.append("LLM_API_KEY not set; categorization and insights are disabled")
        if settings.EMAIL_ENABLED and settings.EMAIL_PROVIDER == "smtp" and not settings.EMAIL_USER:
            issues.append("EMAIL_USER not set for SMTP provider")

        details = ConfigurationDetails(
            environment=settings.ENVIRONMENT,
            llm_configured=settings.llm_configured,
            email_enabled=settings.EMAIL_ENABLED,
            email_provider=settings.EMAIL_PROVIDER,
            issues=issues
        )
        if issues:
            return ComponentHealth(
                status="degraded",
                message="Configuration has issues",
                latency_ms=_elapsed_ms(start_time),
                details=details
            )

        return ComponentHealth(
            status="healthy",
            message="Configuration valid",
            latency_ms=_elapsed_ms(start_time),
            details=details
        )

    def get_uptime(self) -> float:
        """Get application uptime in seconds."""
        return time.time() - APPLICATION_START_TIME

    async def get_comprehensive_health(self) -> HealthCheckResponse:
        """Run all component checks concurrently and roll them up into one status."""
        database_health, system_health, config_health = await asyncio.gather(
            self.check_database(),
            self.check_system_resources(),
            self.check_configuration()
        )

        components = {
            "database": database_health,
            "system_resources": system_health,
            "configuration": config_health
        }

        statuses = [comp.status for comp in components.values()]
        if "unhealthy" in statuses:
            overall_status = "unhealthy"
        elif "degraded" in statuses:
            overall_status = "degraded"
        else:
            overall_status = "healthy"

        return HealthCheckResponse(
            status=overall_status,
            timestamp=datetime.now(timezone.utc),
            version=self.version,
            uptime_seconds=round(self.get_uptime(), 2),
            components=components
        )

    async def check_readiness(self) -> Tuple[bool, Dict[str, bool]]:
        """
        Check if application is ready to serve traffic.

        Returns:
            Tuple of (is_ready, checks_dict)
        """
        database_health = await self.check_database()

        checks = {
            "configuration_loaded": True,
            "database_connected": database_health.status != "unhealthy"
        }

        return all(checks.values()), checks

    def check_liveness(self) -> bool:
        return True
