"""
Health check implementations for the application.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from job_allocation.config.database import get_database_health
from job_allocation.config.logging import get_logger
from job_allocation.config.settings import settings

logger = get_logger(__name__)


@dataclass
class HealthStatus:
    """Aggregated result of the component checks."""

    is_healthy: bool
    checks: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class HealthChecker:
    """Health checker for application components."""

    critical_services = ("database",)

    def __init__(self):
        self.checks = {
            "database": self._check_database,
            "notifications": self._check_notifications,
        }

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            try:
                results[check_name] = await check_func()
            except Exception as e:
                logger.error("Health check failed", check_name=check_name, error=str(e))
                results[check_name] = {"status": "error", "error": str(e)}

        return results

    async def _check_database(self) -> Dict[str, Any]:
        """Check database health."""
        health_info = await get_database_health()

        if health_info["status"] == "healthy":
            return {
                "status": "healthy",
                "response_time_ms": health_info.get("response_time_ms", 0),
            }
        return {
            "status": "unhealthy",
            "error": health_info.get("error", "Unknown database error"),
        }

    async def _check_notifications(self) -> Dict[str, Any]:
        """Report which notification channel is configured."""
        if settings.NOTIFICATION_SERVICE_URL:
            return {"status": "healthy", "channel": "http"}
        return {"status": "healthy", "channel": "log"}

    async def check_readiness(self) -> HealthStatus:
        """Check if the service is ready to receive traffic."""
        health_results = await self.run_health_checks()

        critical_healthy = all(
            health_results.get(service, {}).get("status") == "healthy"
            for service in self.critical_services
        )

        return HealthStatus(is_healthy=critical_healthy, checks=health_results)

    async def get_overall_health(self) -> Dict[str, Any]:
        """Get overall application health status."""
        readiness = await self.check_readiness()

        return {
            "status": "healthy" if readiness.is_healthy else "unhealthy",
            "timestamp": readiness.timestamp,
            "services": readiness.checks,
            "critical_services_healthy": readiness.is_healthy,
        }


# Global health checker instance
health_checker = HealthChecker()


async def get_application_health() -> Dict[str, Any]:
    """Get application health status."""
    return await health_checker.get_overall_health()
