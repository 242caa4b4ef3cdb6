"""
Health check implementations for the application.
"""

from typing import Any, Dict, Optional

from jobinsight.config.database import get_database_health
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.date_window import utcnow

logger = get_logger(__name__)


class HealthChecker:
    """Health checker for application components."""

    def __init__(self, scheduler=None):
        self.scheduler = scheduler
        self.checks = {
            "database": self._check_database,
            "scheduler": self._check_scheduler,
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

    async def _check_scheduler(self) -> Dict[str, Any]:
        # Scheduling is optional; its absence does not make the service unhealthy
        if self.scheduler is None:
            return {"status": "disabled"}
        stats = self.scheduler.get_stats()
        return {
            "status": "healthy" if stats["is_running"] else "stopped",
            "triggers": stats["triggers"],
        }

    async def check_readiness(self) -> bool:
        """Ready when the database answers."""
        results = await self.run_health_checks()
        return results.get("database", {}).get("status") == "healthy"

    async def get_overall_health(self, timestamp: Optional[str] = None) -> Dict[str, Any]:
        results = await self.run_health_checks()
        database_healthy = results.get("database", {}).get("status") == "healthy"
        return {
            "status": "healthy" if database_healthy else "unhealthy",
            "timestamp": timestamp or utcnow().isoformat() + "Z",
            "services": results,
        }
