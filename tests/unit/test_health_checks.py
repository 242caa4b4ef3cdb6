"""
Unit tests for HealthChecker.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from jobinsight.infrastructure.monitoring.health_checks import HealthChecker

DATABASE_HEALTH = "jobinsight.infrastructure.monitoring.health_checks.get_database_health"


class TestHealthChecker:
    """Test cases for HealthChecker."""

    @pytest.mark.asyncio
    async def test_scheduler_disabled_is_still_healthy(self):
        with patch(
            DATABASE_HEALTH,
            AsyncMock(return_value={"status": "healthy", "response_time_ms": 1.2}),
        ):
            health = await HealthChecker().get_overall_health("2026-10-14T12:00:00Z")

        assert health["status"] == "healthy"
        assert health["timestamp"] == "2026-10-14T12:00:00Z"
        assert health["services"]["scheduler"] == {"status": "disabled"}

    @pytest.mark.asyncio
    async def test_stopped_scheduler_reports_triggers(self):
        scheduler = MagicMock()
        scheduler.get_stats.return_value = {
            "is_running": False,
            "triggers": {"daily-metrics": {"runs": 2, "failures": 1}},
        }

        with patch(DATABASE_HEALTH, AsyncMock(return_value={"status": "healthy"})):
            results = await HealthChecker(scheduler).run_health_checks()

        assert results["scheduler"]["status"] == "stopped"
        assert results["scheduler"]["triggers"]["daily-metrics"]["failures"] == 1

    @pytest.mark.asyncio
    async def test_not_ready_without_database(self):
        with patch(
            DATABASE_HEALTH,
            AsyncMock(return_value={"status": "unhealthy", "error": "refused"}),
        ):
            checker = HealthChecker()
            ready = await checker.check_readiness()
            health = await checker.get_overall_health()

        assert ready is False
        assert health["status"] == "unhealthy"
        assert health["services"]["database"]["error"] == "refused"

    @pytest.mark.asyncio
    async def test_failing_check_is_reported_not_raised(self):
        with patch(DATABASE_HEALTH, AsyncMock(side_effect=RuntimeError("boom"))):
            results = await HealthChecker().run_health_checks()

        assert results["database"] == {"status": "error", "error": "boom"}
