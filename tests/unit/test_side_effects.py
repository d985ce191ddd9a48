"""Tests for best-effort side effect execution."""

from unittest.mock import AsyncMock

import pytest

from src.projecthub.core.side_effects import run_best_effort

pytestmark = pytest.mark.unit


class TestRunBestEffort:
    async def test_success_returns_true(self):
        effect = AsyncMock()

        assert await run_best_effort("owner_notification", effect) is True
        effect.assert_awaited_once()

    async def test_failure_is_swallowed(self):
        effect = AsyncMock(side_effect=RuntimeError("db down"))

        assert await run_best_effort("owner_notification", effect) is False

    async def test_failure_is_logged_with_context(self, capturing_logger):
        effect = AsyncMock(side_effect=RuntimeError("db down"))

        await run_best_effort("status_change_email", effect, project_id="p-1")

        warnings = [c for c in capturing_logger.calls if c.method_name == "warning"]
        assert len(warnings) == 1
        kwargs = warnings[0].kwargs
        assert kwargs["side_effect"] == "status_change_email"
        assert kwargs["error"] == "db down"
        assert kwargs["error_type"] == "RuntimeError"
        assert kwargs["project_id"] == "p-1"

    async def test_success_is_logged_at_debug(self, capturing_logger):
        await run_best_effort("image_delete", AsyncMock(), project_id="p-2")

        debug = [c for c in capturing_logger.calls if c.method_name == "debug"]
        assert len(debug) == 1
        assert debug[0].kwargs["side_effect"] == "image_delete"
        assert debug[0].kwargs["project_id"] == "p-2"
