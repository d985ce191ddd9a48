"""Best-effort execution of side effects.

Notifications, queued emails and stored-image cleanup must never fail the
operation that triggered them. Each side effect runs under its own boundary:
a failure is logged with structured context and control always returns to
the caller.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)

SideEffect = Callable[[], Awaitable[Any]]


async def run_best_effort(
    name: str,
    effect: SideEffect,
    **context: Any,
) -> bool:
    """Run a side effect, swallowing and logging any failure.

    Args:
        name: Short identifier of the side effect, used as the log event field.
        effect: Zero-argument coroutine function performing the side effect.
        **context: Extra structured fields attached to the log entry.

    Returns:
        True if the side effect completed, False if it failed.
    """
    try:
        await effect()
    except Exception as e:
        logger.warning(
            "Side effect failed",
            side_effect=name,
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        return False

    logger.debug("Side effect completed", side_effect=name, **context)
    return True
