"""Interaction primitives for a flaky remote UI.

``fill_field`` retries focus-and-write a bounded number of times.
``best_effort`` runs a step whose failure is intentionally ignored.
"""

import logging
from collections.abc import Awaitable, Callable

from src.core.exceptions import ElementTimeoutError
from src.tools.browser import BrowserSession

logger = logging.getLogger(__name__)

FILL_ATTEMPTS = 3


async def fill_field(
    session: BrowserSession,
    selector: str,
    value: str,
    *,
    visible_timeout_ms: int = 15_000,
    action_timeout_ms: int = 3_000,
    attempts: int = FILL_ATTEMPTS,
    focus_pause_ms: int = 500,
    backoff_ms: int = 1_000,
) -> bool:
    """Write ``value`` into ``selector``; True on success.

    A field that never becomes visible, or whose visibility wait errors,
    fails immediately without retries.
    """
    try:
        await session.wait_for(selector, state="visible", timeout_ms=visible_timeout_ms)
    except ElementTimeoutError:
        logger.warning("Field %s never became visible", selector)
        return False
    except Exception as e:
        logger.warning("Waiting for field %s failed: %s", selector, e)
        return False

    for attempt in range(1, attempts + 1):
        try:
            await session.click(selector, timeout_ms=action_timeout_ms)
            await session.pause(focus_pause_ms)
            await session.fill(selector, value, timeout_ms=action_timeout_ms)
            return True
        except Exception as e:
            logger.debug("Fill %s attempt %d/%d failed: %s", selector, attempt, attempts, e)
            await session.pause(backoff_ms)

    logger.warning("Field %s could not be filled after %d attempts", selector, attempts)
    return False


async def best_effort(name: str, step: Callable[[], Awaitable[object]]) -> bool:
    """Run ``step``; a failure is logged and reported as False, never raised."""
    try:
        await step()
        return True
    except Exception as e:
        logger.debug("Best-effort step %s skipped: %s", name, e)
        return False
