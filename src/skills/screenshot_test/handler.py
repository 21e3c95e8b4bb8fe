"""Screenshot test skill: proves the browser works by capturing a page."""

import logging
from typing import Any

from src.core.observability import traced
from src.core.schemas.chat import AgentRequest, ScreenshotMessage, agent_text
from src.skills.base import SkillResult
from src.tools.browser import BrowserSession, SessionFactory

logger = logging.getLogger(__name__)

TRIGGER = "screenshot test"
TEST_PAGE_URL = "https://google.com"


def is_screenshot_test(message: str) -> bool:
    return TRIGGER in message.lower()


class ScreenshotTestSkill:
    name = "screenshot_test"
    intents = ["screenshot_test"]

    def __init__(self, session_factory: SessionFactory, navigation_timeout_ms: int = 30_000):
        self._session_factory = session_factory
        self._navigation_timeout_ms = navigation_timeout_ms

    @traced("screenshot_test", capture_output=False)
    async def execute(
        self,
        request: AgentRequest,
        intent_data: dict[str, Any],
    ) -> SkillResult:
        session: BrowserSession | None = None
        try:
            session = await self._session_factory()
            await session.goto(
                TEST_PAGE_URL, wait_until="load", timeout_ms=self._navigation_timeout_ms
            )
            png = await session.screenshot()
        except Exception as e:
            logger.exception("Screenshot test failed")
            return SkillResult.reply(agent_text(f"Screenshot test failed: {e}"))
        finally:
            if session is not None:
                try:
                    await session.close()
                except Exception as e:
                    logger.warning("Failed to close browser session: %s", e)
        return SkillResult.reply(ScreenshotMessage.from_png(png))
