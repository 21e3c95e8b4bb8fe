"""Remote browser capability.

``BrowserSession`` is the narrow interface the automation layer drives: one
exclusive browser plus page, closed when the run ends. ``PlaywrightSession``
is the production implementation (headless Chromium with stealth patches).
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Literal, Protocol

from src.core.config import Settings
from src.core.exceptions import BrowserUnavailableError, ElementTimeoutError

logger = logging.getLogger(__name__)

_REALISTIC_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/133.0.0.0 Safari/537.36"
)
_STEALTH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-first-run",
    "--no-default-browser-check",
    "--disable-infobars",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
]

LoadState = Literal["load", "domcontentloaded", "networkidle", "commit"]
ElementState = Literal["attached", "detached", "visible", "hidden"]


class BrowserSession(Protocol):
    """Minimal remote-control surface consumed by the automation run."""

    async def goto(
        self, url: str, wait_until: LoadState = "domcontentloaded", timeout_ms: int = 30_000
    ) -> None: ...

    async def count(self, selector: str) -> int: ...

    async def wait_for(
        self, selector: str, state: ElementState = "visible", timeout_ms: int = 30_000
    ) -> None:
        """Raise ElementTimeoutError if ``selector`` does not reach ``state``."""
        ...

    async def click(self, selector: str, timeout_ms: int | None = None) -> None: ...

    async def fill(self, selector: str, value: str, timeout_ms: int | None = None) -> None: ...

    async def screenshot(self) -> bytes: ...

    async def pause(self, ms: int) -> None: ...

    async def close(self) -> None: ...


SessionFactory = Callable[[], Awaitable[BrowserSession]]


class PlaywrightSession:
    """BrowserSession backed by Playwright's async API."""

    def __init__(self, playwright: Any, browser: Any, page: Any) -> None:
        self._playwright = playwright
        self._browser = browser
        self._page = page

    @classmethod
    async def launch(cls, headless: bool = True) -> "PlaywrightSession":
        try:
            from playwright.async_api import async_playwright
            from playwright_stealth import Stealth
        except ImportError as e:
            raise BrowserUnavailableError(
                "Playwright is not available. Install playwright and run "
                "'playwright install chromium'."
            ) from e

        pw = await async_playwright().start()
        try:
            browser = await pw.chromium.launch(headless=headless, args=_STEALTH_ARGS)
            context = await browser.new_context(user_agent=_REALISTIC_UA)
            await Stealth().apply_stealth_async(context)
            page = await context.new_page()
        except Exception:
            await pw.stop()
            raise
        logger.debug("Playwright session opened (headless=%s)", headless)
        return cls(pw, browser, page)

    async def goto(
        self, url: str, wait_until: LoadState = "domcontentloaded", timeout_ms: int = 30_000
    ) -> None:
        await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)

    async def count(self, selector: str) -> int:
        return await self._page.locator(selector).count()

    async def wait_for(
        self, selector: str, state: ElementState = "visible", timeout_ms: int = 30_000
    ) -> None:
        from playwright.async_api import TimeoutError as PlaywrightTimeoutError

        try:
            await self._page.locator(selector).first.wait_for(state=state, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ElementTimeoutError(
                f"{selector} not {state} after {timeout_ms}ms"
            ) from e

    async def click(self, selector: str, timeout_ms: int | None = None) -> None:
        await self._page.locator(selector).first.click(timeout=timeout_ms)

    async def fill(self, selector: str, value: str, timeout_ms: int | None = None) -> None:
        await self._page.locator(selector).first.fill(value, timeout=timeout_ms)

    async def screenshot(self) -> bytes:
        return await self._page.screenshot(type="png")

    async def pause(self, ms: int) -> None:
        await self._page.wait_for_timeout(ms)

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()
        logger.debug("Playwright session closed")


def playwright_session_factory(settings: Settings) -> SessionFactory:
    """Session factory honouring the configured headless mode."""

    async def open_session() -> BrowserSession:
        return await PlaywrightSession.launch(headless=settings.browser_headless)

    return open_session
