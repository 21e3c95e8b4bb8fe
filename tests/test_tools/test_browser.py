"""Tests for the Playwright-backed browser session."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.core.config import Settings
from src.core.exceptions import ElementTimeoutError
from src.tools.browser import PlaywrightSession, playwright_session_factory


def _session():
    playwright = MagicMock()
    playwright.stop = AsyncMock()
    browser = MagicMock()
    browser.close = AsyncMock()
    page = MagicMock()
    return PlaywrightSession(playwright, browser, page), playwright, browser, page


async def test_count_uses_locator():
    session, _, _, page = _session()
    page.locator.return_value.count = AsyncMock(return_value=2)

    assert await session.count("iframe") == 2
    page.locator.assert_called_once_with("iframe")


async def test_wait_for_maps_timeout():
    session, _, _, page = _session()
    page.locator.return_value.first.wait_for = AsyncMock(
        side_effect=PlaywrightTimeoutError("Timeout 10ms exceeded")
    )

    with pytest.raises(ElementTimeoutError):
        await session.wait_for('input[type="password"]', timeout_ms=10)


async def test_click_and_fill_target_first_match():
    session, _, _, page = _session()
    first = page.locator.return_value.first
    first.click = AsyncMock()
    first.fill = AsyncMock()

    await session.click("button", timeout_ms=300)
    await session.fill("textarea", "bob@x.com", timeout_ms=300)

    first.click.assert_awaited_once_with(timeout=300)
    first.fill.assert_awaited_once_with("bob@x.com", timeout=300)


async def test_goto_and_screenshot():
    session, _, _, page = _session()
    page.goto = AsyncMock()
    page.screenshot = AsyncMock(return_value=b"png")

    await session.goto("https://mail.google.com/", timeout_ms=1000)
    assert await session.screenshot() == b"png"

    page.goto.assert_awaited_once_with(
        "https://mail.google.com/", wait_until="domcontentloaded", timeout=1000
    )
    page.screenshot.assert_awaited_once_with(type="png")


async def test_close_stops_playwright_even_if_browser_close_fails():
    session, playwright, browser, _ = _session()
    browser.close = AsyncMock(side_effect=RuntimeError("browser gone"))

    with pytest.raises(RuntimeError):
        await session.close()

    playwright.stop.assert_awaited_once()


async def test_factory_honours_headless_setting():
    opened = MagicMock()
    with patch.object(PlaywrightSession, "launch", new=AsyncMock(return_value=opened)) as launch:
        open_session = playwright_session_factory(Settings(browser_headless=False))
        assert await open_session() is opened

    launch.assert_awaited_once_with(headless=False)
