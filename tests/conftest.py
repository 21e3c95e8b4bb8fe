"""Test fixtures for the webmail agent."""

import os

import pytest

# Set test environment before importing app modules
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from src.core.schemas.intent import EmailIntent
from src.orchestrators.webmail.provider import GMAIL
from src.orchestrators.webmail.state import AutomationTimings
from src.tools.mock_browser import MockBrowserSession

# Everything a clean login-and-compose run waits on
HAPPY_VISIBLE = {
    GMAIL.password_input,
    GMAIL.inbox_marker,
    GMAIL.recipient_field,
    GMAIL.subject_field,
    GMAIL.body_field,
}


@pytest.fixture
def make_session():
    """Build a mock session where every checkpoint passes unless overridden."""

    def _make(session_cls=MockBrowserSession, **overrides) -> MockBrowserSession:
        overrides.setdefault("visible", set(HAPPY_VISIBLE))
        return session_cls(**overrides)

    return _make


@pytest.fixture
def complete_intent():
    return EmailIntent(
        email="myacct@gmail.com",
        password="secret",
        to="bob@x.com",
        subject="Hi",
        body="Hello",
    )


@pytest.fixture
def fast_timings():
    """Real step order with no waiting."""
    return AutomationTimings(
        navigation_timeout_ms=10,
        email_settle_ms=0,
        password_field_timeout_ms=10,
        password_settle_ms=0,
        inbox_settle_ms=0,
        compose_settle_ms=0,
        overlay_dismiss_timeout_ms=10,
        field_visible_timeout_ms=10,
        field_action_timeout_ms=10,
        fill_attempts=3,
        fill_focus_pause_ms=0,
        fill_backoff_ms=0,
        send_settle_ms=0,
    )
