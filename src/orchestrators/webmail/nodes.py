"""Webmail automation graph nodes.

One node per checkpoint. A node that hits a provider-imposed obstacle
appends a diagnostic screenshot and an explanation, then sets ``outcome`` so
the graph stops. Progress messages are emitted by the node *before* the one
that performs the announced action, so they survive if that action raises.
"""

import logging
from functools import partial
from typing import Any

from langchain_core.runnables import RunnableConfig

from src.core.exceptions import ElementTimeoutError
from src.core.schemas.chat import ChatMessage, ScreenshotMessage, agent_text
from src.orchestrators.webmail.state import RunDeps, RunOutcome, WebmailRunState
from src.tools.interaction import best_effort, fill_field

logger = logging.getLogger(__name__)

STEP_OPENING = "Step 1/5: Opening {provider} and entering your email..."
STEP_PASSWORD = "Step 2/5: Entering your password..."
STEP_LOGGED_IN = "Step 3/5: Successfully logged in! This is your inbox."
STEP_COMPOSING = "Step 4/5: Composing your email..."
STEP_SENDING = "Step 5/5: Email is ready! Sending now..."
DONE_MESSAGE = "All done! Here is a screenshot after sending:"

CAPTCHA_MESSAGE = (
    "Blocked by Captcha or security check. Please review your {provider} account "
    "and ensure automation is allowed."
)
PASSWORD_TIMEOUT_MESSAGE = (
    "Could not find password field (possibly security roadblock or wrong email)."
)
SECURITY_MESSAGE = (
    "Blocked by extra {provider} security check or 2FA. Please disable these "
    "(for test account only) or try again."
)
COMPOSE_FAILURE_MESSAGE = (
    "Could not fill one or more compose fields after retries. {provider} may "
    "require manual focus or has overlays active."
)


def _deps(config: RunnableConfig) -> RunDeps:
    return config["configurable"]["deps"]


async def _screenshot(deps: RunDeps) -> ScreenshotMessage:
    return ScreenshotMessage.from_png(await deps.session.screenshot())


async def _blocked(deps: RunDeps, outcome: RunOutcome, text: str, *before: ChatMessage) -> dict:
    """Terminal report: diagnostic screenshot followed by the explanation."""
    logger.info("Webmail run stopped: %s", outcome)
    shot = await _screenshot(deps)
    return {"narrative": [*before, shot, agent_text(text)], "outcome": outcome}


async def _any_present(deps: RunDeps, selectors: tuple[str, ...]) -> bool:
    for selector in selectors:
        if await deps.session.count(selector) > 0:
            logger.debug("Checkpoint marker present: %s", selector)
            return True
    return False


async def navigate_inbox(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    await deps.session.goto(
        deps.provider.login_url,
        wait_until="domcontentloaded",
        timeout_ms=deps.timings.navigation_timeout_ms,
    )
    return {"narrative": [agent_text(STEP_OPENING.format(provider=deps.provider.name))]}


async def enter_email(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    await deps.session.fill(deps.provider.email_input, state["intent"].email)
    await deps.session.click(deps.provider.next_button)
    await deps.session.pause(deps.timings.email_settle_ms)
    return {"narrative": []}


async def captcha_check(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    if await _any_present(deps, deps.provider.captcha_markers):
        return await _blocked(
            deps,
            RunOutcome.captcha_blocked,
            CAPTCHA_MESSAGE.format(provider=deps.provider.name),
        )
    return {"narrative": []}


async def await_password_field(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    announce = agent_text(STEP_PASSWORD)
    try:
        await deps.session.wait_for(
            deps.provider.password_input,
            state="visible",
            timeout_ms=deps.timings.password_field_timeout_ms,
        )
    except ElementTimeoutError:
        return await _blocked(
            deps, RunOutcome.password_field_timeout, PASSWORD_TIMEOUT_MESSAGE, announce
        )
    return {"narrative": [announce]}


async def enter_password(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    await deps.session.fill(deps.provider.password_input, state["intent"].password)
    await deps.session.click(deps.provider.next_button)
    await deps.session.pause(deps.timings.password_settle_ms)
    return {"narrative": []}


async def security_check(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    if await _any_present(deps, deps.provider.security_markers):
        return await _blocked(
            deps,
            RunOutcome.security_blocked,
            SECURITY_MESSAGE.format(provider=deps.provider.name),
        )
    return {"narrative": []}


async def confirm_inbox(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    await deps.session.pause(deps.timings.inbox_settle_ms)
    await best_effort(
        "await_inbox",
        lambda: deps.session.wait_for(
            deps.provider.inbox_marker,
            state="visible",
            timeout_ms=deps.timings.navigation_timeout_ms,
        ),
    )
    shot = await _screenshot(deps)
    logger.info("Webmail run reached inbox")
    return {"narrative": [agent_text(STEP_LOGGED_IN), shot, agent_text(STEP_COMPOSING)]}


async def open_compose(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    await deps.session.click(deps.provider.compose_button)
    await deps.session.pause(deps.timings.compose_settle_ms)
    return {"narrative": []}


async def dismiss_overlays(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    for selector in deps.provider.overlay_buttons:
        await best_effort(
            f"dismiss {selector}",
            partial(
                deps.session.click, selector, timeout_ms=deps.timings.overlay_dismiss_timeout_ms
            ),
        )
    return {"narrative": []}


async def fill_compose(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    """Fill recipient, subject and body in that order; all or nothing."""
    deps = _deps(config)
    intent = state["intent"]
    timings = deps.timings
    for step, selector, value in (
        ("FillRecipient", deps.provider.recipient_field, intent.to),
        ("FillSubject", deps.provider.subject_field, intent.subject),
        ("FillBody", deps.provider.body_field, intent.body),
    ):
        ok = await fill_field(
            deps.session,
            selector,
            value,
            visible_timeout_ms=timings.field_visible_timeout_ms,
            action_timeout_ms=timings.field_action_timeout_ms,
            attempts=timings.fill_attempts,
            focus_pause_ms=timings.fill_focus_pause_ms,
            backoff_ms=timings.fill_backoff_ms,
        )
        if not ok:
            logger.warning("Compose stage aborted at %s", step)
            return await _blocked(
                deps,
                RunOutcome.compose_fill_failure,
                COMPOSE_FAILURE_MESSAGE.format(provider=deps.provider.name),
            )
    return {"narrative": []}


async def prepare_send(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    shot = await _screenshot(deps)
    return {"narrative": [shot, agent_text(STEP_SENDING)]}


async def send_message(state: WebmailRunState, config: RunnableConfig) -> dict[str, Any]:
    deps = _deps(config)
    await deps.session.click(deps.provider.send_button)
    await deps.session.pause(deps.timings.send_settle_ms)
    shot = await _screenshot(deps)
    logger.info("Webmail run sent message")
    return {"narrative": [agent_text(DONE_MESSAGE), shot], "outcome": RunOutcome.sent}


def route_after_checkpoint(state: WebmailRunState) -> str:
    """Stop the run once a checkpoint recorded a terminal outcome."""
    return "stop" if state.get("outcome") else "continue"
