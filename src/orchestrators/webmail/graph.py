"""Webmail send orchestrator — LangGraph StateGraph.

Nodes: navigate_inbox → enter_email → captcha_check → await_password_field →
enter_password → security_check → confirm_inbox → open_compose →
dismiss_overlays → fill_compose → prepare_send → send_message

Checkpoints (captcha, password field, 2FA, compose fill) end the run early.
Whatever happens, the caller gets an ordered narrative back and the browser
session is closed.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from langgraph.graph import END, StateGraph

from src.core.config import Settings
from src.core.observability import traced
from src.core.schemas.chat import ChatMessage, agent_text
from src.core.schemas.intent import EmailIntent
from src.orchestrators.webmail.nodes import (
    await_password_field,
    captcha_check,
    confirm_inbox,
    dismiss_overlays,
    enter_email,
    enter_password,
    fill_compose,
    navigate_inbox,
    open_compose,
    prepare_send,
    route_after_checkpoint,
    security_check,
    send_message,
)
from src.orchestrators.webmail.provider import GMAIL, WebmailProvider
from src.orchestrators.webmail.state import (
    AutomationTimings,
    RunDeps,
    RunOutcome,
    WebmailRunState,
)
from src.tools.browser import BrowserSession, SessionFactory, playwright_session_factory

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Email send failed: {reason}"

_CHECKPOINTS = {
    "captcha_check": "await_password_field",
    "await_password_field": "enter_password",
    "security_check": "confirm_inbox",
    "fill_compose": "prepare_send",
}


def build_webmail_graph() -> StateGraph:
    """Build the webmail send graph."""
    graph = StateGraph(WebmailRunState)

    graph.add_node("navigate_inbox", navigate_inbox)
    graph.add_node("enter_email", enter_email)
    graph.add_node("captcha_check", captcha_check)
    graph.add_node("await_password_field", await_password_field)
    graph.add_node("enter_password", enter_password)
    graph.add_node("security_check", security_check)
    graph.add_node("confirm_inbox", confirm_inbox)
    graph.add_node("open_compose", open_compose)
    graph.add_node("dismiss_overlays", dismiss_overlays)
    graph.add_node("fill_compose", fill_compose)
    graph.add_node("prepare_send", prepare_send)
    graph.add_node("send_message", send_message)

    graph.set_entry_point("navigate_inbox")
    graph.add_edge("navigate_inbox", "enter_email")
    graph.add_edge("enter_email", "captcha_check")
    graph.add_edge("enter_password", "security_check")
    graph.add_edge("confirm_inbox", "open_compose")
    graph.add_edge("open_compose", "dismiss_overlays")
    graph.add_edge("dismiss_overlays", "fill_compose")
    graph.add_edge("prepare_send", "send_message")
    graph.add_edge("send_message", END)

    for checkpoint, next_node in _CHECKPOINTS.items():
        graph.add_conditional_edges(
            checkpoint,
            route_after_checkpoint,
            {"continue": next_node, "stop": END},
        )

    return graph


# Compiled graph (singleton)
_webmail_graph = build_webmail_graph().compile()


@dataclass
class WebmailRunResult:
    outcome: RunOutcome
    narrative: list[ChatMessage] = field(default_factory=list)


class WebmailOrchestrator:
    """Runs one send-email automation per call, each in its own session.

    At most ``max_concurrent_sessions`` runs hold a browser at once; each run
    is bounded by ``run_timeout_s``.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        provider: WebmailProvider = GMAIL,
        timings: AutomationTimings | None = None,
        max_concurrent_sessions: int = 2,
        run_timeout_s: float = 180,
    ):
        self._session_factory = session_factory
        self._provider = provider
        self._timings = timings or AutomationTimings()
        self._slots = asyncio.Semaphore(max_concurrent_sessions)
        self._run_timeout_s = run_timeout_s

    @classmethod
    def from_settings(
        cls, settings: Settings, session_factory: SessionFactory | None = None
    ) -> "WebmailOrchestrator":
        return cls(
            session_factory=session_factory or playwright_session_factory(settings),
            timings=AutomationTimings.from_settings(settings),
            max_concurrent_sessions=settings.max_concurrent_sessions,
            run_timeout_s=settings.automation_run_timeout_s,
        )

    @traced("webmail_send", capture_output=False)
    async def send(self, intent: EmailIntent) -> WebmailRunResult:
        """Drive the provider UI to send ``intent``; never raises for run failures."""
        progress: WebmailRunState = {"intent": intent, "narrative": []}
        async with self._slots:
            session: BrowserSession | None = None
            deadline: asyncio.Timeout | None = None
            try:
                session = await self._session_factory()
                deadline = asyncio.timeout(self._run_timeout_s)
                async with deadline:
                    await self._drive(session, progress)
            except TimeoutError as e:
                # Only the run deadline reports as an overrun
                if deadline is not None and deadline.expired():
                    logger.warning("Webmail run exceeded %ss", self._run_timeout_s)
                    self._fail(progress, f"automation run exceeded {self._run_timeout_s:g}s")
                else:
                    self._crashed(progress, e)
            except Exception as e:
                self._crashed(progress, e)
            finally:
                if session is not None:
                    await self._release(session)

        outcome = progress.get("outcome", RunOutcome.unhandled_failure)
        return WebmailRunResult(outcome=outcome, narrative=list(progress["narrative"]))

    async def _drive(self, session: BrowserSession, progress: WebmailRunState) -> None:
        """Stream the graph, keeping the latest state so a crash keeps prior progress."""
        deps = RunDeps(session=session, provider=self._provider, timings=self._timings)
        initial: WebmailRunState = {"intent": progress["intent"], "narrative": []}
        async for snapshot in _webmail_graph.astream(
            initial,
            config={"configurable": {"deps": deps}},
            stream_mode="values",
        ):
            progress.update(snapshot)

    @classmethod
    def _crashed(cls, progress: WebmailRunState, error: Exception) -> None:
        logger.exception("Webmail run failed")
        cls._fail(progress, str(error) or type(error).__name__)

    @staticmethod
    def _fail(progress: WebmailRunState, reason: str) -> None:
        progress["narrative"] = [
            *progress["narrative"],
            agent_text(FAILURE_MESSAGE.format(reason=reason)),
        ]
        progress["outcome"] = RunOutcome.unhandled_failure

    @staticmethod
    async def _release(session: BrowserSession) -> None:
        try:
            await session.close()
        except Exception as e:
            logger.warning("Failed to close browser session: %s", e)
