"""Tests for the send email skill."""

from unittest.mock import AsyncMock, MagicMock

from src.core.negotiation import CLARIFICATION_HEADER
from src.core.schemas.chat import AgentRequest, ScreenshotMessage, agent_text
from src.core.schemas.intent import EmailIntent
from src.orchestrators.webmail.graph import WebmailOrchestrator, WebmailRunResult
from src.orchestrators.webmail.state import RunOutcome
from src.skills.send_email.handler import SendEmailSkill


def _skill(result=None):
    orchestrator = MagicMock(spec=WebmailOrchestrator)
    orchestrator.send = AsyncMock(return_value=result)
    return SendEmailSkill(orchestrator), orchestrator


async def test_incomplete_intent_asks_for_missing_fields():
    skill, orchestrator = _skill()
    request = AgentRequest(message="send an email", history=[])

    result = await skill.execute(request, {"email_intent": EmailIntent(to="bob@x.com")})

    assert not result.batch
    reply = result.to_response().reply
    assert reply.content.startswith(CLARIFICATION_HEADER)
    assert "Recipient email" not in reply.content
    orchestrator.send.assert_not_awaited()


async def test_complete_intent_returns_run_narrative(complete_intent):
    narrative = [agent_text("Step 1/5: ..."), ScreenshotMessage.from_png(b"png")]
    skill, orchestrator = _skill(WebmailRunResult(outcome=RunOutcome.sent, narrative=narrative))
    request = AgentRequest(message="send an email", history=[])

    result = await skill.execute(request, {"email_intent": complete_intent})

    orchestrator.send.assert_awaited_once_with(complete_intent)
    assert result.batch
    assert result.to_response().replies == narrative


async def test_blocked_run_is_still_a_normal_reply(complete_intent):
    narrative = [agent_text("Blocked by Captcha or security check.")]
    skill, _ = _skill(WebmailRunResult(outcome=RunOutcome.captcha_blocked, narrative=narrative))

    result = await skill.execute(
        AgentRequest(message="go", history=[]), {"email_intent": complete_intent}
    )

    assert result.to_response().model_dump() == {
        "replies": [{"sender": "agent", "type": "text", "content": narrative[0].content}]
    }
