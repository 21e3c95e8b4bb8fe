"""Send email skill — negotiates missing fields, then drives the webmail UI."""

import logging
from typing import Any

from src.core.negotiation import negotiate
from src.core.observability import traced
from src.core.schemas.chat import AgentRequest
from src.core.schemas.intent import EmailIntent
from src.orchestrators.webmail.graph import WebmailOrchestrator
from src.skills.base import SkillResult

logger = logging.getLogger(__name__)


class SendEmailSkill:
    name = "send_email"
    intents = ["send_email"]

    def __init__(self, orchestrator: WebmailOrchestrator):
        self._orchestrator = orchestrator

    @traced("send_email", capture_output=False)
    async def execute(
        self,
        request: AgentRequest,
        intent_data: dict[str, Any],
    ) -> SkillResult:
        intent: EmailIntent = intent_data["email_intent"]

        clarification = negotiate(intent)
        if clarification is not None:
            logger.info("Email intent incomplete, missing=%s", intent.missing_fields())
            return SkillResult.reply(clarification)

        result = await self._orchestrator.send(intent)
        logger.info(
            "Email automation finished: outcome=%s messages=%d",
            result.outcome,
            len(result.narrative),
        )
        return SkillResult.replies(result.narrative)
