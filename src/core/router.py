"""Request router — detects what the user wants and dispatches to a skill.

Priority: screenshot test → send email (any completeness) → general chat.
"""

import logging

from src.core.intent import extract_email_intent
from src.core.schemas.chat import AgentRequest, TextMessage
from src.skills.base import SkillRegistry, SkillResult
from src.skills.screenshot_test.handler import is_screenshot_test

logger = logging.getLogger(__name__)


def detect_intent(request: AgentRequest) -> tuple[str, dict]:
    """Return the intent name and the data its skill needs."""
    if is_screenshot_test(request.message):
        return "screenshot_test", {}

    conversation = [*request.history, TextMessage(sender="user", content=request.message)]
    email_intent = extract_email_intent(conversation)
    if email_intent is not None:
        return "send_email", {"email_intent": email_intent}

    return "general_chat", {}


async def handle_agent_request(request: AgentRequest, registry: SkillRegistry) -> SkillResult:
    intent, intent_data = detect_intent(request)
    logger.info("Routing message to %s (history=%d)", intent, len(request.history))

    skill = registry.get(intent)
    if skill is None:
        raise LookupError(f"No skill registered for intent {intent}")
    return await skill.execute(request, intent_data)
