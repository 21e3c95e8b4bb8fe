"""General chat skill — LLM fallback when no browser task was recognized."""

import logging
from pathlib import Path
from typing import Any

from src.core.config import Settings
from src.core.llm.clients import LLMClient
from src.core.llm.prompts import history_to_messages
from src.core.observability import traced
from src.core.schemas.chat import AgentRequest, TextMessage, agent_text
from src.skills.base import SkillResult
from src.skills.prompt_loader import load_prompt

logger = logging.getLogger(__name__)

_DEFAULT_SYSTEM_PROMPT = """\
You are a helpful assistant that can control a web browser, ask clarifying \
questions, plan steps to help users get things done online. Respond as if you \
are the brains behind a browser agent. You may proactively ask for missing \
info needed for a task."""

PLACEHOLDER_REPLY = 'You said: "{message}" (This is an agent placeholder response.)'


class GeneralChatSkill:
    name = "general_chat"
    intents = ["general_chat"]

    def __init__(self, llm: LLMClient, settings: Settings):
        self._llm = llm
        self.model = settings.fallback_model
        self._max_tokens = settings.fallback_max_tokens
        self._temperature = settings.fallback_temperature
        self._window = settings.fallback_history_window

    def get_system_prompt(self) -> str:
        prompts = load_prompt(Path(__file__).parent)
        return prompts.get("system_prompt", _DEFAULT_SYSTEM_PROMPT)

    @traced("general_chat")
    async def execute(
        self,
        request: AgentRequest,
        intent_data: dict[str, Any],
    ) -> SkillResult:
        reply = await self._llm_reply(request)
        if reply is None:
            reply = agent_text(PLACEHOLDER_REPLY.format(message=request.message))
        return SkillResult.reply(reply)

    async def _llm_reply(self, request: AgentRequest) -> TextMessage | None:
        """One LLM answer over the recent conversation, or None if unavailable."""
        if not self._llm.is_configured(self.model):
            return None
        messages = history_to_messages(request.history, request.message, self._window)
        try:
            text = await self._llm.generate_text(
                self.model,
                self.get_system_prompt(),
                messages,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as e:
            logger.warning("Fallback chat completion failed: %s", e)
            return None
        if not text:
            return None
        return agent_text(text)
