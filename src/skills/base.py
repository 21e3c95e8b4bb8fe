from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from src.core.schemas.chat import AgentReplies, AgentReply, AgentRequest, ChatMessage


@dataclass
class SkillResult:
    """Result of skill execution.

    ``batch`` results are delivered as ``{"replies": [...]}``; otherwise the
    single message is delivered as ``{"reply": ...}``.
    """

    messages: list[ChatMessage] = field(default_factory=list)
    batch: bool = False

    @classmethod
    def reply(cls, message: ChatMessage) -> SkillResult:
        return cls(messages=[message])

    @classmethod
    def replies(cls, messages: list[ChatMessage]) -> SkillResult:
        return cls(messages=list(messages), batch=True)

    def to_response(self) -> AgentReply | AgentReplies:
        if self.batch:
            return AgentReplies(replies=self.messages)
        return AgentReply(reply=self.messages[0])


class BaseSkill(Protocol):
    """Interface for all skill modules."""

    name: str
    intents: list[str]

    async def execute(
        self,
        request: AgentRequest,
        intent_data: dict[str, Any],
    ) -> SkillResult: ...


class SkillRegistry:
    """Maps detected intents to skills."""

    def __init__(self):
        self._skills: dict[str, BaseSkill] = {}

    def register(self, skill: BaseSkill) -> None:
        for intent in skill.intents:
            self._skills[intent] = skill

    def get(self, intent: str) -> BaseSkill | None:
        return self._skills.get(intent)

    def all_skills(self) -> list[BaseSkill]:
        return list({id(s): s for s in self._skills.values()}.values())
