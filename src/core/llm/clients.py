from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from src.core.exceptions import LLMError
from src.core.llm.prompts import PromptAdapter


def get_anthropic_client(api_key: str) -> AsyncAnthropic:
    return AsyncAnthropic(api_key=api_key)


def get_openai_client(api_key: str) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key)


class LLMClient:
    """Text completion over OpenAI (gpt-*) and Anthropic (claude-*) models.

    API keys are injected once at construction; SDK clients are created
    lazily on first use.
    """

    def __init__(self, openai_api_key: str = "", anthropic_api_key: str = ""):
        self._openai_api_key = openai_api_key
        self._anthropic_api_key = anthropic_api_key
        self._openai: AsyncOpenAI | None = None
        self._anthropic: AsyncAnthropic | None = None

    def is_configured(self, model: str) -> bool:
        if model.startswith("gpt-"):
            return bool(self._openai_api_key)
        if model.startswith("claude-"):
            return bool(self._anthropic_api_key)
        return False

    def openai(self) -> AsyncOpenAI:
        if self._openai is None:
            self._openai = get_openai_client(self._openai_api_key)
        return self._openai

    def anthropic(self) -> AsyncAnthropic:
        if self._anthropic is None:
            self._anthropic = get_anthropic_client(self._anthropic_api_key)
        return self._anthropic

    async def generate_text(
        self,
        model: str,
        system: str,
        messages: list[dict[str, str]],
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> str:
        """Unified LLM call, routed to the correct SDK by model ID.

        Returns the generated text content ("" when the model produced none).
        """
        if not messages:
            raise ValueError("messages must not be empty")
        if not self.is_configured(model):
            raise LLMError(f"No API key configured for model {model}")

        if model.startswith("gpt-"):
            resp = await self.openai().chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                **PromptAdapter.for_openai(system, messages),
            )
            return resp.choices[0].message.content or ""

        resp = await self.anthropic().messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            **PromptAdapter.for_claude(system, messages),
        )
        return resp.content[0].text if resp.content else ""
