from src.core.config import Settings
from src.core.llm.clients import LLMClient
from src.orchestrators.webmail.graph import WebmailOrchestrator
from src.skills.base import SkillRegistry
from src.skills.general_chat.handler import GeneralChatSkill
from src.skills.screenshot_test.handler import ScreenshotTestSkill
from src.skills.send_email.handler import SendEmailSkill
from src.tools.browser import SessionFactory, playwright_session_factory


def create_registry(
    settings: Settings,
    session_factory: SessionFactory | None = None,
    llm: LLMClient | None = None,
) -> SkillRegistry:
    """Create and populate the skill registry from process settings."""
    session_factory = session_factory or playwright_session_factory(settings)
    llm = llm or LLMClient(
        openai_api_key=settings.openai_api_key,
        anthropic_api_key=settings.anthropic_api_key,
    )

    registry = SkillRegistry()
    registry.register(
        SendEmailSkill(WebmailOrchestrator.from_settings(settings, session_factory))
    )
    registry.register(
        ScreenshotTestSkill(session_factory, navigation_timeout_ms=settings.navigation_timeout_ms)
    )
    registry.register(GeneralChatSkill(llm, settings))
    return registry
