"""Ask the user for whatever the email intent is still missing."""

from src.core.schemas.chat import TextMessage, agent_text
from src.core.schemas.intent import EMAIL_INTENT_FIELDS, EmailIntent

CLARIFICATION_HEADER = "To send an email, I need:"

FIELD_PROMPTS: dict[str, str] = {
    "email": "Your Gmail address",
    "password": "Your Gmail password (for test account ONLY)",
    "to": "Recipient email",
    "subject": 'Email subject (e.g., subject: "Time off request")',
    "body": 'Email body (e.g., body: "I would like to request time off ...")',
}


def negotiate(intent: EmailIntent) -> TextMessage | None:
    """Return one clarification message, or None when the intent is ready."""
    missing = set(intent.missing_fields())
    if not missing:
        return None
    lines = [CLARIFICATION_HEADER]
    lines.extend(f"- {FIELD_PROMPTS[name]}" for name in EMAIL_INTENT_FIELDS if name in missing)
    return agent_text("\n".join(lines))
