"""Send-email intent extraction from chat history.

Each intent field has its own recognizer in ``FIELD_PATTERNS``. History is
scanned newest-first and the first match per field wins, so a value the user
restated later always overrides an older one.
"""

import logging
import re
from collections.abc import Callable, Sequence

from src.core.schemas.chat import ChatMessage, TextMessage
from src.core.schemas.intent import EmailIntent

logger = logging.getLogger(__name__)

Recognizer = Callable[[str], str | None]

SEND_EMAIL_RE = re.compile(r"send (?:an )?email", re.IGNORECASE)


def regex_recognizer(pattern: str, flags: int = re.IGNORECASE, group: int = 0) -> Recognizer:
    """Build a recognizer returning ``group`` of the first match, or None."""
    compiled = re.compile(pattern, flags)

    def recognize(text: str) -> str | None:
        match = compiled.search(text)
        return match.group(group) if match else None

    return recognize


def account_recognizer(domain: str = "gmail.com") -> Recognizer:
    return regex_recognizer(rf"[\w.+-]+@{re.escape(domain)}\b")


FIELD_PATTERNS: tuple[tuple[str, Recognizer], ...] = (
    ("email", account_recognizer()),
    ("password", regex_recognizer(r"\bpassword\s*(?:[:=]\s*|\s+)(\S+)", group=1)),
    ("to", regex_recognizer(r"\bto\s*(?:[:=]\s*|\s+)([\w.+-]+@[\w-]+(?:\.[\w-]+)+)", group=1)),
    ("subject", regex_recognizer(r'\bsubject\s*[:=]?\s*"([^"]+)"', group=1)),
    ("body", regex_recognizer(r'\bbody\s*[:=]?\s*"([^"]+)"', group=1)),
)


def wants_to_send_email(history: Sequence[ChatMessage]) -> bool:
    return any(
        isinstance(m, TextMessage) and SEND_EMAIL_RE.search(m.content) for m in history
    )


def extract_email_intent(
    history: Sequence[ChatMessage],
    patterns: Sequence[tuple[str, Recognizer]] = FIELD_PATTERNS,
) -> EmailIntent | None:
    """Build an EmailIntent from history, or None if nobody asked to send email.

    The trigger phrase counts in any text message, but field values are only
    taken from text the user sent. This narrows a scan over every message on
    purpose: the clarification prompt quotes ``subject: "..."`` and
    ``body: "..."`` examples, which would otherwise be read back as the
    user's values. Fields with no match stay empty.
    """
    if not wants_to_send_email(history):
        return None

    found: dict[str, str] = {}
    for message in reversed(history):
        if not isinstance(message, TextMessage) or message.sender != "user":
            continue
        for name, recognize in patterns:
            if name in found:
                continue
            value = recognize(message.content)
            if value:
                found[name] = value
        if len(found) == len(patterns):
            break

    intent = EmailIntent(**found)
    logger.debug("Email intent extracted, missing=%s", intent.missing_fields())
    return intent
