"""Webmail provider UI knowledge: URLs, selectors and checkpoint markers.

The graph nodes only talk to a ``WebmailProvider``; nothing Gmail-specific
lives outside this module.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WebmailProvider:
    name: str
    login_url: str
    email_input: str
    password_input: str
    next_button: str
    captcha_markers: tuple[str, ...]
    security_markers: tuple[str, ...]
    inbox_marker: str
    compose_button: str
    overlay_buttons: tuple[str, ...]
    recipient_field: str
    subject_field: str
    body_field: str
    send_button: str


GMAIL = WebmailProvider(
    name="Gmail",
    login_url="https://mail.google.com/",
    email_input='input[type="email"]',
    password_input='input[type="password"]',
    next_button='button:has-text("Next")',
    captcha_markers=(
        'iframe[src*="recaptcha"]',
        "text=/Enter the characters you see/i",
    ),
    security_markers=(
        'input[type="tel"]',
        'input[type="text"][aria-label*="code"]',
        "text=/2-step/i",
        "text=/Check your phone|Verify it/i",
    ),
    inbox_marker='div[role="button"][gh="cm"]',
    compose_button='div[role="button"][gh="cm"]',
    overlay_buttons=(
        'button:has-text("Got it")',
        'button:has-text("Dismiss")',
        'button:has-text("Close")',
    ),
    recipient_field='textarea[name="to"]',
    subject_field='input[name="subjectbox"]',
    body_field='div[aria-label="Message Body"]',
    send_button='div[aria-label*="Send"]',
)
