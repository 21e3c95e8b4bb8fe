"""Tests for send-email intent extraction."""

import pytest

from src.core.intent import (
    FIELD_PATTERNS,
    account_recognizer,
    extract_email_intent,
    wants_to_send_email,
)
from src.core.negotiation import negotiate
from src.core.schemas.chat import ScreenshotMessage, TextMessage


def _user(text: str) -> TextMessage:
    return TextMessage(sender="user", content=text)


def _agent(text: str) -> TextMessage:
    return TextMessage(sender="agent", content=text)


def _recognizer(name: str):
    return dict(FIELD_PATTERNS)[name]


def test_full_request_in_one_message():
    history = [
        _user(
            'send an email to bob@x.com subject: "Hi" body: "Hello" '
            "from myacct@gmail.com password: secret"
        )
    ]
    intent = extract_email_intent(history)

    assert intent is not None
    assert intent.email == "myacct@gmail.com"
    assert intent.password == "secret"
    assert intent.to == "bob@x.com"
    assert intent.subject == "Hi"
    assert intent.body == "Hello"
    assert intent.is_complete


def test_no_trigger_returns_none_even_with_fields():
    history = [
        _user("my account is myacct@gmail.com password: secret"),
        _user('to: bob@x.com subject: "Hi" body: "Hello"'),
    ]
    assert extract_email_intent(history) is None


def test_empty_history_returns_none():
    assert extract_email_intent([]) is None


@pytest.mark.parametrize(
    "text",
    ["send email please", "Send An Email to my boss", "I want to SEND EMAIL now"],
)
def test_trigger_phrasings(text):
    assert wants_to_send_email([_user(text)])


def test_trigger_ignores_screenshots():
    shot = ScreenshotMessage.from_png(b"send an email")
    assert not wants_to_send_email([shot])


def test_newest_value_wins_per_field():
    history = [
        _user("send an email to old@x.com"),
        _user('subject: "Old subject"'),
        _user("to: new@y.org"),
        _user('subject: "New subject"'),
    ]
    intent = extract_email_intent(history)

    assert intent.to == "new@y.org"
    assert intent.subject == "New subject"


def test_fields_resolved_independently():
    history = [
        _user('send an email body: "Older body" subject: "Kept subject"'),
        _user('body: "Newest body"'),
    ]
    intent = extract_email_intent(history)

    assert intent.body == "Newest body"
    assert intent.subject == "Kept subject"


def test_missing_fields_stay_empty():
    intent = extract_email_intent([_user("send an email to bob@x.com")])

    assert intent.to == "bob@x.com"
    assert intent.email == ""
    assert intent.password == ""
    assert intent.missing_fields() == ["email", "password", "subject", "body"]


def test_agent_clarification_is_not_read_as_values():
    clarification = negotiate(extract_email_intent([_user("send an email")]))
    history = [_user("send an email"), clarification]

    intent = extract_email_intent(history)

    assert intent.password == ""
    assert intent.subject == ""


def test_agent_message_can_still_trigger():
    history = [_agent("Shall I send an email for you?"), _user("to: bob@x.com")]
    intent = extract_email_intent(history)
    assert intent is not None
    assert intent.to == "bob@x.com"


def test_screenshots_are_skipped_for_fields():
    history = [
        _user("send an email from myacct@gmail.com"),
        ScreenshotMessage(sender="agent", content="data:image/png;base64,dG86IGFAYi5jb20="),
    ]
    intent = extract_email_intent(history)
    assert intent.email == "myacct@gmail.com"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("password: secret", "secret"),
        ("password=hunter2", "hunter2"),
        ("Password secret!", "secret!"),
        ("no credentials here", None),
    ],
)
def test_password_recognizer(text, expected):
    assert _recognizer("password")(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("to: bob@x.com", "bob@x.com"),
        ("to=alice@mail.example.org.", "alice@mail.example.org"),
        ("send it to carol@y.io", "carol@y.io"),
        ("photo@x.com", None),
    ],
)
def test_recipient_recognizer(text, expected):
    assert _recognizer("to")(text) == expected


def test_subject_and_body_require_quotes():
    assert _recognizer("subject")("subject: Hi there") is None
    assert _recognizer("subject")('Subject "Hi there"') == "Hi there"
    assert _recognizer("body")('body= "Line one"') == "Line one"


def test_account_recognizer_only_matches_provider_domain():
    recognize = account_recognizer("gmail.com")
    assert recognize("write to bob@x.com from me.name@gmail.com") == "me.name@gmail.com"
    assert recognize("bob@x.com") is None
