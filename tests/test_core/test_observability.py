"""Tests for tracing decorators."""

from unittest.mock import MagicMock, patch

from src.core import observability
from src.core.observability import _passthrough, traced


async def test_passthrough_keeps_async_behaviour():
    @_passthrough(name="run", capture_input=False)
    async def run(x):
        return x * 2

    assert run.__name__ == "run"
    assert await run(21) == 42


def test_passthrough_keeps_sync_behaviour():
    @_passthrough(name="pick")
    def pick(a, b=1):
        return a + b

    assert pick(1, b=2) == 3


def test_traced_never_captures_inputs():
    with patch.object(observability, "observe", MagicMock()) as observe:
        traced("send_email", capture_output=False)

    observe.assert_called_once_with(name="send_email", capture_input=False, capture_output=False)


def test_traced_captures_output_by_default():
    with patch.object(observability, "observe", MagicMock()) as observe:
        traced("general_chat")

    assert observe.call_args.kwargs == {
        "name": "general_chat",
        "capture_input": False,
        "capture_output": True,
    }
