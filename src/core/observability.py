"""Langfuse tracing for skills and webmail runs.

``observe`` is Langfuse's decorator when LANGFUSE_PUBLIC_KEY is set and a
pass-through otherwise. Code applies ``traced``, which keeps call arguments
out of traces: chat history and email intents can carry the mailbox password.
"""

import inspect
import logging
from collections.abc import Callable
from functools import wraps

from src.core.config import settings

logger = logging.getLogger(__name__)

# Suppress Langfuse SDK's repeated WARNING about missing keys
logging.getLogger("langfuse").setLevel(logging.ERROR)


def _passthrough(name: str = "", **kwargs) -> Callable:
    """Stand-in for ``langfuse.observe`` that only preserves the wrapped call."""

    def decorator(fn: Callable) -> Callable:
        if inspect.iscoroutinefunction(fn):

            @wraps(fn)
            async def async_wrapper(*args, **kw):
                return await fn(*args, **kw)

            return async_wrapper

        @wraps(fn)
        def sync_wrapper(*args, **kw):
            return fn(*args, **kw)

        return sync_wrapper

    return decorator


if settings.langfuse_public_key:
    from langfuse import observe

    logger.info("Langfuse tracing enabled (host=%s)", settings.langfuse_host)
else:
    observe = _passthrough


def traced(name: str, *, capture_output: bool = True) -> Callable:
    """Span named ``name`` that never records its inputs.

    Pass ``capture_output=False`` for spans whose result is a screenshot
    narrative; base64 PNGs make traces huge.
    """
    return observe(name=name, capture_input=False, capture_output=capture_output)


__all__ = ["observe", "traced"]
