"""Exception hierarchy for the webmail agent."""


class MailAgentError(Exception):
    """Base exception for all webmail agent errors."""
    pass


class LLMError(MailAgentError):
    """LLM API call failed or is not configured."""
    pass


class BrowserError(MailAgentError):
    """Remote browser operation failed."""
    pass


class BrowserUnavailableError(BrowserError):
    """The browser engine is not installed or could not be launched."""
    pass


class ElementTimeoutError(BrowserError):
    """An element did not reach the awaited state in time."""
    pass
