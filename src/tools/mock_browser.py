from src.core.exceptions import ElementTimeoutError

FAKE_PNG = b"\x89PNG\r\n\x1a\nfake"


class MockBrowserSession:
    """Scripted browser session for testing. Records every call.

    ``present`` maps selectors to match counts; selectors not listed count as
    absent and time out in ``wait_for`` unless listed in ``visible``.
    ``flaky`` maps a selector to how many click/fill calls on it raise before
    one succeeds. ``errors`` maps ``"<method>:<selector>"`` to an exception
    raised on every such call.
    """

    def __init__(
        self,
        present: dict[str, int] | None = None,
        visible: set[str] | None = None,
        flaky: dict[str, int] | None = None,
        errors: dict[str, Exception] | None = None,
        close_error: Exception | None = None,
    ):
        self.present = dict(present or {})
        self.visible = set(visible or ())
        self.flaky = dict(flaky or {})
        self.errors = dict(errors or {})
        self.close_error = close_error
        self.calls: list[tuple] = []
        self.screenshots_taken = 0
        self.closed = False

    def _check(self, method: str, selector: str) -> None:
        error = self.errors.get(f"{method}:{selector}")
        if error is not None:
            raise error

    def _maybe_flake(self, method: str, selector: str) -> None:
        remaining = self.flaky.get(selector, 0)
        if remaining > 0:
            self.flaky[selector] = remaining - 1
            raise RuntimeError(f"{method} on {selector} intercepted")

    async def goto(self, url, wait_until="domcontentloaded", timeout_ms=30_000) -> None:
        self.calls.append(("goto", url))
        self._check("goto", url)

    async def count(self, selector: str) -> int:
        self.calls.append(("count", selector))
        return self.present.get(selector, 0)

    async def wait_for(self, selector, state="visible", timeout_ms=30_000) -> None:
        self.calls.append(("wait_for", selector))
        self._check("wait_for", selector)
        if selector not in self.visible and self.present.get(selector, 0) == 0:
            raise ElementTimeoutError(f"{selector} not {state} after {timeout_ms}ms")

    async def click(self, selector: str, timeout_ms: int | None = None) -> None:
        self.calls.append(("click", selector))
        self._check("click", selector)
        self._maybe_flake("click", selector)

    async def fill(self, selector: str, value: str, timeout_ms: int | None = None) -> None:
        self.calls.append(("fill", selector, value))
        self._check("fill", selector)
        self._maybe_flake("fill", selector)

    async def screenshot(self) -> bytes:
        self.calls.append(("screenshot",))
        self.screenshots_taken += 1
        return FAKE_PNG

    async def pause(self, ms: int) -> None:
        self.calls.append(("pause", ms))

    async def close(self) -> None:
        self.calls.append(("close",))
        self.closed = True
        if self.close_error is not None:
            raise self.close_error

    def called(self, method: str, selector: str | None = None) -> bool:
        return any(
            c[0] == method and (selector is None or (len(c) > 1 and c[1] == selector))
            for c in self.calls
        )

    def factory(self):
        """Session factory that always hands out this session."""

        async def open_session() -> "MockBrowserSession":
            return self

        return open_session
