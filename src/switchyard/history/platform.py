"""Browser platform seam.

``BrowserHistory`` talks to the host's URL/History API only through the
``BrowserPlatform`` protocol. A real embedding (a webview bridge, a
Pyodide ``window``) supplies its own adapter; ``SimulatedBrowser`` is an
in-process implementation with a back/forward stack for tests, tools,
and headless rendering.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from switchyard._internal.types import Unsubscribe


@runtime_checkable
class BrowserPlatform(Protocol):
    """The slice of a browser's location/history API a history needs.

    ``pathname`` and ``search`` always reflect the live URL. Callbacks
    given to ``subscribe_popstate`` fire after the URL has already
    changed because of back/forward.
    """

    @property
    def pathname(self) -> str: ...
    @property
    def search(self) -> str: ...
    def push_state(self, href: str) -> None: ...
    def replace_state(self, href: str) -> None: ...
    def assign(self, href: str) -> None: ...
    def subscribe_popstate(self, callback: Callable[[], None]) -> Unsubscribe: ...


class SimulatedBrowser:
    """An address bar and session history living in memory.

    Usage::

        browser = SimulatedBrowser("/inbox")
        history = BrowserHistory(browser)
        history.navigate("/inbox/42")
        browser.back()            # fires popstate, history notifies listeners
        browser.url               # "/inbox"
    """

    def __init__(self, url: str = "/") -> None:
        self.entries: list[str] = [url]
        self.index = 0
        self.page_loads: list[str] = [url]
        self._popstate: dict[Callable[[], None], None] = {}

    @property
    def url(self) -> str:
        return self.entries[self.index]

    @property
    def pathname(self) -> str:
        return self.url.partition("?")[0] or "/"

    @property
    def search(self) -> str:
        _, sep, query = self.url.partition("?")
        return sep + query if query else ""

    def push_state(self, href: str) -> None:
        del self.entries[self.index + 1 :]
        self.entries.append(href)
        self.index += 1

    def replace_state(self, href: str) -> None:
        self.entries[self.index] = href

    def assign(self, href: str) -> None:
        """Full page load: a new entry with no popstate."""
        self.push_state(href)
        self.page_loads.append(href)

    def subscribe_popstate(self, callback: Callable[[], None]) -> Unsubscribe:
        self._popstate[callback] = None

        def unsubscribe() -> None:
            self._popstate.pop(callback, None)

        return unsubscribe

    def go(self, delta: int) -> bool:
        """Move through session history and fire popstate.

        Returns False (and fires nothing) when *delta* would leave the
        entry stack.
        """
        target = self.index + delta
        if delta == 0 or not 0 <= target < len(self.entries):
            return False
        self.index = target
        for callback in tuple(self._popstate):
            callback()
        return True

    def back(self) -> bool:
        return self.go(-1)

    def forward(self) -> bool:
        return self.go(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._popstate)
