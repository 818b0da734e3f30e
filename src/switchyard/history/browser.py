"""Browser-backed history.

The platform URL is authoritative: ``top()`` always re-derives the
location from it, and back/forward events are handled by reading the
live URL rather than trusting cached state.
"""

import logging
from types import TracebackType
from typing import Literal

from switchyard.history.base import HistoryBase
from switchyard.history.platform import BrowserPlatform
from switchyard.routing.location import RouterLocation

logger = logging.getLogger("switchyard.history")


class BrowserHistory(HistoryBase):
    """History backed by a ``BrowserPlatform``.

    ``base_path`` roots every navigation under a prefix: it is prepended
    on ``navigate()`` and stripped on ``top()``, so an embedded
    sub-application never needs to know where it is mounted.

    ``always_reload_page`` performs full page loads instead of in-place
    URL updates, for traditional multi-page behavior.

    The popstate subscription belongs to this instance and is released
    by ``close()``::

        with BrowserHistory(SimulatedBrowser(), base_path="/embed") as history:
            history.navigate("/settings")   # URL becomes /embed/settings
    """

    kind: Literal["browser"] = "browser"

    def __init__(
        self,
        platform: BrowserPlatform,
        *,
        base_path: str = "",
        always_reload_page: bool = False,
    ) -> None:
        super().__init__()
        self.platform = platform
        self.base_path = base_path.rstrip("/")
        self.always_reload_page = always_reload_page
        self.previous_location: RouterLocation | None = None
        self._committed = self.top()
        self._unsubscribe_popstate = platform.subscribe_popstate(self._on_popstate)

    def top(self) -> RouterLocation:
        return RouterLocation.from_url(self.platform.pathname, self.platform.search, self.base_path)

    def _commit(self, to: str, *, replace: bool) -> RouterLocation | None:
        href = self.base_path + to
        current = self.top()

        if self.always_reload_page:
            self.previous_location = current
            self.platform.assign(href)
            # The page is unloading; nothing is left to notify.
            return None

        if replace:
            self.platform.replace_state(href)
        else:
            self.platform.push_state(href)

        self.previous_location = current
        self._committed = self.top()
        return self._committed

    def _on_popstate(self) -> None:
        location = self.top()
        logger.debug("Popstate with location %s", location)

        if not self._allowed(location.href()):
            # The URL already changed underneath us; put back what the
            # app is still showing.
            logger.debug("Undoing popstate to %s", location)
            self.platform.push_state(self.base_path + self._committed.href())
            return

        self.previous_location = self._committed
        self._committed = location
        self._notify(location)

    def close(self) -> None:
        """Stop listening to the platform's back/forward signal."""
        self._unsubscribe_popstate()

    def __enter__(self) -> "BrowserHistory":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
