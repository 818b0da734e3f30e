"""Shared history machinery.

Both history variants own a current location, an ordered set of
navigate listeners, and an ordered set of before-navigate guards. The
variants differ only in where the location lives, so the navigation
protocol itself is implemented once here.

Thread safety:
    None. Navigation is synchronous and single-threaded: ``navigate()``
    commits and notifies every listener before returning.
"""

import logging

from switchyard._internal.types import (
    BeforeNavigateListener,
    HistoryKind,
    NavigateListener,
    Unsubscribe,
)
from switchyard.errors import RelativeNavigationError
from switchyard.routing.location import RouterLocation

logger = logging.getLogger("switchyard.history")


class HistoryBase:
    """Listener and guard bookkeeping shared by every history.

    Subclasses set ``kind`` and implement ``top()`` and ``_commit()``.
    Listener sets are dicts used as insertion-ordered sets; every pass
    iterates over a tuple snapshot, so a listener may subscribe,
    unsubscribe, or navigate again without disturbing the pass in flight.
    """

    kind: HistoryKind

    def __init__(self) -> None:
        self._listeners: dict[NavigateListener, None] = {}
        self._guards: dict[BeforeNavigateListener, None] = {}

    def top(self) -> RouterLocation:
        raise NotImplementedError

    def _commit(self, to: str, *, replace: bool) -> RouterLocation | None:
        """Store the new location. Return None if nothing should be notified."""
        raise NotImplementedError

    def navigate(self, to: str, *, replace: bool = False, force: bool = False) -> bool:
        """Navigate to the absolute path *to*.

        Unless *force* is set, before-navigate guards run in registration
        order and the first one returning ``False`` aborts with no side
        effects. Returns True if the navigation was committed.

        Raises ``RelativeNavigationError`` if *to* does not start with ``/``.
        """
        if not to.startswith("/"):
            raise RelativeNavigationError(to)

        logger.debug("navigate(%r, replace=%s) on %s history", to, replace, self.kind)

        if not force and not self._allowed(to):
            return False

        location = self._commit(to, replace=replace)
        if location is not None:
            self._notify(location)
        return True

    def listen(self, listener: NavigateListener) -> Unsubscribe:
        """Call *listener* with the new location after every navigation."""
        self._listeners[listener] = None

        def unsubscribe() -> None:
            self._listeners.pop(listener, None)

        return unsubscribe

    def before_navigate(self, listener: BeforeNavigateListener) -> Unsubscribe:
        """Register a guard; returning ``False`` from it vetoes navigation."""
        self._guards[listener] = None

        def unsubscribe() -> None:
            self._guards.pop(listener, None)

        return unsubscribe

    def _allowed(self, to: str) -> bool:
        for guard in tuple(self._guards):
            if guard(to) is False:
                logger.debug("Navigation to %r blocked by before_navigate listener", to)
                return False
        return True

    def _notify(self, location: RouterLocation) -> None:
        listeners = tuple(self._listeners)
        logger.debug("Notify %d listeners of %s", len(listeners), location)
        for listener in listeners:
            listener(location)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind!r} top={str(self.top())!r}>"
