"""Router nodes — the claiming state machine.

A router node claims its path from the ambient location and renders its
children under the claimed location. If the claim fails it renders no
application content and instead redirects to the canonical URL, e.g. an
``app`` node seeing ``/oldapp/foo`` redirects to ``/app/foo``.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from switchyard._internal.types import Renderer, Unsubscribe
from switchyard.config import RouterConfig, create_history
from switchyard.context import RouterContext, RouterFlags
from switchyard.errors import NavigationError
from switchyard.history import BrowserPlatform, History, MemoryHistory
from switchyard.redirect import Redirect
from switchyard.routing.location import RouterLocation

logger = logging.getLogger("switchyard.router")

# Renders within one pass that may follow redirects before giving up.
MAX_REDIRECTS = 20


@dataclass(frozen=True, slots=True)
class Matched:
    """The node's path claimed successfully."""

    context: RouterContext


@dataclass(frozen=True, slots=True)
class Redirecting:
    """The node's path did not claim; the URL should become ``to``."""

    context: RouterContext
    to: str


RouterState = Matched | Redirecting


class Router:
    """A node in the router tree.

    Root nodes track their history's location; nested nodes that share
    their parent's history claim from the parent's location instead.
    A node given its own history is an embedded sub-router living in its
    own universe.

    Usage::

        router = Router(render_app, path="app", history=history, on_change=repaint)
        with router.mounted():
            output = router.render()

    ``on_change`` is called whenever the location changes outside a
    render pass so the host can render again.
    """

    def __init__(
        self,
        render: Renderer,
        *,
        path: str = "",
        history: History | None = None,
        parent: RouterContext | None = None,
        is_mobile_app: bool | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.path = path
        self._render = render
        self._on_change = on_change
        self.parent = parent if parent is not None and not parent.flags.is_default else None

        if history is not None:
            self.history: History = history
        elif self.parent is not None:
            self.history = self.parent.history
        else:
            self.history = MemoryHistory()

        inherited = self.parent.flags if self.parent is not None else RouterFlags()
        self.flags = RouterFlags(
            is_mock=inherited.is_mock,
            is_mobile_app=inherited.is_mobile_app if is_mobile_app is None else is_mobile_app,
        )

        self.location = self.history.top()
        self._unsubscribe: Unsubscribe | None = None
        self._rendering = False
        self._dirty = False

    @classmethod
    def from_config(
        cls,
        render: Renderer,
        config: RouterConfig,
        *,
        path: str = "",
        platform: BrowserPlatform | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> "Router":
        """Build a root router and its history from a ``RouterConfig``."""
        return cls(
            render,
            path=path,
            history=create_history(config, platform),
            is_mobile_app=config.is_mobile_app,
            on_change=on_change,
        )

    # -- State machine --

    @property
    def shares_parent_history(self) -> bool:
        return self.parent is not None and self.history is self.parent.history

    def ambient_location(self) -> RouterLocation:
        """The location this node claims from."""
        if self.shares_parent_history:
            return self.parent.location  # type: ignore[union-attr]
        return self.location

    def evaluate(self) -> RouterState:
        """Try to claim this node's path. An empty path always matches."""
        location = self.ambient_location()
        claimed = location.try_claim(self.path) if self.path else location

        if claimed is not None:
            return Matched(
                RouterContext(
                    location=claimed,
                    history=self.history,
                    parent=self.parent,
                    flags=self.flags,
                )
            )

        return Redirecting(
            RouterContext(location=location, history=self.history, parent=self.parent, flags=self.flags),
            to=location.rewrite(self.path).href(),
        )

    def render(self, parent: RouterContext | None = None) -> Any:
        """Render once, following any redirects raised along the way.

        Pass *parent* to hand a nested node its parent's latest snapshot.
        Returns whatever the render callable returns, or None while
        redirecting.
        """
        if parent is not None and not parent.flags.is_default:
            self.parent = parent

        self._rendering = True
        try:
            for _ in range(MAX_REDIRECTS):
                self._dirty = False
                output = self._render_state(self.evaluate())
                # A node claiming from its parent only sees the new
                # location once the parent renders again.
                if not self._dirty or self.shares_parent_history:
                    return output
        finally:
            self._rendering = False

        msg = f"Too many redirects while rendering router at {self.ambient_location()}"
        raise NavigationError(msg)

    def _render_state(self, state: RouterState) -> Any:
        match state:
            case Matched(context=context):
                logger.debug("Location %s matches %r", context.location, self.path)
                return self._render(context)
            case Redirecting(context=context, to=to):
                logger.debug("Location %s does not match %r; redirecting", context.location, self.path)
                return Redirect(to).render(context)

    # -- Lifecycle --

    def mount(self) -> None:
        """Start following history.

        A descendant may already have navigated (e.g. a redirect) during
        the first render, before this subscription existed, so the
        location is resynchronized against ``history.top()`` first.
        """
        if self._unsubscribe is not None:
            return
        top = self.history.top()
        if top.href() != self.location.href():
            logger.debug("History moved to %s before mount; resynchronizing", top)
            self.location = top
            self._changed()
        self._unsubscribe = self.history.listen(self._on_navigate)

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def is_mounted(self) -> bool:
        return self._unsubscribe is not None

    @contextmanager
    def mounted(self) -> Iterator["Router"]:
        self.mount()
        try:
            yield self
        finally:
            self.unmount()

    def _on_navigate(self, location: RouterLocation) -> None:
        # A listener earlier in the same pass may have navigated again;
        # the history, not the delivered value, is current.
        self.location = self.history.top()
        self._changed()

    def _changed(self) -> None:
        if self._rendering:
            # The render loop picks this up before returning.
            self._dirty = True
        elif self._on_change is not None:
            self._on_change()

    def __repr__(self) -> str:
        return f"<Router path={self.path!r} location={str(self.ambient_location())!r}>"
