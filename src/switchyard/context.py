"""Router context snapshots.

A ``RouterContext`` is what a router node hands to its children: the
(possibly partially claimed) location, the history that drives it, the
enclosing router's context, and inherited flags. Snapshots are passed
explicitly down the render tree; there is no ambient global.
"""

import logging
from dataclasses import dataclass, field, replace

from switchyard.history import History, MemoryHistory
from switchyard.routing.location import RouterLocation

logger = logging.getLogger("switchyard.context")


@dataclass(frozen=True, slots=True)
class RouterFlags:
    """Flags inherited from the outermost router down.

    ``is_default``: no router node produced this context.
    ``is_mock``: a fake router for previews or tests; suppresses warnings.
    ``is_mobile_app``: running inside a wrapped mobile shell.
    """

    is_default: bool = False
    is_mock: bool = False
    is_mobile_app: bool = False


@dataclass(frozen=True, slots=True)
class RouterContext:
    """Snapshot handed down to children whenever a router node renders."""

    location: RouterLocation
    history: History
    parent: "RouterContext | None" = None
    flags: RouterFlags = field(default_factory=RouterFlags)
    back: str | None = None

    def with_location(self, location: RouterLocation) -> "RouterContext":
        """Same snapshot, different location. Used by switches and tabs."""
        return replace(self, location=location)


def top_parent(context: RouterContext) -> RouterContext:
    """Walk ``parent`` links to the outermost router's context."""
    while context.parent is not None:
        context = context.parent
    return context


def default_context() -> RouterContext:
    """A context for consumers rendered outside any router.

    Links may not work from here. Consumers shown outside the tree
    (modals, overlays) should be handed their router's context instead.
    """
    logger.warning(
        "Using a RouterContext without a Router ancestor. Links may not work; "
        "pass the enclosing router's context to content rendered outside the tree."
    )
    return RouterContext(
        location=RouterLocation(),
        history=MemoryHistory(),
        flags=RouterFlags(is_default=True),
    )
