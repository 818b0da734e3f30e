"""Switch and Route — declarative first-match-wins selection.

Built entirely on ``RouterLocation.try_claim``. Routes are evaluated in
declaration order and evaluation stops at the first match.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from switchyard._internal.types import Renderer
from switchyard.context import RouterContext
from switchyard.redirect import Redirect
from switchyard.routing.location import RouterLocation

logger = logging.getLogger("switchyard.switch")


@dataclass(frozen=True, slots=True)
class Route:
    """A candidate subtree for a ``Switch``.

    A route without a path is the default: it matches whenever it is
    reached. With ``redirect=True`` the default route instead sends any
    leftover path back to the switch's own root.
    """

    path: str | None
    render: Renderer
    redirect: bool = False

    def match(self, location: RouterLocation) -> "SelectedRoute | None":
        if self.path:
            claimed = location.try_claim(self.path)
            return SelectedRoute(self, claimed) if claimed is not None else None

        claimed = location.try_claim("")
        if claimed is not None:
            return SelectedRoute(self, claimed)
        if self.redirect:
            return SelectedRoute(self, location.rewrite("", keep_remainder=False), redirect=True)
        # Keep the remaining path for the default route to deal with.
        return SelectedRoute(self, location)


@dataclass(frozen=True, slots=True)
class SelectedRoute:
    """Result of a switch selection."""

    route: Route
    location: RouterLocation
    redirect: bool = False


class Switch:
    """Renders only the first ``Route`` whose path claims the location.

    Usage::

        switch = Switch(
            Route("customers/:id", show_customer),
            Route("customers", list_customers),
            Route(None, home, redirect=True),
        )
        output = switch.render(context)
    """

    def __init__(
        self,
        *routes: Route,
        on_render: Callable[[Route, RouterLocation], None] | None = None,
    ) -> None:
        self.routes = routes
        self.on_render = on_render

    def select(self, location: RouterLocation) -> SelectedRoute | None:
        for route in self.routes:
            selected = route.match(location)
            if selected is not None:
                return selected
        return None

    def render(self, context: RouterContext) -> Any:
        selected = self.select(context.location)

        if selected is None:
            logger.debug("No routes matched %s and no default found", context.location)
            return None

        if selected.redirect:
            logger.debug("No routes matched. Redirecting to %s", selected.location)
            return Redirect(selected.location.href()).render(context)

        logger.debug("Selected route %r for %s", selected.route.path, context.location)
        if self.on_render is not None:
            self.on_render(selected.route, selected.location)
        return selected.route.render(context.with_location(selected.location))
