"""Tabs — headless tab selection with per-tab location memory.

Each tab claims a path. Leaving a tab and coming back returns the user
to the deepest location they had reached inside it, so tab links for
inactive tabs point at that remembered location.
"""

import logging
from dataclasses import dataclass
from typing import Any

from switchyard._internal.types import Renderer
from switchyard.context import RouterContext
from switchyard.errors import ConfigurationError
from switchyard.redirect import Redirect
from switchyard.routing.location import RouterLocation

logger = logging.getLogger("switchyard.tabs")


@dataclass(frozen=True, slots=True)
class Tab:
    """A tab owning ``path``.

    ``initial_path`` is appended to the tab's link until it has been
    visited, for tabs whose root isn't a useful landing page.
    """

    path: str
    render: Renderer
    title: str = ""
    initial_path: str | None = None


@dataclass(frozen=True, slots=True)
class SelectedTab:
    tab: Tab
    location: RouterLocation
    redirect: bool = False


@dataclass(frozen=True, slots=True)
class TabLinkState:
    tab: Tab
    href: str
    selected: bool


@dataclass(frozen=True, slots=True)
class TabsView:
    """What a tab bar host needs: the selected tab's output and every link."""

    selected: Tab
    content: Any
    links: tuple[TabLinkState, ...]


class Tabs:
    """Selects the first tab whose path claims the location.

    When none does, redirects to the first tab.
    """

    def __init__(self, *tabs: Tab) -> None:
        if not tabs:
            msg = "Tabs needs at least one Tab"
            raise ConfigurationError(msg)
        self.tabs = tabs
        self._locations: dict[str, RouterLocation] = {}

    def select(self, location: RouterLocation) -> SelectedTab:
        for tab in self.tabs:
            claimed = location.try_claim(tab.path)
            if claimed is not None:
                return SelectedTab(tab, claimed)

        first = self.tabs[0]
        return SelectedTab(first, location.rewrite(first.path, keep_remainder=False), redirect=True)

    def remembered(self, tab: Tab) -> RouterLocation | None:
        """The last location rendered inside *tab*, if it was ever selected."""
        return self._locations.get(tab.path)

    def tab_link(self, tab: Tab, context: RouterContext) -> str:
        selected = self.select(context.location).tab
        remembered = self.remembered(tab)

        # Come back to whatever deep content was left open on this tab.
        if remembered is not None and tab is not selected:
            return remembered.href()

        parts = [tab.path]
        # Tapping the current tab always goes back to its root.
        if tab.initial_path and tab is not selected:
            parts.append(tab.initial_path)
        return context.location.link_to("/".join(parts))

    def render(self, context: RouterContext) -> TabsView | None:
        selected = self.select(context.location)

        if selected.redirect:
            logger.debug("Location does not match any tabs. Redirecting to %s", selected.location)
            return Redirect(selected.location.href()).render(context)

        self._locations[selected.tab.path] = selected.location
        content = selected.tab.render(context.with_location(selected.location))
        links = tuple(
            TabLinkState(tab=tab, href=self.tab_link(tab, context), selected=tab is selected.tab)
            for tab in self.tabs
        )
        return TabsView(selected=selected.tab, content=content, links=links)
