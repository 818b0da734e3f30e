"""Redirect — navigate somewhere else as a side effect of rendering."""

import logging
from dataclasses import dataclass

from switchyard.context import RouterContext

logger = logging.getLogger("switchyard.router")


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect with no visible output.

    ``render()`` replaces the current history entry synchronously, in
    the same pass that would otherwise have produced stale content, so
    the host never paints the location being redirected away from.
    """

    to: str

    def render(self, context: RouterContext) -> None:
        logger.debug("Redirect from %s to %r", context.location, self.to)
        context.history.navigate(self.to, replace=True)
