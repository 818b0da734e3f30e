"""Shared type aliases used across switchyard modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

if TYPE_CHECKING:
    from switchyard.context import RouterContext
    from switchyard.routing.location import RouterLocation

# History discriminant, checked with ``match``
HistoryKind: TypeAlias = Literal["memory", "browser"]

# Called with the new location after every committed navigation
NavigateListener: TypeAlias = Callable[["RouterLocation"], Any]

# Called with the target href before navigating; returning False vetoes
BeforeNavigateListener: TypeAlias = Callable[[str], bool | None]

# Returned by listen()/before_navigate()
Unsubscribe: TypeAlias = Callable[[], None]

# Renders a subtree for a context snapshot and returns any output
Renderer: TypeAlias = Callable[["RouterContext"], Any]
