"""Switchyard exception hierarchy.

Shared across locations, histories, and router nodes so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when router configuration is invalid.

    Typically caught by ``RouterConfig.validate()`` before a history
    is created.
    """


@dataclass(slots=True)
class ClaimError(SwitchyardError):
    """A pattern could not be claimed from a location.

    Raised by ``RouterLocation.claim()`` when a literal segment does not
    match, when fewer segments remain than the pattern needs, or when
    the location is already fully claimed. ``try_claim()`` suppresses
    exactly this type.
    """

    pattern: str
    location: str = ""

    def __str__(self) -> str:
        return f'Could not claim "{self.pattern}" from location "{self.location}"'


class NavigationError(SwitchyardError):
    """Base for errors raised by ``History.navigate()``."""


class RelativeNavigationError(NavigationError, ValueError):
    """A relative path was passed to ``History.navigate()``.

    Relative targets must be resolved through ``location.link_to()``
    first; histories never guess what they are relative to.
    """

    def __init__(self, to: str) -> None:
        self.to = to
        super().__init__(
            f'Cannot navigate to the relative path "{to}". '
            "Try calling location.link_to() from your current context "
            "to get an absolute path."
        )
