"""In-memory history. The location lives only in this process."""

from typing import Literal

from switchyard.history.base import HistoryBase
from switchyard.routing.location import RouterLocation


class MemoryHistory(HistoryBase):
    """History with no external synchronization source.

    Used by default for routers that aren't given a history, for
    embedded sub-routers, and in tests::

        history = MemoryHistory("/customers")
        history.navigate("/orders")
        history.top().href()  # "/orders"
    """

    kind: Literal["memory"] = "memory"

    def __init__(self, initial_path: str | None = None) -> None:
        super().__init__()
        self.location = RouterLocation.from_href(initial_path) if initial_path else RouterLocation()

    def top(self) -> RouterLocation:
        return self.location

    def _commit(self, to: str, *, replace: bool) -> RouterLocation:
        self.location = RouterLocation.from_href(to)
        return self.location
