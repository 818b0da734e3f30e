"""History — where the current location lives and how navigation happens.

Two variants share one contract and are told apart by ``history.kind``
(``"memory"`` or ``"browser"``).
"""

from switchyard.history.browser import BrowserHistory
from switchyard.history.memory import MemoryHistory
from switchyard.history.platform import BrowserPlatform, SimulatedBrowser

History = MemoryHistory | BrowserHistory

__all__ = [
    "BrowserHistory",
    "BrowserPlatform",
    "History",
    "MemoryHistory",
    "SimulatedBrowser",
]
