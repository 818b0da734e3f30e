"""Router configuration.

RouterConfig gathers the options that pick and set up a History. It is
frozen, and ``validate()`` rejects combinations that cannot work
before any history is built.
"""

from dataclasses import dataclass

from switchyard._internal.types import HistoryKind
from switchyard.errors import ConfigurationError
from switchyard.history import BrowserHistory, BrowserPlatform, History, MemoryHistory


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(history="browser", base_path="/embed")
        history = create_history(config, platform=browser)
    """

    # Which history variant to build
    history: HistoryKind = "memory"

    # Memory history
    initial_path: str | None = None

    # Browser history
    base_path: str = ""  # e.g. "/embed"; no trailing slash
    always_reload_page: bool = False

    # Flags handed to the root router
    is_mobile_app: bool = False

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if the configuration is inconsistent."""
        if self.history not in ("memory", "browser"):
            msg = f"Unknown history kind {self.history!r}. Expected 'memory' or 'browser'."
            raise ConfigurationError(msg)

        if self.base_path:
            if not self.base_path.startswith("/"):
                msg = f"base_path must start with '/', got {self.base_path!r}"
                raise ConfigurationError(msg)
            if self.base_path.endswith("/"):
                msg = f"base_path must not end with '/', got {self.base_path!r}"
                raise ConfigurationError(msg)

        if self.initial_path is not None and not self.initial_path.startswith("/"):
            msg = f"initial_path must be absolute, got {self.initial_path!r}"
            raise ConfigurationError(msg)

        if self.history == "memory" and (self.base_path or self.always_reload_page):
            msg = "base_path and always_reload_page only apply to browser history"
            raise ConfigurationError(msg)


def create_history(config: RouterConfig, platform: BrowserPlatform | None = None) -> History:
    """Build the history variant described by *config*.

    Browser history needs a *platform* to talk to.
    """
    config.validate()
    match config.history:
        case "memory":
            return MemoryHistory(config.initial_path)
        case "browser":
            if platform is None:
                msg = "Browser history requires a BrowserPlatform"
                raise ConfigurationError(msg)
            return BrowserHistory(
                platform,
                base_path=config.base_path,
                always_reload_page=config.always_reload_page,
            )
