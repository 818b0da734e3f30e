"""Switchyard — claim-based hierarchical routing for client-side apps.

Router nodes progressively claim leading path segments as ownership is
delegated down a render tree. Relative links resolve against what has
been claimed, like ``../`` and ``./`` in a filesystem.

Basic usage::

    from switchyard import MemoryHistory, Route, Router, Switch

    switch = Switch(
        Route("customers/:id", lambda ctx: f"customer {ctx.location.params['id']}"),
        Route(None, lambda ctx: "home"),
    )
    router = Router(switch.render, history=MemoryHistory("/customers/cus1"))

    with router.mounted():
        router.render()  # "customer cus1"

Standalone locations need no history at all::

    from switchyard import RouterLocation

    RouterLocation.from_href("/customers/cus1").claim_all().link_to("../../orders")
    # "/orders"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "BrowserHistory",
    "BrowserPlatform",
    "ClaimError",
    "ClickEvent",
    "ConfigurationError",
    "Link",
    "MemoryHistory",
    "NavigationError",
    "Redirect",
    "RelativeNavigationError",
    "Route",
    "Router",
    "RouterConfig",
    "RouterContext",
    "RouterFlags",
    "RouterLocation",
    "SimulatedBrowser",
    "Switch",
    "SwitchyardError",
    "Tab",
    "Tabs",
    "create_history",
    "top_parent",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    if name == "RouterLocation":
        from switchyard.routing.location import RouterLocation

        return RouterLocation

    if name in ("BrowserHistory", "BrowserPlatform", "MemoryHistory", "SimulatedBrowser"):
        from switchyard import history as _history

        return getattr(_history, name)

    if name in ("RouterConfig", "create_history"):
        from switchyard import config as _config

        return getattr(_config, name)

    if name in ("RouterContext", "RouterFlags", "top_parent"):
        from switchyard import context as _ctx

        return getattr(_ctx, name)

    if name == "Router":
        from switchyard.router import Router

        return Router

    if name == "Redirect":
        from switchyard.redirect import Redirect

        return Redirect

    if name in ("Route", "Switch"):
        from switchyard import switch as _switch

        return getattr(_switch, name)

    if name in ("ClickEvent", "Link"):
        from switchyard import link as _link

        return getattr(_link, name)

    if name in ("Tab", "Tabs"):
        from switchyard import tabs as _tabs

        return getattr(_tabs, name)

    if name in (
        "ClaimError",
        "ConfigurationError",
        "NavigationError",
        "RelativeNavigationError",
        "SwitchyardError",
    ):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
