"""Link — in-app anchors that navigate through history.

A link computes two hrefs: the one shown on the anchor (including the
browser history's ``base_path``, so "open in new tab" and "copy link"
work) and the one handed to ``history.navigate`` (without it, since the
history re-applies it). Qualifying clicks are intercepted; everything
else falls through to native browser behavior.
"""

import html
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from kida import Environment
from kida.template import Markup

from switchyard.context import RouterContext
from switchyard.history import History

EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "blob:")


def looks_like_href(link: str) -> bool:
    """True for links that leave the app (other schemes)."""
    return link.startswith(EXTERNAL_PREFIXES)


@dataclass(slots=True)
class ClickEvent:
    """The parts of a mouse click that decide whether to intercept it."""

    button: int = 0
    meta_key: bool = False
    alt_key: bool = False
    ctrl_key: bool = False
    shift_key: bool = False
    default_prevented: bool = False
    propagation_stopped: bool = False

    @property
    def has_modifier(self) -> bool:
        return self.meta_key or self.alt_key or self.ctrl_key or self.shift_key

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


def should_navigate(history: History, href: str, target: str | None, event: ClickEvent) -> bool:
    """Decide whether a click should become ``history.navigate()``.

    Only plain primary-button clicks on same-window in-app links qualify.
    """
    match history.kind:
        case "browser" if history.always_reload_page:  # type: ignore[union-attr]
            # Let the anchor do a full page load.
            return False

    return (
        target in (None, "", "_self")
        and not looks_like_href(href)
        and not event.default_prevented
        and event.button == 0
        and not event.has_modifier
    )


@dataclass(frozen=True, slots=True)
class ResolvedLink:
    """A link resolved against a router context.

    ``href`` is what gets navigated to; ``display_href`` is what the
    anchor shows. ``active`` means the current path is exactly the
    link's path (query ignored); ``prefix_active`` means it is that path
    or somewhere underneath it.
    """

    href: str
    display_href: str
    active: bool = False
    prefix_active: bool = False
    external: bool = False


def attr(value: Any, name: str) -> str | Markup:
    """Output an HTML attribute when value is truthy, else empty string."""
    if not value:
        return ""
    return Markup(f' {name}="{html.escape(str(value))}"')


def attrs(values: Mapping[str, Any]) -> Markup:
    """Output several optional attributes in order."""
    return Markup("".join(str(attr(value, name)) for name, value in values.items()))


_env = Environment(autoescape=True)
_env.update_filters({"attr": attr, "attrs": attrs})
_ANCHOR = _env.from_string(
    '<a href="{{ href }}"{{ target | attr("target") }}{{ extra | attrs }}'
    ' data-active="{{ active }}" data-prefix-active="{{ prefix_active }}"'
    ' data-disabled="{{ disabled }}">{{ label }}</a>'
)


class Link:
    """An anchor to a possibly-relative target.

    Usage::

        link = Link("../orders")
        link.resolve(context).href       # "/orders"
        link.click(context, ClickEvent())  # navigates, returns True

    ``to=None`` makes a dead link that renders ``href="#"`` and does
    nothing when clicked.
    """

    def __init__(
        self,
        to: str | None,
        *,
        replace: bool = False,
        target: str | None = None,
        disabled: bool = False,
        on_click: Callable[[ClickEvent], None] | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        self.to = to
        self.replace = replace
        self.target = target
        self.disabled = disabled
        self.on_click = on_click
        self.extra = dict(extra or {})

    def resolve(self, context: RouterContext) -> ResolvedLink:
        if not self.to:
            return ResolvedLink(href="#", display_href="#")

        if looks_like_href(self.to):
            return ResolvedLink(href=self.to, display_href=self.to, external=True)

        match context.history.kind:
            case "browser":
                base_path = context.history.base_path  # type: ignore[union-attr]
            case _:
                base_path = ""

        location = context.location
        href = location.link_to(self.to)
        return ResolvedLink(
            href=href,
            display_href=base_path + href,
            active=location.is_link_active(href),
            prefix_active=location.is_link_active(href, prefix_only=True),
        )

    def click(self, context: RouterContext, event: ClickEvent) -> bool:
        """Handle a click. Returns True if it was turned into navigation."""
        if self.on_click is not None:
            self.on_click(event)

        if not self.to or self.disabled:
            event.prevent_default()
            return False

        resolved = self.resolve(context)
        if not should_navigate(context.history, resolved.href, self.target, event):
            return False

        event.prevent_default()
        event.stop_propagation()
        context.history.navigate(resolved.href, replace=self.replace)
        return True

    def render(self, context: RouterContext, label: str) -> Markup:
        """Render the anchor tag. *label* is escaped."""
        resolved = self.resolve(context)
        return Markup(
            _ANCHOR.render(
                {
                    "href": resolved.display_href,
                    "target": self.target,
                    "extra": self.extra,
                    "active": str(resolved.active).lower(),
                    "prefix_active": str(resolved.prefix_active).lower(),
                    "disabled": str(self.disabled).lower(),
                    "label": label,
                }
            )
        )
