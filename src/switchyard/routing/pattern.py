"""Claim pattern parsing.

Patterns are ``/``-joined sequences of literal segments and ``:name``
captures, e.g. ``"customers/:id"``.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PatternSegment:
    """A parsed segment of a claim pattern.

    Literal:  ``customers``  (is_param=False)
    Capture:  ``:id``        (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None

    def matches(self, segment: str) -> bool:
        """True if *segment* satisfies this pattern segment."""
        return self.is_param or self.value == segment


def segmentize(path: str) -> tuple[str, ...]:
    """Split a path into its non-empty ``/``-separated components.

    Any query string is ignored. Empty components are dropped, so
    ``"/a//b/"`` and ``"a/b"`` both give ``("a", "b")``.
    """
    pathname, _, _ = path.partition("?")
    return tuple(part for part in pathname.split("/") if part)


def parse_pattern(pattern: str) -> list[PatternSegment]:
    """Parse a claim pattern string into segments.

    Examples::

        "customers"      -> [PatternSegment("customers")]
        "customers/:id"  -> [PatternSegment("customers"),
                             PatternSegment(":id", is_param=True, param_name="id")]
        ""               -> []
    """
    segments: list[PatternSegment] = []
    for part in segmentize(pattern):
        if part.startswith(":") and len(part) > 1:
            segments.append(PatternSegment(value=part, is_param=True, param_name=part[1:]))
        else:
            segments.append(PatternSegment(value=part))
    return segments
