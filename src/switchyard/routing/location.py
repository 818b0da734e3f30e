"""RouterLocation — an immutable, partially-claimed path.

A location is a list of path segments plus a claim index. Segments
before the index are owned by ancestor router nodes; segments after it
are left for descendants. Every operation returns a new location, so a
snapshot handed to one branch of the tree can never observe claims made
by another.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from switchyard.errors import ClaimError
from switchyard.routing.pattern import parse_pattern, segmentize
from switchyard.routing.query import QueryParams


@dataclass(frozen=True, slots=True)
class RouterLocation:
    """A path split into claimed and unclaimed segments.

    Usage::

        location = RouterLocation.from_href("/customers/cus1?sort=date")
        child = location.claim("customers/:id")
        child.params["id"]        # "cus1"
        str(child)                # "[customers/cus1]?sort=date"
        child.link_to("../cus2")  # "/customers/cus2"
    """

    segments: tuple[str, ...] = ()
    claim_index: int = 0
    params: Mapping[str, str] = field(default_factory=dict, hash=False)
    search: str = ""
    _query: QueryParams | None = field(
        default=None, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        if not 0 <= self.claim_index <= len(self.segments):
            msg = f"claim_index {self.claim_index} out of range for {len(self.segments)} segments"
            raise ValueError(msg)
        object.__setattr__(self, "segments", tuple(self.segments))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    # -- Construction --

    @classmethod
    def from_href(cls, href: str) -> "RouterLocation":
        """Parse an href like ``"/a/b?x=1"``. Never raises.

        Empty path components are collapsed and only the first ``?``
        separates the path from the query. A bare trailing ``?`` gives
        an empty query.
        """
        pathname, _, query = href.partition("?")
        return cls(segments=segmentize(pathname), search=f"?{query}" if query else "")

    @classmethod
    def from_url(cls, pathname: str, search: str = "", base_path: str = "") -> "RouterLocation":
        """Build a location from a live URL, stripping *base_path*.

        The base path is only stripped on a segment boundary, so
        ``/embedded`` is not treated as living under ``/embed``.
        """
        if base_path and (pathname == base_path or pathname.startswith(base_path + "/")):
            pathname = pathname[len(base_path) :]
        query = search.removeprefix("?")
        return cls(segments=segmentize(pathname), search=f"?{query}" if query else "")

    # -- Claimed / unclaimed views --

    def claimed_segments(self) -> tuple[str, ...]:
        return self.segments[: self.claim_index]

    def unclaimed_segments(self) -> tuple[str, ...]:
        return self.segments[self.claim_index :]

    def claimed_path(self) -> str:
        """Claimed portion without leading slash or query.

        So for ``"[app/home]/blah?test=true"``, returns ``"app/home"``.
        """
        return "/".join(self.claimed_segments())

    def unclaimed_path(self) -> str:
        """Unclaimed portion without query. ``"blah"`` in the example above."""
        return "/".join(self.unclaimed_segments())

    def claimed_href(self) -> str:
        """Claimed portion with a leading slash. ``"/app/home"`` above."""
        return "/" + self.claimed_path()

    def unclaimed_href(self) -> str:
        """Unclaimed portion plus query, or ``""`` when fully claimed.

        ``"blah?test=true"`` in the example above. Only the path decides
        whether anything is left: a fully claimed location returns ``""``
        even when it carries a query.
        """
        path = self.unclaimed_path()
        return path + self.search if path else ""

    def href(self, *, exclude_search: bool = False) -> str:
        """The entire path (claimed and unclaimed) plus the query."""
        path = "/" + "/".join(self.segments)
        return path if exclude_search else path + self.search

    # -- Claiming --

    def claim(self, pattern: str) -> "RouterLocation":
        """Claim *pattern* starting at the claim index.

        Matching is atomic: every pattern segment must match a present
        segment or nothing is claimed. ``:name`` segments capture into
        ``params``, which accumulate across claims.

        Raises ``ClaimError`` on any mismatch.
        """
        pattern_segments = parse_pattern(pattern)
        remaining = self.unclaimed_segments()

        if not pattern_segments:
            # An empty claim only matches when nothing is left over.
            if remaining:
                raise ClaimError(pattern, str(self))
            return replace(self)

        if len(pattern_segments) > len(remaining):
            raise ClaimError(pattern, str(self))

        params = dict(self.params)
        for seg, actual in zip(pattern_segments, remaining, strict=False):
            if not seg.matches(actual):
                raise ClaimError(pattern, str(self))
            if seg.param_name is not None:
                params[seg.param_name] = actual

        return replace(
            self,
            claim_index=self.claim_index + len(pattern_segments),
            params=params,
        )

    def try_claim(self, pattern: str) -> "RouterLocation | None":
        """Like ``claim()``, but returns None instead of raising ``ClaimError``."""
        try:
            return self.claim(pattern)
        except ClaimError:
            return None

    def claim_all(self) -> "RouterLocation":
        """Claim every remaining segment, whatever it is."""
        return replace(self, claim_index=len(self.segments))

    def rewrite(
        self,
        path: str,
        *,
        preserve_claim_index: bool = False,
        keep_remainder: bool = True,
    ) -> "RouterLocation":
        """Put *path* where the next claim should have matched.

        The segments of *path* replace the same number of leading
        unclaimed segments; the rest of the remainder and the query are
        kept. A node expecting ``app`` at ``/oldapp/foo`` therefore
        rewrites to ``/app/foo``. With ``keep_remainder=False`` the
        result is just the claimed prefix followed by *path*.
        """
        new_segments = segmentize(path)
        if keep_remainder:
            rest = self.unclaimed_segments()[len(new_segments) :]
            search = self.search
        else:
            rest = ()
            search = ""
        claim_index = self.claim_index if preserve_claim_index else self.claim_index + len(new_segments)
        return replace(
            self,
            segments=self.claimed_segments() + new_segments + rest,
            claim_index=claim_index,
            search=search,
        )

    # -- Links --

    def link_to(self, target: str) -> str:
        """Resolve a possibly-relative target to an absolute href.

        - ``"/x"`` is already absolute and returned unchanged.
        - ``"?a=b"`` replaces the query of the full current path;
          a bare ``"?"`` clears it.
        - Anything else resolves against the claimed prefix, with
          ``..`` popping one claimed segment and ``.`` ignored.
        """
        if target.startswith("/"):
            return target

        if target.startswith("?"):
            query = "" if target == "?" else target
            return self.href(exclude_search=True) + query

        pathname, _, query = target.partition("?")
        resolved = list(self.claimed_segments())
        for segment in segmentize(pathname):
            if segment == "..":
                if resolved:
                    resolved.pop()
            elif segment != ".":
                resolved.append(segment)

        href = "/" + "/".join(resolved)
        return f"{href}?{query}" if query else href

    def is_link_active(self, target: str, *, prefix_only: bool = False) -> bool:
        """True if *target* resolves to the current path (query ignored).

        With ``prefix_only``, also true when the current path lives
        underneath the resolved one.
        """
        path = self.link_to(target).partition("?")[0]
        current = self.href(exclude_search=True)
        if current == path:
            return True
        return prefix_only and current.startswith(path.rstrip("/") + "/")

    # -- Query --

    def search_params(self) -> QueryParams:
        """Read-only view over the query, parsed once and memoized."""
        if self._query is None:
            object.__setattr__(self, "_query", QueryParams(self.search))
        return self._query  # type: ignore[return-value]

    def search_record(self) -> dict[str, str]:
        """Query as a plain dict. Keys present without a value become ``"true"``."""
        return {key: value or "true" for key, value in self.search_params().multi_items()}

    def with_params(self, params: Mapping[str, str | None]) -> "RouterLocation":
        """Return a location with query keys set, or removed when None."""
        query = str(self.search_params().replace(params))
        return replace(self, search=f"?{query}" if query else "")

    def with_param(self, name: str, value: str | None) -> "RouterLocation":
        return self.with_params({name: value})

    # -- Serialization --

    def serialize(self) -> str:
        return json.dumps(
            {
                "search": self.search,
                "params": dict(self.params),
                "segments": list(self.segments),
                "claim_index": self.claim_index,
            }
        )

    @classmethod
    def deserialize(cls, serialized: str) -> "RouterLocation":
        data = json.loads(serialized)
        return cls(
            segments=tuple(data["segments"]),
            claim_index=data["claim_index"],
            params=data["params"],
            search=data["search"],
        )

    def equals(self, other: "RouterLocation", *, exclude_search: bool = False) -> bool:
        """Compare by href only, ignoring claim state and params."""
        return self.href(exclude_search=exclude_search) == other.href(exclude_search=exclude_search)

    def __str__(self) -> str:
        claimed = self.claimed_segments()
        remaining = self.unclaimed_segments()

        text = ""
        if claimed:
            text += "[" + "/".join(claimed) + "]"
        if claimed and remaining:
            text += "/"
        if remaining:
            text += "/".join(remaining)
        text += self.search
        return text or "/"
