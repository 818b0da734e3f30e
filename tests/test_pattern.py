"""Tests for switchyard.routing.pattern — claim pattern parsing."""

from switchyard.routing.pattern import PatternSegment, parse_pattern, segmentize


class TestSegmentize:
    def test_basic(self) -> None:
        assert segmentize("/customers/cus1") == ("customers", "cus1")

    def test_drops_empty_components(self) -> None:
        assert segmentize("//a///b/") == ("a", "b")

    def test_ignores_query(self) -> None:
        assert segmentize("/a/b?x=/c") == ("a", "b")

    def test_root(self) -> None:
        assert segmentize("/") == ()
        assert segmentize("") == ()


class TestParsePattern:
    def test_static(self) -> None:
        segments = parse_pattern("customers")
        assert segments == [PatternSegment("customers")]
        assert segments[0].is_param is False

    def test_param(self) -> None:
        segments = parse_pattern("customers/:id")
        assert len(segments) == 2
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"

    def test_leading_slash_ignored(self) -> None:
        assert parse_pattern("/customers") == parse_pattern("customers")

    def test_empty(self) -> None:
        assert parse_pattern("") == []

    def test_bare_colon_is_literal(self) -> None:
        segments = parse_pattern(":")
        assert segments[0].is_param is False


class TestMatches:
    def test_literal(self) -> None:
        seg = PatternSegment("customers")
        assert seg.matches("customers")
        assert not seg.matches("orders")

    def test_param_matches_anything(self) -> None:
        seg = PatternSegment(":id", is_param=True, param_name="id")
        assert seg.matches("cus1")
        assert seg.matches("orders")
