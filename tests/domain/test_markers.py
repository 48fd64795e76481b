"""Tests for the marker scanner."""

from __future__ import annotations

import time

import pytest

from replacer.domain.errors import MalformedMarker
from replacer.domain.kinds import RuleKind
from replacer.domain.markers import Placeholder, line_col, scan_markers


def _scan(text: str, namespace: str | None = None) -> list[Placeholder]:
    return list(scan_markers(text, namespace))


class TestStringMarkers:
    def test_single(self) -> None:
        text = "Hello $$replace$$!"
        [marker] = _scan(text)
        assert marker == Placeholder(start=6, end=17, syntax=RuleKind.STRING, key="replace")
        assert text[marker.start : marker.end] == "$$replace$$"

    def test_multiple_in_order(self) -> None:
        markers = _scan("$$a$$ and $$b$$, then $$a$$")
        assert [m.key for m in markers] == ["a", "b", "a"]
        assert all(m.syntax is RuleKind.STRING for m in markers)

    def test_adjacent(self) -> None:
        assert [m.key for m in _scan("$$a$$$$b$$")] == ["a", "b"]

    def test_no_markers(self) -> None:
        assert _scan("Hello world!") == []
        assert _scan("") == []

    def test_single_dollar_is_text(self) -> None:
        assert _scan("cost: $5, $name") == []

    def test_unclosed(self) -> None:
        with pytest.raises(MalformedMarker) as exc_info:
            _scan("ok $$a$$ then $$broken")
        assert exc_info.value.position == 14

    @pytest.mark.parametrize("text", ["$$bad key$$", "$$$$", "$$1x$$"])
    def test_non_identifier_key(self, text: str) -> None:
        with pytest.raises(MalformedMarker) as exc_info:
            _scan(text)
        assert exc_info.value.position == 0

    def test_earlier_markers_yielded_before_error(self) -> None:
        scanner = scan_markers("$$a$$ $$")
        assert next(scanner).key == "a"
        with pytest.raises(MalformedMarker):
            next(scanner)


class TestTypeMarkers:
    def test_type_marker(self) -> None:
        text = "let x = <replacer::rust_type!(replace; String;)>::new();"
        [marker] = _scan(text)
        assert marker.syntax is RuleKind.TYPE
        assert marker.key == "replace"
        assert marker.fallback == "String"
        assert text[marker.start : marker.end] == "replacer::rust_type!(replace; String;)"

    def test_spaced_closing(self) -> None:
        text = "<crate_path::rust_type!( key ; default ; )>"
        [marker] = _scan(text)
        assert marker.key == "key"
        assert marker.fallback == "default"
        assert text[marker.end] == ">"

    def test_fallback_optional(self) -> None:
        [marker] = _scan("pkg::rust_type!(t;)")
        assert marker.key == "t"
        assert marker.fallback is None

    def test_nested_path(self) -> None:
        [marker] = _scan("my::deep::path::rust_type!(t; u8;)")
        assert marker.start == 0

    def test_generic_fallback(self) -> None:
        [marker] = _scan("pkg::rust_type!(t; HashMap<String, Vec<u8>>;)")
        assert marker.fallback == "HashMap<String, Vec<u8>>"

    def test_two_in_one_line(self) -> None:
        text = "Map<pkg::rust_type!(a; String;), pkg::rust_type!(b; String;)>::new()"
        assert [m.key for m in _scan(text)] == ["a", "b"]

    def test_expr_marker(self) -> None:
        [marker] = _scan("let two = replacer::rust_expr!(answer; 2 + 2;);")
        assert marker.syntax is RuleKind.EXPR
        assert marker.key == "answer"
        assert marker.fallback == "2 + 2"

    @pytest.mark.parametrize(
        ("text", "fallback"),
        [
            ("pkg::rust_type!(t; [u8; 4];)", "[u8; 4]"),
            ("pkg::rust_type!(t; [[u8; 4]; 2];)", "[[u8; 4]; 2]"),
            ("pkg::rust_expr!(e; [0u8; 4];)", "[0u8; 4]"),
            ("pkg::rust_expr!(e; { let a = 1; a + 1 };)", "{ let a = 1; a + 1 }"),
            ("pkg::rust_expr!(e; f(\")\");)", "f(\")\")"),
        ],
    )
    def test_fallback_with_semicolons_and_brackets(self, text: str, fallback: str) -> None:
        [marker] = _scan(f"let a = {text};")
        assert marker.fallback == fallback
        assert marker.end == len(text) + len("let a = ")

    def test_without_path_is_text(self) -> None:
        assert _scan("rust_type!(t; u8;)") == []

    def test_path_after_absolute_prefix(self) -> None:
        text = "::replacer::rust_type!(t; u8;)"
        [marker] = _scan(text)
        assert text[marker.start :].startswith("replacer::")

    def test_path_does_not_start_with_digit(self) -> None:
        text = "9abc::rust_type!(t; u8;)"
        [marker] = _scan(text)
        assert marker.start == 1

    @pytest.mark.parametrize(
        "text",
        [
            "pkg::rust_type!",
            "pkg::rust_type!(t String)",
            "pkg::rust_type!(t; String;",
            "pkg::rust_type![t; String;]",
            "pkg::rust_type!(bad key; String;)",
            "pkg::rust_type!(t; [u8; 4])",
        ],
    )
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedMarker) as exc_info:
            _scan(text)
        assert exc_info.value.position == 0


class TestStructMarkers:
    def test_private(self) -> None:
        text = "replacer::rust_struct!{point; Point{ x: i32, y: i32 };}"
        [marker] = _scan(text)
        assert marker.syntax is RuleKind.STRUCT
        assert marker.key == "point"
        assert marker.visibility == ""
        assert marker.fallback == "Point{ x: i32, y: i32 }"
        assert marker.end == len(text)

    def test_public_with_space_and_parens(self) -> None:
        text = "replacer::rust_struct! (pub point; Point { x: i32 };) // tail"
        [marker] = _scan(text)
        assert marker.visibility == "pub "
        assert text[marker.end :] == " // tail"

    def test_nested_braces_in_fallback(self) -> None:
        text = "r::rust_struct!{s; S { inner: Wrapper<{ 3 }> };}"
        [marker] = _scan(text)
        assert marker.end == len(text)

    def test_braces_in_literals_are_ignored(self) -> None:
        text = "r::rust_struct!{s; S { open: [char; 1] = ['{'], tag: &'static str = \"}\" };} tail"
        [marker] = _scan(text)
        assert text[marker.end :] == " tail"

    @pytest.mark.parametrize(
        "text",
        [
            "r::rust_struct!{s; S;}",
            "r::rust_struct!{s; S { x: i32 ;}",
            "r::rust_struct!{s; S { x: i32 };)",
            "r::rust_struct!s; S { x: i32 };",
        ],
    )
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedMarker):
            _scan(text)


class TestNamespace:
    def test_matching_namespace(self) -> None:
        assert len(_scan("replacer::rust_type!(t; u8;)", namespace="replacer")) == 1

    def test_foreign_path_is_text(self) -> None:
        assert _scan("other::rust_type!(t; u8;)", namespace="replacer") == []

    def test_foreign_path_not_parsed(self) -> None:
        # Would be malformed if parsed.
        assert _scan("other::rust_type!(", namespace="replacer") == []

    def test_string_markers_ignore_namespace(self) -> None:
        assert len(_scan("$$a$$", namespace="replacer")) == 1


class TestLineCol:
    def test_first_line(self) -> None:
        assert line_col("abc", 0) == (1, 1)
        assert line_col("abc", 2) == (1, 3)

    def test_later_line(self) -> None:
        text = "first\nsecond\n  $$x$$"
        assert line_col(text, text.index("$$")) == (3, 3)


class TestScanCost:
    """Scanning stays linear on long runs that look like crate paths."""

    LIMIT_SECONDS = 1.0

    @pytest.mark.parametrize(
        "text",
        [
            "a" * 50_000,
            "a::" * 20_000,
            "x9" * 25_000 + "::rust_type",
            "$$a$$ " * 5_000 + "pkg::rust_type!(t; u8;)",
        ],
        ids=["ident-run", "path-run", "near-miss", "many-markers"],
    )
    def test_linear(self, text: str) -> None:
        started = time.perf_counter()
        list(scan_markers(text))
        assert time.perf_counter() - started < self.LIMIT_SECONDS
