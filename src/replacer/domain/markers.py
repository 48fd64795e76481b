"""Marker grammar and scanner.

Four marker syntaxes, one per :class:`RuleKind`::

    $$key$$                                     string
    replacer::rust_type!(key; String;)          type
    replacer::rust_expr!(key; 1 + 1;)           expr
    replacer::rust_struct!{pub key; P { x: i32 };}   struct

The crate path in front of ``rust_<kind>!`` is any ``ident(::ident)*``
unless a namespace is given, in which case other paths are plain text.
The fallback after the key is only there so the raw template compiles
on its own; it is never used as a substitution default.

Pure functions, no infrastructure dependencies. The scan is a single
left-to-right pass: Scanning -> (head found) -> parsing the marker ->
Placeholder | MalformedMarker -> Scanning.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from replacer.domain.errors import MalformedMarker
from replacer.domain.identifiers import closing_bracket, is_identifier
from replacer.domain.kinds import RuleKind

STRING_DELIMITER = "$$"

# ``::rust_type!`` and friends; the crate path in front is found by
# walking back from the match, so the search never backtracks.
_MACRO_HEAD = re.compile(r"::rust_(?P<macro>type|expr|struct)!")

# ``(key;`` — the optional ``fallback;`` and the ``)`` follow.
_CALL_OPEN = re.compile(r"\s*(?P<open>\()\s*(?P<key>[^;()]*?)\s*;")

# ``{pub key;`` or ``(key;`` — the fallback struct follows.
_STRUCT_OPEN = re.compile(r"\s*(?P<open>[{(])\s*(?P<pub>pub\s+)?(?P<key>[^;{}()]*?)\s*;")


@dataclass(frozen=True)
class Placeholder:
    """One marker occurrence in template text.

    ``start``/``end`` delimit the whole marker (end exclusive), wrapper
    included. ``syntax`` is the kind the marker was written in.
    """

    start: int
    end: int
    syntax: RuleKind
    key: str
    fallback: str | None = None
    visibility: str = ""  # "pub " on public struct markers


def scan_markers(text: str, namespace: str | None = None) -> Iterator[Placeholder]:
    """Yield every marker in *text*, left to right.

    Runs in time linear in ``len(text)``: the next ``$$`` and the next
    macro head are each searched for once per position they can move to.

    Raises:
        MalformedMarker: a marker is opened but its closing form is
            missing or unparsable. Raised when the scan reaches it.
    """
    pos = 0
    dollar = text.find(STRING_DELIMITER)
    macro = _next_macro(text, 0)
    while True:
        if dollar != -1 and dollar < pos:
            dollar = text.find(STRING_DELIMITER, pos)
        if macro is not None and macro[1] < pos:
            macro = _next_macro(text, pos)

        if macro is None or (dollar != -1 and dollar < macro[1]):
            if dollar == -1:
                return
            placeholder = _parse_string_marker(text, dollar)
        else:
            head, start = macro
            if namespace is not None and text[start : head.start()] != namespace:
                pos = head.end()
                continue
            kind = RuleKind(head.group("macro"))
            if kind is RuleKind.STRUCT:
                placeholder = _parse_struct_marker(text, start, head.end())
            else:
                placeholder = _parse_call_marker(text, start, head.end(), kind)

        yield placeholder
        pos = placeholder.end


def line_col(text: str, offset: int) -> tuple[int, int]:
    """Convert a 0-based *offset* into a 1-based ``(line, column)``."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


# ---------------------------------------------------------------------------
# Macro heads
# ---------------------------------------------------------------------------


def _next_macro(text: str, pos: int) -> tuple[re.Match[str], int] | None:
    """Return the first macro head after *pos* and where its crate path starts.

    Heads with no crate path in front (``rust_type!`` alone) are text.
    """
    for head in _MACRO_HEAD.finditer(text, pos):
        start = _path_start(text, head.start(), pos)
        if start is not None:
            return head, start
    return None


def _path_start(text: str, end: int, floor: int) -> int | None:
    """Walk back from *end* over ``ident(::ident)*``, not past *floor*."""
    start = None
    cursor = end
    while True:
        run = cursor
        while run > floor and _is_ident_char(text[run - 1]):
            run -= 1
        first = run
        while first < cursor and text[first].isdigit():
            first += 1
        if first == cursor:
            return start
        start = first
        if first != run or run - 2 < floor or text[run - 2 : run] != "::":
            return start
        cursor = run - 2


def _is_ident_char(char: str) -> bool:
    return char == "_" or (char.isascii() and char.isalnum())


# ---------------------------------------------------------------------------
# Per-syntax parsers
# ---------------------------------------------------------------------------


def _parse_string_marker(text: str, start: int) -> Placeholder:
    key_start = start + len(STRING_DELIMITER)
    close = text.find(STRING_DELIMITER, key_start)
    if close == -1:
        raise MalformedMarker(start, f"unclosed {STRING_DELIMITER!r}")
    key = text[key_start:close]
    if not is_identifier(key):
        raise MalformedMarker(start, f"{key!r} between {STRING_DELIMITER!r} is not an identifier")
    return Placeholder(
        start=start,
        end=close + len(STRING_DELIMITER),
        syntax=RuleKind.STRING,
        key=key,
    )


def _parse_call_marker(text: str, start: int, args_start: int, kind: RuleKind) -> Placeholder:
    match = _CALL_OPEN.match(text, args_start)
    if match is None:
        raise MalformedMarker(start, f"expected '(key; fallback;)' after rust_{kind}!")
    key = match.group("key")
    if not is_identifier(key):
        raise MalformedMarker(start, f"{key!r} is not an identifier")
    close = closing_bracket(text, match.start("open"))
    if close is None:
        raise MalformedMarker(start, f"unclosed '(' after rust_{kind}!")

    rest = text[match.end() : close].strip()
    fallback: str | None = None
    if rest:
        if not rest.endswith(";"):
            raise MalformedMarker(start, f"expected ';' after the rust_{kind}! fallback")
        fallback = rest[:-1].strip()
    return Placeholder(
        start=start,
        end=close + 1,
        syntax=kind,
        key=key,
        fallback=fallback,
    )


def _parse_struct_marker(text: str, start: int, args_start: int) -> Placeholder:
    match = _STRUCT_OPEN.match(text, args_start)
    if match is None:
        raise MalformedMarker(start, "expected '{key; Name { .. };}' after rust_struct!")
    key = match.group("key")
    if not is_identifier(key):
        raise MalformedMarker(start, f"{key!r} is not an identifier")
    close = closing_bracket(text, match.start("open"))
    if close is None:
        raise MalformedMarker(start, "unclosed rust_struct! body")

    rest = text[match.end() : close].strip()
    if not rest.endswith(";"):
        raise MalformedMarker(start, "expected ';' after the struct fallback")
    fallback = rest[:-1].strip()
    if "{" not in fallback or not fallback.endswith("}"):
        raise MalformedMarker(start, "struct fallback has no field block")

    return Placeholder(
        start=start,
        end=close + 1,
        syntax=RuleKind.STRUCT,
        key=key,
        fallback=fallback,
        visibility="pub " if match.group("pub") else "",
    )
