"""Lexical validation for placeholder keys and replacement payloads.

Placeholder keys follow the plain identifier grammar
(``[A-Za-z_][A-Za-z0-9_]*``). Type payloads use a relaxed variant that
also admits the punctuation needed to spell paths, generics, references,
lifetimes and arrays. Expression and struct payloads are only checked for
shape (non-empty, balanced brackets).

Pure functions, no side effects. Every validator raises
:class:`InvalidIdentifier` on failure and returns ``None`` otherwise.
"""

from __future__ import annotations

import re

from replacer.domain.errors import InvalidIdentifier

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# One lexeme of a type token. Order matters: ``->`` before ``>``, ``::``
# before the lone-colon failure.
_TYPE_LEXEME = re.compile(
    r"\s+"
    r"|->"
    r"|::"
    r"|'[A-Za-z_][A-Za-z0-9_]*"
    r"|[A-Za-z_][A-Za-z0-9_]*"
    r"|[0-9]+"
    r"|[<>,&\[\]();*+=]"
)

_TYPE_PAIRS: dict[str, str] = {"<": ">", "(": ")", "[": "]"}
_EXPR_PAIRS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}

_STRUCT_HEAD = re.compile(r"^\s*(?P<head>[^{]+?)\s*(?P<body>\{.*\})\s*$", re.DOTALL)

# 'x', '\n', '\u{1F600}'; a lifetime such as 'a never has the closing quote.
_CHAR_LITERAL = re.compile(r"'(?:[^'\\\n]|\\(?:u\{[0-9A-Fa-f]{1,6}\}|[^u]))'")


def is_identifier(value: str) -> bool:
    """Check whether *value* is a plain identifier."""
    return IDENTIFIER_PATTERN.fullmatch(value) is not None


def validate_identifier(value: str) -> None:
    """Validate a placeholder key.

    Fails when *value* is empty, contains characters outside
    ``[A-Za-z0-9_]``, or starts with a digit.

    Examples:
        >>> validate_identifier("replace_with_type")
        >>> validate_identifier("1bad")
        Traceback (most recent call last):
        ...
        replacer.domain.errors.InvalidIdentifier: Invalid identifier '1bad': must not start with a digit
    """
    if not value:
        raise InvalidIdentifier(value, "must not be empty")
    if value[0].isdigit():
        raise InvalidIdentifier(value, "must not start with a digit")
    if not is_identifier(value):
        bad = next(c for c in value if not (c.isascii() and (c.isalnum() or c == "_")))
        raise InvalidIdentifier(value, f"unexpected character {bad!r}")


def validate_type_token(value: str) -> None:
    """Validate a type payload such as ``std::path::PathBuf`` or ``Vec<&'a str>``.

    Accepts identifiers, ``::`` paths, lifetimes, digits (not leading),
    whitespace and the punctuation ``< > , & [ ] ( ) ; * + = ->``.
    Angle brackets, parentheses and square brackets must nest properly.
    """
    stripped = value.strip()
    if not stripped:
        raise InvalidIdentifier(value, "must not be empty", what="type")
    if stripped[0].isdigit():
        raise InvalidIdentifier(value, "must not start with a digit", what="type")

    stack: list[str] = []
    pos = 0
    while pos < len(value):
        match = _TYPE_LEXEME.match(value, pos)
        if match is None:
            raise InvalidIdentifier(
                value, f"unexpected character {value[pos]!r} at offset {pos}", what="type"
            )
        lexeme = match.group()
        if lexeme in _TYPE_PAIRS:
            stack.append(lexeme)
        elif lexeme in _TYPE_PAIRS.values():
            if not stack or _TYPE_PAIRS[stack.pop()] != lexeme:
                raise InvalidIdentifier(
                    value, f"unbalanced {lexeme!r} at offset {pos}", what="type"
                )
        pos = match.end()

    if stack:
        raise InvalidIdentifier(value, f"unclosed {stack[-1]!r}", what="type")


def validate_expression(value: str) -> None:
    """Validate an expression payload: non-empty with balanced brackets."""
    if not value.strip():
        raise InvalidIdentifier(value, "must not be empty", what="expression")
    reason = _unbalanced(value, _EXPR_PAIRS)
    if reason:
        raise InvalidIdentifier(value, reason, what="expression")


def validate_struct_body(value: str) -> None:
    """Validate a struct payload of the form ``Name<generics> { fields }``.

    The head before the braces must be a valid type token and the field
    block must be balanced.
    """
    match = _STRUCT_HEAD.match(value)
    if match is None:
        raise InvalidIdentifier(value, "expected 'Name { fields }'", what="struct")
    head = match.group("head")
    try:
        validate_type_token(head)
    except InvalidIdentifier as exc:
        raise InvalidIdentifier(value, f"bad struct name: {exc.reason}", what="struct") from exc
    reason = _unbalanced(match.group("body"), _EXPR_PAIRS)
    if reason:
        raise InvalidIdentifier(value, reason, what="struct")


def closing_bracket(text: str, open_at: int) -> int | None:
    """Return the offset of the bracket that closes the one at *open_at*.

    ``()``, ``[]`` and ``{}`` must nest; string and char literals are
    skipped. Returns None when the bracket is never closed or a closer
    does not match.
    """
    closers = {close: open_ for open_, close in _EXPR_PAIRS.items()}
    stack: list[str] = []
    offset = open_at
    while offset < len(text):
        end = _literal_end(text, offset)
        if end == -1:
            return None
        if end is not None:
            offset = end
            continue
        char = text[offset]
        if char in _EXPR_PAIRS:
            stack.append(char)
        elif char in closers:
            if not stack or stack.pop() != closers[char]:
                return None
            if not stack:
                return offset
        offset += 1
    return None


def _unbalanced(text: str, pairs: dict[str, str]) -> str | None:
    """Return a reason if brackets in *text* do not nest, else None.

    String and char literals are skipped.
    """
    closers = {close: open_ for open_, close in pairs.items()}
    stack: list[str] = []
    offset = 0
    while offset < len(text):
        end = _literal_end(text, offset)
        if end == -1:
            return "unterminated string literal"
        if end is not None:
            offset = end
            continue
        char = text[offset]
        if char in pairs:
            stack.append(char)
        elif char in closers:
            if not stack or stack.pop() != closers[char]:
                return f"unbalanced {char!r} at offset {offset}"
        offset += 1
    if stack:
        return f"unclosed {stack[-1]!r}"
    return None


def _literal_end(text: str, offset: int) -> int | None:
    """Return the offset just past a literal starting at *offset*.

    None when no string or char literal starts there, -1 when a string
    literal is never terminated. A lone ``'`` is a lifetime, not a literal.
    """
    char = text[offset]
    if char == "'":
        match = _CHAR_LITERAL.match(text, offset)
        return match.end() if match else None
    if char != '"':
        return None
    escaped = False
    for index in range(offset + 1, len(text)):
        if escaped:
            escaped = False
        elif text[index] == "\\":
            escaped = True
        elif text[index] == '"':
            return index + 1
    return -1
