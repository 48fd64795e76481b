"""Substitution rules — one frozen variant per :class:`RuleKind`.

A rule binds a placeholder key to a replacement payload. Both are
validated in ``__post_init__``; an invalid rule is never constructed, so
``Template.apply`` never has to re-check payloads.

INVARIANT: rules are immutable once constructed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import ClassVar

from replacer.domain.errors import InvalidIdentifier, InvalidKey, InvalidType, InvalidValue
from replacer.domain.identifiers import (
    validate_expression,
    validate_identifier,
    validate_struct_body,
    validate_type_token,
)
from replacer.domain.kinds import RuleKind


def _check_key(key: str) -> None:
    try:
        validate_identifier(key)
    except InvalidIdentifier as exc:
        raise InvalidKey(key, exc.reason) from exc


def _check_payload(key: str, value: str, validator: Callable[[str], None]) -> None:
    try:
        validator(value)
    except InvalidIdentifier as exc:
        raise InvalidValue(key, value, exc.reason) from exc


@dataclass(frozen=True, slots=True)
class StringRule:
    """Replace ``$$key$$`` with *value*, verbatim.

    No escaping is performed; the output is plain text. Empty values are
    accepted unless ``allow_empty=False``.

    Examples:
        >>> StringRule("replace", "world").render()
        'world'
    """

    kind: ClassVar[RuleKind] = RuleKind.STRING

    key: str
    value: str
    allow_empty: bool = field(default=True, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_key(self.key)
        if not self.allow_empty and not self.value:
            raise InvalidValue(self.key, self.value, "must not be empty")

    def render(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class TypeRule:
    """Replace ``path::rust_type!(key; Fallback;)`` with a type token.

    Examples:
        >>> TypeRule("replace_with_type", "std::path::PathBuf").render()
        'std::path::PathBuf'
    """

    kind: ClassVar[RuleKind] = RuleKind.TYPE

    key: str
    value: str

    def __post_init__(self) -> None:
        _check_key(self.key)
        try:
            validate_type_token(self.value)
        except InvalidIdentifier as exc:
            raise InvalidType(self.key, self.value, exc.reason) from exc

    def render(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ExprRule:
    """Replace ``path::rust_expr!(key; fallback;)`` with an expression."""

    kind: ClassVar[RuleKind] = RuleKind.EXPR

    key: str
    value: str

    def __post_init__(self) -> None:
        _check_key(self.key)
        _check_payload(self.key, self.value, validate_expression)

    def render(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StructRule:
    """Replace ``path::rust_struct!{key; Name { .. };}`` with a struct declaration.

    *value* is the declaration without the ``struct`` keyword, e.g.
    ``"Point2D { x: i32, y: i32 }"``. A ``pub`` written in the marker is
    kept by the engine in front of the rendered text.
    """

    kind: ClassVar[RuleKind] = RuleKind.STRUCT

    key: str
    value: str

    def __post_init__(self) -> None:
        _check_key(self.key)
        _check_payload(self.key, self.value, validate_struct_body)

    def render(self) -> str:
        return f"struct {self.value.strip()}"


Rule = StringRule | TypeRule | ExprRule | StructRule

RULE_TYPES: dict[RuleKind, type[Rule]] = {
    RuleKind.STRING: StringRule,
    RuleKind.TYPE: TypeRule,
    RuleKind.EXPR: ExprRule,
    RuleKind.STRUCT: StructRule,
}


def rule_for_kind(kind: RuleKind | str, key: str, value: str) -> Rule:
    """Construct the rule variant for *kind*.

    Raises ``ValueError`` for an unknown kind, or the variant's
    :class:`RuleError` if *key* or *value* is invalid.
    """
    try:
        rule_kind = RuleKind(kind)
    except ValueError:
        valid = ", ".join(k.value for k in RuleKind)
        msg = f"Unknown rule kind {kind!r}. Valid: {valid}"
        raise ValueError(msg) from None
    return RULE_TYPES[rule_kind](key, value)
