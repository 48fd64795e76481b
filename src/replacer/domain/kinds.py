"""Rule kinds.

A closed set: every kind has exactly one marker syntax in template text
and one rule variant in :mod:`replacer.domain.rules`.
"""

from __future__ import annotations

from enum import StrEnum


class RuleKind(StrEnum):
    """Kinds of substitution rules (and of the markers they resolve)."""

    STRING = "string"
    TYPE = "type"
    EXPR = "expr"
    STRUCT = "struct"
