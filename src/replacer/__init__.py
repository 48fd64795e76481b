"""replacer — rule-based templating for compilable source files."""

from __future__ import annotations

from replacer.domain.errors import (
    ApplyError,
    InvalidIdentifier,
    InvalidKey,
    InvalidType,
    InvalidValue,
    KindMismatch,
    MalformedMarker,
    ReplacerError,
    RuleError,
    UnresolvedPlaceholder,
)
from replacer.domain.kinds import RuleKind
from replacer.domain.markers import Placeholder, scan_markers
from replacer.domain.rules import ExprRule, Rule, StringRule, StructRule, TypeRule, rule_for_kind
from replacer.domain.template import RuleSet, Template, TemplateBuilder

__version__ = "0.3.0"

__all__ = [
    "ApplyError",
    "ExprRule",
    "InvalidIdentifier",
    "InvalidKey",
    "InvalidType",
    "InvalidValue",
    "KindMismatch",
    "MalformedMarker",
    "Placeholder",
    "ReplacerError",
    "Rule",
    "RuleError",
    "RuleKind",
    "RuleSet",
    "StringRule",
    "StructRule",
    "Template",
    "TemplateBuilder",
    "TypeRule",
    "UnresolvedPlaceholder",
    "__version__",
    "rule_for_kind",
    "scan_markers",
]
