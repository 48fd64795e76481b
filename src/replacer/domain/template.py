"""Template engine — rule set, builder, and single-pass application.

Usage::

    template = (
        TemplateBuilder()
        .rule(StringRule("replace_with_world", "world"))
        .rule(TypeRule("replace_with_type", "std::path::PathBuf"))
        .build()
    )
    template.apply('println!("Hello $$replace_with_world$$!");')

INVARIANT: a built Template never changes. ``apply`` only reads it, so
one Template may be shared across threads without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from replacer.domain.errors import KindMismatch, UnresolvedPlaceholder
from replacer.domain.identifiers import validate_identifier
from replacer.domain.markers import Placeholder, scan_markers
from replacer.domain.rules import Rule

logger = logging.getLogger(__name__)


class RuleSet(Mapping[str, Rule]):
    """Read-only mapping from placeholder key to rule, in insertion order."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, Rule] | None = None) -> None:
        object.__setattr__(self, "_rules", MappingProxyType(dict(rules or {})))

    def __setattr__(self, name: str, value: object) -> None:
        msg = "RuleSet is read-only"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> Rule:
        return self._rules[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules.values())!r})"


class Template:
    """A frozen rule set, ready for repeated :meth:`apply` calls.

    Use :class:`TemplateBuilder` to create one.
    """

    __slots__ = ("_namespace", "_rules")

    def __init__(self, rules: RuleSet, *, namespace: str | None = None) -> None:
        object.__setattr__(self, "_rules", rules)
        object.__setattr__(self, "_namespace", namespace)

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable; use TemplateBuilder to make a new one"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def namespace(self) -> str | None:
        """Crate path macro markers must use, or None for any path."""
        return self._namespace

    def scan(self, text: str) -> list[Placeholder]:
        """Return every marker in *text* without resolving it."""
        return list(scan_markers(text, self._namespace))

    def resolve(self, placeholder: Placeholder) -> Rule:
        """Return the rule bound to *placeholder*.

        Raises:
            UnresolvedPlaceholder: no rule has the placeholder's key.
            KindMismatch: the rule's kind differs from the marker syntax.
        """
        rule = self._rules.get(placeholder.key)
        if rule is None:
            raise UnresolvedPlaceholder(placeholder.key, position=placeholder.start)
        if rule.kind != placeholder.syntax:
            raise KindMismatch(
                placeholder.key,
                expected=placeholder.syntax,
                actual=rule.kind,
                position=placeholder.start,
            )
        return rule

    def apply(self, text: str) -> str:
        """Substitute every marker in *text* and return the new string.

        Text outside markers is copied unchanged and substituted text is
        never scanned again. The first unresolved, mismatched or
        malformed marker aborts the call; nothing partial is returned.

        Raises:
            UnresolvedPlaceholder, KindMismatch, MalformedMarker
        """
        pieces: list[str] = []
        pos = 0
        count = 0
        for placeholder in scan_markers(text, self._namespace):
            rule = self.resolve(placeholder)
            pieces.append(text[pos : placeholder.start])
            pieces.append(placeholder.visibility + rule.render())
            pos = placeholder.end
            count += 1
        pieces.append(text[pos:])
        logger.debug("Applied %d substitution(s) over %d chars", count, len(text))
        return "".join(pieces)

    def __repr__(self) -> str:
        return f"Template(rules={list(self._rules)!r}, namespace={self._namespace!r})"


class TemplateBuilder:
    """Fluent accumulator for a :class:`Template`.

    ``rule`` never fails for a valid rule: adding a key twice keeps the
    later rule. ``build`` copies the staged rules, so the builder can be
    reused without affecting templates already built.
    """

    def __init__(self) -> None:
        self._staged: dict[str, Rule] = {}
        self._namespace: str | None = None

    def rule(self, rule: Rule) -> TemplateBuilder:
        """Add *rule*, replacing any earlier rule with the same key."""
        if not isinstance(rule, Rule):
            msg = f"Expected a rule, got {type(rule).__name__}"
            raise TypeError(msg)
        previous = self._staged.get(rule.key)
        if previous is not None:
            logger.debug("Rule for %r replaced (%s -> %s)", rule.key, previous.kind, rule.kind)
        self._staged[rule.key] = rule
        return self

    def rules(self, rules: Iterable[Rule]) -> TemplateBuilder:
        """Add several rules in order, same replacement policy as :meth:`rule`."""
        for rule in rules:
            self.rule(rule)
        return self

    def namespace(self, namespace: str | None) -> TemplateBuilder:
        """Only recognize macro markers written as ``namespace::rust_<kind>!``."""
        if namespace is not None:
            for segment in namespace.split("::"):
                validate_identifier(segment)
        self._namespace = namespace
        return self

    def build(self) -> Template:
        return Template(RuleSet(self._staged), namespace=self._namespace)
