"""Error taxonomy for rule construction and template application.

Two families with disjoint timing:

- ``RuleError`` (and ``InvalidIdentifier``): raised while a rule is built.
  Payload correctness is settled here, once.
- ``ApplyError``: raised by ``Template.apply``. Only about matching the
  template's markers against the rule set, never about payload validity.

Every error carries structured attributes (key, position) so callers can
point at the offending template span or rule.
"""

from __future__ import annotations

from typing import ClassVar


class ReplacerError(ValueError):
    """Base for every error raised by replacer."""


class InvalidIdentifier(ReplacerError):
    """A name or type token fails its lexical grammar."""

    def __init__(self, value: str, reason: str, *, what: str = "identifier") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {what} {value!r}: {reason}")


# --- Rule construction ---


class RuleError(ReplacerError):
    """A rule could not be constructed."""

    key: str


class InvalidKey(RuleError, InvalidIdentifier):
    """The placeholder key of a rule is not an identifier."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        InvalidIdentifier.__init__(self, key, reason, what="key")


class InvalidType(RuleError):
    """A type rule's replacement is not a valid type token."""

    def __init__(self, key: str, value: str, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid type {value!r} for key {key!r}: {reason}")


class InvalidValue(RuleError):
    """A rule's replacement payload fails its kind's grammar."""

    def __init__(self, key: str, value: str, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for key {key!r}: {reason}")


# --- Template application ---


class ApplyError(ReplacerError):
    """Template text does not match the rule set."""

    code: ClassVar[str] = "APPLY_ERROR"


class UnresolvedPlaceholder(ApplyError):
    """A marker's key has no bound rule."""

    code: ClassVar[str] = "UNRESOLVED_PLACEHOLDER"

    def __init__(self, key: str, *, position: int | None = None) -> None:
        self.key = key
        self.position = position
        super().__init__(f"No rule bound for placeholder {key!r}")


class KindMismatch(ApplyError):
    """A marker's key resolves to a rule of another kind."""

    code: ClassVar[str] = "KIND_MISMATCH"

    def __init__(
        self,
        key: str,
        *,
        expected: str,
        actual: str,
        position: int | None = None,
    ) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        self.position = position
        super().__init__(
            f"Placeholder {key!r} is written as a {expected} marker "
            f"but is bound to a {actual} rule"
        )


class MalformedMarker(ApplyError):
    """A marker was opened but never properly closed."""

    code: ClassVar[str] = "MALFORMED_MARKER"

    def __init__(self, position: int, reason: str) -> None:
        self.position = position
        self.reason = reason
        super().__init__(f"Malformed marker at offset {position}: {reason}")
