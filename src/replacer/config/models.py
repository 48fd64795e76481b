"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, replacer.toml only contains
the rules a project needs and any overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from replacer.domain.identifiers import validate_identifier
from replacer.domain.rules import Rule, rule_for_kind

# --- replacer.toml sections ---


class TemplateConfig(BaseModel):
    """[template] section."""

    model_config = {"frozen": True}

    namespace: str | None = None
    encoding: str = "utf-8"

    @field_validator("namespace")
    @classmethod
    def _namespace_is_path(cls, value: str | None) -> str | None:
        if value is not None:
            for segment in value.split("::"):
                validate_identifier(segment)
        return value


class RulesConfig(BaseModel):
    """[rules] section — one key/value table per rule kind.

    Example::

        [rules.string]
        replace_with_world = "world"

        [rules.type]
        replace_with_type = "std::path::PathBuf"
    """

    model_config = {"frozen": True}

    string: dict[str, str] = Field(default_factory=dict)
    type: dict[str, str] = Field(default_factory=dict)
    expr: dict[str, str] = Field(default_factory=dict)
    struct: dict[str, str] = Field(default_factory=dict)

    def to_rules(self) -> list[Rule]:
        """Construct validated rules, in kind order then table order.

        Raises the rule's ``RuleError`` for the first invalid entry.
        """
        rules: list[Rule] = []
        for kind in ("string", "type", "expr", "struct"):
            table: dict[str, str] = getattr(self, kind)
            rules.extend(rule_for_kind(kind, key, value) for key, value in table.items())
        return rules
