"""Tests for configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from replacer.config.models import RulesConfig, TemplateConfig
from replacer.domain.errors import InvalidType
from replacer.domain.rules import ExprRule, StringRule, StructRule, TypeRule


class TestDefaults:
    def test_empty_config(self) -> None:
        assert TemplateConfig().namespace is None
        assert TemplateConfig().encoding == "utf-8"
        assert RulesConfig().to_rules() == []

    def test_frozen(self) -> None:
        config = TemplateConfig()
        with pytest.raises(ValidationError):
            config.encoding = "latin-1"  # type: ignore[misc]


class TestTemplateConfig:
    def test_namespace_path(self) -> None:
        assert TemplateConfig(namespace="my::crate").namespace == "my::crate"

    @pytest.mark.parametrize("namespace", ["bad path", "a::", "::a", "1crate"])
    def test_invalid_namespace(self, namespace: str) -> None:
        with pytest.raises(ValidationError):
            TemplateConfig(namespace=namespace)


class TestRulesConfig:
    def test_to_rules_builds_each_kind(self) -> None:
        config = RulesConfig.model_validate(
            {
                "string": {"greeting": "hello"},
                "type": {"t": "Vec<u8>"},
                "expr": {"e": "1 + 1"},
                "struct": {"s": "P { x: i32 }"},
            }
        )
        assert config.to_rules() == [
            StringRule("greeting", "hello"),
            TypeRule("t", "Vec<u8>"),
            ExprRule("e", "1 + 1"),
            StructRule("s", "P { x: i32 }"),
        ]

    def test_to_rules_raises_for_invalid_entry(self) -> None:
        config = RulesConfig(type={"t": "Vec<"})
        with pytest.raises(InvalidType):
            config.to_rules()
