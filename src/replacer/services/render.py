"""RenderService — apply configured rules to template files.

Pipeline: COLLECT RULES -> BUILD TEMPLATE -> READ -> APPLY -> WRITE -> RESPOND

Rules come from the ``[rules]`` tables of replacer.toml first, then from
ad-hoc ``(kind, key, value)`` triples (CLI flags), so an ad-hoc rule
replaces a configured rule with the same key.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from replacer.domain.errors import ApplyError, MalformedMarker
from replacer.domain.markers import line_col, scan_markers
from replacer.domain.rules import Rule, rule_for_kind
from replacer.domain.template import Template, TemplateBuilder
from replacer.services.base import BaseService
from replacer.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

AdHocRule = tuple[str, str, str]


class RenderService(BaseService):
    """Render and check templates against the configured rule set."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_template(
        self,
        rules: Iterable[AdHocRule] = (),
        *,
        namespace: str | None = None,
    ) -> Template:
        """Build a Template from configured rules plus *rules*.

        Raises the first :class:`RuleError` met.
        """
        builder = TemplateBuilder().rules(self._settings.rules.to_rules())
        builder.rules(rule_for_kind(kind, key, value) for kind, key, value in rules)
        return builder.namespace(namespace or self._settings.template.namespace).build()

    def render(
        self,
        template_path: Path | str,
        *,
        rules: Iterable[AdHocRule] = (),
        namespace: str | None = None,
        output_path: Path | str | None = None,
    ) -> ServiceResult:
        """Render the template file, optionally writing the result."""
        op = "render"
        path = self._resolve_path(template_path)
        try:
            template = self.build_template(rules, namespace=namespace)
            text = self._read_text(path)
            rendered = template.apply(text)
        except (ValueError, OSError) as exc:
            return self._failure(op, exc, path=str(path))

        data: dict[str, Any] = {
            "path": str(path),
            "substitutions": len(template.scan(text)),
            "output": rendered,
        }
        if output_path is not None:
            target = self._resolve_path(output_path)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(rendered, encoding=self._settings.template.encoding)
            except OSError as exc:
                return self._failure(op, exc, path=str(target))
            data["written_to"] = str(target)

        logger.info("Rendered %s (%d substitutions)", path, data["substitutions"])
        return ServiceResult(ok=True, op=op, data=data)

    def check(
        self,
        template_path: Path | str,
        *,
        rules: Iterable[AdHocRule] = (),
        namespace: str | None = None,
    ) -> ServiceResult:
        """Report every marker in the template and whether it resolves.

        Unlike ``apply``, resolution problems do not stop the report. A
        malformed marker does, since nothing after it can be parsed.
        """
        op = "check"
        path = self._resolve_path(template_path)
        try:
            template = self.build_template(rules, namespace=namespace)
            text = self._read_text(path)
        except (ValueError, OSError) as exc:
            return self._failure(op, exc, path=str(path))

        markers: list[dict[str, Any]] = []
        malformed: MalformedMarker | None = None
        try:
            for placeholder in scan_markers(text, template.namespace):
                line, column = line_col(text, placeholder.start)
                entry: dict[str, Any] = {
                    "key": placeholder.key,
                    "kind": str(placeholder.syntax),
                    "line": line,
                    "column": column,
                    "status": "ok",
                }
                try:
                    template.resolve(placeholder)
                except ApplyError as exc:
                    entry["status"] = exc.code
                    entry["message"] = str(exc)
                markers.append(entry)
        except MalformedMarker as exc:
            malformed = exc

        issues = [m for m in markers if m["status"] != "ok"]
        data: dict[str, Any] = {
            "path": str(path),
            "items": markers,
            "count": len(markers),
            "issues": len(issues) + (1 if malformed else 0),
        }
        if malformed is not None:
            line, column = line_col(text, malformed.position)
            data["malformed"] = {"line": line, "column": column, "message": str(malformed)}

        if data["issues"]:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="CHECK_FAILED",
                    message=f"{data['issues']} problem(s) in {path.name}",
                    detail=data,
                ),
            )
        return ServiceResult(ok=True, op=op, data=data)

    def list_rules(
        self,
        *,
        rules: Iterable[AdHocRule] = (),
        namespace: str | None = None,
    ) -> ServiceResult:
        """List the rules a render would use, in rule-set order."""
        op = "rules"
        try:
            template = self.build_template(rules, namespace=namespace)
        except ValueError as exc:
            return self._failure(op, exc)
        items = [_describe(rule) for rule in template.rules.values()]
        return ServiceResult(
            ok=True,
            op=op,
            data={"items": items, "count": len(items), "namespace": template.namespace},
        )


def _describe(rule: Rule) -> dict[str, str]:
    return {"key": rule.key, "kind": str(rule.kind), "value": rule.value}
