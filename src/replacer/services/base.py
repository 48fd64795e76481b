"""BaseService — shared plumbing for replacer services.

Every service receives the frozen :class:`ReplacerSettings` at
construction time and turns domain exceptions into failed
:class:`ServiceResult` values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from replacer.domain.errors import ApplyError, RuleError
from replacer.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from replacer.config.settings import ReplacerSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RenderService(BaseService):
            def render(self, path: Path) -> ServiceResult:
                try:
                    ...
                except ReplacerError as exc:
                    return self._failure("render", exc)
    """

    def __init__(self, settings: ReplacerSettings) -> None:
        self._settings = settings

    def _resolve_path(self, path: Path | str) -> Path:
        """Resolve *path* against the project root."""
        p = Path(path)
        return p if p.is_absolute() else self._settings.project_root / p

    def _read_text(self, path: Path) -> str:
        return path.read_text(encoding=self._settings.template.encoding)

    def _failure(self, op: str, exc: Exception, **detail: Any) -> ServiceResult:
        """Convert an exception into a failed ServiceResult."""
        if isinstance(exc, ApplyError):
            code = exc.code
            for attr in ("key", "position", "expected", "actual"):
                value = getattr(exc, attr, None)
                if value is not None:
                    detail.setdefault(attr, value)
        elif isinstance(exc, RuleError):
            code = "INVALID_RULE"
            detail.setdefault("key", exc.key)
        elif isinstance(exc, FileNotFoundError):
            code = "NOT_FOUND"
        elif isinstance(exc, OSError):
            code = "IO_ERROR"
        else:
            code = "INVALID_INPUT"
        logger.debug("%s failed with %s: %s", op, code, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=str(exc), detail=detail),
        )
