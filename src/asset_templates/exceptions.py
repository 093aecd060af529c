"""
Template exception hierarchy.

All exceptions inherit from ``TemplateError`` and provide ``to_dict()``
for API-friendly error reports.  Where a standard exception describes the
same failure (``NotImplementedError``, ``ImportError``, ``LookupError``)
the error also subclasses it, so callers may catch either.
"""

from __future__ import annotations

from difflib import get_close_matches
from os import PathLike, fspath
from typing import Any


class TemplateError(Exception):
    """Base exception for all template errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class EvaluateNotImplementedError(TemplateError, NotImplementedError):
    """``evaluate`` was called on an engine that never overrode it."""

    def __init__(self, engine_name: str) -> None:
        self.engine_name = engine_name
        super().__init__(f"{engine_name}#evaluate() is not implemented.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "EVALUATE_NOT_IMPLEMENTED",
            "engine": self.engine_name,
            "message": str(self),
        }


class DependencyMissingError(TemplateError, ImportError):
    """
    A runtime dependency required by an engine cannot be imported.

    Carries the dependency name and the source file that triggered the
    import so the pipeline can say *what* to install for *which* file::

        Cannot find module `yaml` required for file 'assets/app.yml'.
        Install with: pip install PyYAML
    """

    def __init__(
        self,
        dependency: str,
        file: str | PathLike[str] | None,
        hint: str | None = None,
    ) -> None:
        self.dependency = dependency
        self.file = fspath(file) if file is not None else None
        self.hint = hint

        message = f"Cannot find module `{dependency}` required for file '{self.file}'"
        if hint:
            message += f". Install with: pip install {hint}"
        super().__init__(message, name=dependency)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DEPENDENCY_MISSING",
            "dependency": self.dependency,
            "file": self.file,
            "hint": self.hint,
        }


class EngineNotFoundError(TemplateError, LookupError):
    """
    No engine is registered under the requested name or extension.

    Provides fuzzy-matched suggestions for likely intended engines.
    """

    def __init__(self, key: str, known: list[str]) -> None:
        self.key = key
        self.known = known
        self.suggestions = get_close_matches(key, known, n=3, cutoff=0.6)

        message = f"Unknown engine: '{key}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        if known:
            message += f" Registered: {', '.join(sorted(known)[:10])}"
            if len(known) > 10:
                message += ", ..."
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "ENGINE_NOT_FOUND",
            "engine": self.key,
            "suggestions": self.suggestions,
            "registered": sorted(self.known),
        }


class EngineRegistrationError(TemplateError):
    """Raised when an engine registration is invalid or conflicts."""
