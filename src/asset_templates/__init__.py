"""asset-templates — the engine contract of an asset-processing pipeline.

Every source transformation (template language, preprocessor, minifier)
is a :class:`Template` subclass with a single ``evaluate`` method.
"""

from __future__ import annotations

from .config import LoaderConfig
from .exceptions import (
    DependencyMissingError,
    EngineNotFoundError,
    EngineRegistrationError,
    EvaluateNotImplementedError,
    TemplateError,
)
from .libs import LibraryRegistry, default_libraries
from .loader import DependencyLoader, LoadResult, default_loader
from .protocols import Context, Evaluator, Locals, Payload, SourcePath
from .registry import EngineRegistry
from .template import Template

__all__ = [
    # Core contract
    "Template",
    "Evaluator",
    "Context",
    "Locals",
    "Payload",
    "SourcePath",
    # Libraries and dependencies
    "LibraryRegistry",
    "default_libraries",
    "DependencyLoader",
    "LoadResult",
    "default_loader",
    "LoaderConfig",
    # Engines
    "EngineRegistry",
    # Exceptions
    "TemplateError",
    "EvaluateNotImplementedError",
    "DependencyMissingError",
    "EngineNotFoundError",
    "EngineRegistrationError",
]
