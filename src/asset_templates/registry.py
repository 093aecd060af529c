"""EngineRegistry — named engine classes, looked up by name or file extension."""

from __future__ import annotations

import logging
import time
from os import fspath
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from .exceptions import EngineNotFoundError, EngineRegistrationError
from .template import Template

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .protocols import Context, Locals, Payload, SourcePath

logger = logging.getLogger(__name__)


def _normalize_extension(ext: str) -> str:
    ext = ext.lower()
    return ext if ext.startswith(".") else f".{ext}"


class EngineRegistry:
    """Registry of :class:`Template` subclasses keyed by engine name.

    The pipeline asks the registry for an engine instead of knowing the
    concrete classes.  Create one registry per application context.

    Usage::

        engines = EngineRegistry()
        engines.register("markdown", MarkdownEngine, extensions=[".md"])

        engine_cls = engines.for_path("docs/index.md")
        html = engines.render("markdown", "docs/index.md", text, context)
    """

    def __init__(self) -> None:
        self._engines: dict[str, type[Template]] = {}
        # extension -> claiming engine names, latest last
        self._by_extension: dict[str, list[str]] = {}

    # -- registration --------------------------------------------------------

    def register(
        self,
        name: str,
        engine_cls: type[Template],
        *,
        extensions: Iterable[str] = (),
    ) -> None:
        """Register *engine_cls* under *name* and the given extensions.

        Registering the same class twice is allowed; registering a
        different class under a taken name is not.
        """
        if not (isinstance(engine_cls, type) and issubclass(engine_cls, Template)):
            raise EngineRegistrationError(
                f"Engine '{name}' must be a Template subclass, got {engine_cls!r}"
            )
        existing = self._engines.get(name)
        if existing is not None and existing is not engine_cls:
            raise EngineRegistrationError(
                f"Duplicate engine '{name}': {existing.__name__} is already "
                f"registered, refusing {engine_cls.__name__}"
            )
        self._engines[name] = engine_cls
        for ext in extensions:
            claims = self._by_extension.setdefault(_normalize_extension(ext), [])
            if name in claims:
                claims.remove(name)
            claims.append(name)
        logger.debug("Registered engine %s as %r", engine_cls.__name__, name)

    def add(
        self,
        name: str,
        *,
        extensions: Iterable[str] = (),
    ) -> Callable[[type[Template]], type[Template]]:
        """Decorator-style registration.

        Usage::

            @engines.add("upper", extensions=[".up"])
            class UpperEngine(Template): ...
        """

        def decorator(engine_cls: type[Template]) -> type[Template]:
            self.register(name, engine_cls, extensions=extensions)
            return engine_cls

        return decorator

    def unregister(self, name: str) -> None:
        """Remove an engine and its extension claims.

        An extension this engine had taken over falls back to the engine
        that claimed it before.
        """
        self._engines.pop(name, None)
        for ext, claims in list(self._by_extension.items()):
            if name in claims:
                claims.remove(name)
            if not claims:
                del self._by_extension[ext]

    # -- look-up -------------------------------------------------------------

    def get(self, name: str) -> type[Template] | None:
        """Return the registered engine class or ``None``."""
        return self._engines.get(name)

    def has(self, name: str) -> bool:
        return name in self._engines

    def names(self) -> list[str]:
        return sorted(self._engines)

    @property
    def extensions(self) -> dict[str, str]:
        """Extension → engine name that currently handles it."""
        return {ext: claims[-1] for ext, claims in self._by_extension.items()}

    def resolve(self, name: str) -> type[Template]:
        """Return the engine class for *name*.

        Raises:
            EngineNotFoundError: If *name* is not registered.
        """
        engine_cls = self._engines.get(name)
        if engine_cls is None:
            raise EngineNotFoundError(name, list(self._engines))
        return engine_cls

    def for_path(self, path: SourcePath) -> type[Template]:
        """Return the engine class registered for *path*'s extension.

        Raises:
            EngineNotFoundError: If no engine handles the extension.
        """
        suffix = PurePath(fspath(path)).suffix.lower()
        claims = self._by_extension.get(suffix)
        if not claims:
            raise EngineNotFoundError(suffix or fspath(path), list(self._by_extension))
        return self.resolve(claims[-1])

    # -- instantiation shortcuts --------------------------------------------

    def create(
        self, name: str, file: SourcePath, data: Payload, **kwargs: Any
    ) -> Template:
        """Instantiate the engine registered under *name*."""
        return self.resolve(name)(file, data, **kwargs)

    def render(
        self,
        name: str,
        file: SourcePath,
        data: Payload,
        context: Context,
        locals: Locals | None = None,
    ) -> Payload:
        """Create the engine for *file* and evaluate it once."""
        template = self.create(name, file, data)
        start = time.perf_counter()
        try:
            result = template.evaluate(context, locals or {})
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception(
                "%s failed on %s after %.2fms", name, fspath(file), elapsed
            )
            raise
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s rendered %s in %.2fms", name, fspath(file), elapsed)
        return result
