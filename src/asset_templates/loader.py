"""
Dependency loading for engines with optional third-party requirements.

Engines such as a Markdown or SCSS processor depend on libraries that are
not installed with this package.  The loader imports them on first use
and turns a failed import into a :class:`DependencyMissingError` naming
both the dependency and the source file that needed it.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .config import LoaderConfig
from .exceptions import DependencyMissingError

if TYPE_CHECKING:
    from os import PathLike
    from types import ModuleType

    from .libs import LibraryRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of an attempt to acquire an optional dependency.

    Usage::

        result = loader.try_require("markdown", file)
        if result:
            html = result.module.markdown(text)
        else:
            logger.info("%s", result.error)
    """

    module: ModuleType | None = None
    error: DependencyMissingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, module: ModuleType) -> LoadResult:
        return cls(module=module)

    @classmethod
    def failure(cls, error: DependencyMissingError) -> LoadResult:
        return cls(error=error)

    def unwrap(self) -> ModuleType:
        """Return the module or raise the stored error."""
        if self.error is not None:
            raise self.error
        assert self.module is not None
        return self.module

    def __bool__(self) -> bool:
        return self.ok


class DependencyLoader:
    """Imports engine dependencies through :mod:`importlib`.

    Repeated calls for the same name return the same module object,
    since the interpreter caches imported modules in ``sys.modules``.
    """

    def __init__(self, config: LoaderConfig | None = None) -> None:
        self.config = config or LoaderConfig()

    def require(self, name: str, file: str | PathLike[str] | None) -> ModuleType:
        """Import *name* or raise :class:`DependencyMissingError` for *file*.

        Only a missing *name* (or a missing parent package of it) is
        translated.  An installed dependency that fails to import one of
        its own requirements raises its original ``ImportError``, and
        any other exception from its module code propagates as is.

        Raises:
            ValueError: If *name* is empty, or relative while no anchor
                package is configured.
        """
        try:
            module = self._import(name, file)
        except DependencyMissingError as error:
            logger.warning("%s", error)
            raise
        logger.debug("Loaded dependency %r for %s", name, file)
        return module

    def try_require(self, name: str, file: str | PathLike[str] | None) -> LoadResult:
        """Like :meth:`require`, but report a missing dependency as a result."""
        try:
            return LoadResult.success(self._import(name, file))
        except DependencyMissingError as error:
            logger.debug("%s", error)
            return LoadResult.failure(error)

    def _import(self, name: str, file: str | PathLike[str] | None) -> ModuleType:
        package = self.config.package
        if not name:
            raise ValueError(f"Empty dependency name required for file '{file}'")
        if name.startswith(".") and package is None:
            raise ValueError(
                f"Relative dependency name {name!r} required for file '{file}' "
                "needs LoaderConfig.package to be set"
            )
        try:
            return importlib.import_module(name, package=package)
        except ModuleNotFoundError as err:
            absolute = importlib.util.resolve_name(name, package)
            if err.name is None or not (
                absolute == err.name or absolute.startswith(err.name + ".")
            ):
                raise
            raise DependencyMissingError(
                name, file, hint=self.config.hint_for(name)
            ) from err

    def load_library(
        self,
        name: str,
        file: str | PathLike[str] | None,
        libs: LibraryRegistry,
    ) -> Any:
        """Return ``libs[name]``, importing and registering it on first use."""
        return libs.ensure(name, lambda: self.require(name, file))


#: Loader used by templates that are not given one explicitly.
default_loader = DependencyLoader()
