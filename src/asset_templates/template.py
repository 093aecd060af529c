"""
Template — base contract for engines and processors.

A template holds one source payload and the path it came from, and turns
the payload into output in :meth:`Template.evaluate`.  Every engine the
pipeline knows about (template languages, CSS/JS preprocessors,
minifiers) is a subclass::

    class LowercaseProcessor(Template):
        def evaluate(self, context, locals=None):
            return self.data.lower()

The pipeline creates one instance per source file and calls ``evaluate``
with its context object and the render-time locals.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from .exceptions import EvaluateNotImplementedError
from .libs import default_libraries
from .loader import default_loader

if TYPE_CHECKING:
    from types import ModuleType

    from .libs import LibraryRegistry
    from .loader import DependencyLoader, LoadResult
    from .protocols import Context, Locals, Payload, SourcePath


class Template:
    """Base class for engines.

    Attributes:
        data: The source payload, ``str`` or ``bytes``.  ``evaluate`` may
            replace it.
        libs: Registry of third-party libraries shared by engines.  The
            base class only reads it; engines populate it.
        default_mime_type: MIME type of the output, if the engine
            produces a fixed one.
    """

    libs: ClassVar[LibraryRegistry] = default_libraries
    default_mime_type: ClassVar[str | None] = None

    data: Payload

    def __init__(
        self,
        file: SourcePath,
        data: Payload,
        *,
        libs: LibraryRegistry | None = None,
        loader: DependencyLoader | None = None,
    ) -> None:
        self._file = file
        self.data = data
        if libs is not None:
            # Shadows the shared class-level registry for this instance only.
            self.libs = libs  # type: ignore[misc]
        self._loader = loader or default_loader

    @property
    def file(self) -> SourcePath:
        """Originating source location; fixed for the instance's lifetime."""
        return self._file

    def evaluate(self, context: Context, locals: Locals | None = None) -> Payload:
        """Render ``data`` and return the result.

        Engines *must* override this.  The returned payload's type is up
        to the engine.

        Raises:
            EvaluateNotImplementedError: If the engine did not override it.
        """
        raise EvaluateNotImplementedError(type(self).__name__)

    def require(self, name: str) -> ModuleType:
        """Import a third-party module needed to process this file.

        Raises:
            DependencyMissingError: If *name* cannot be imported; the
                message names both the module and :attr:`file`.
        """
        return self._loader.require(name, self._file)

    def try_require(self, name: str) -> LoadResult:
        """Attempt to import *name*, returning a :class:`LoadResult`."""
        return self._loader.try_require(name, self._file)

    def load_library(self, name: str) -> Any:
        """Return ``libs[name]``, importing it on first use."""
        return self._loader.load_library(name, self._file, self.libs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} file={self._file!r}>"
