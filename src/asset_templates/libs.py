"""LibraryRegistry — shared store of lazily loaded third-party modules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)


class LibraryRegistry:
    """Maps a library name to a loaded module (or any library object).

    Engines register a heavyweight dependency once and every later
    instance reuses it.  Reads never fail: an absent name yields ``None``,
    so callers check presence explicitly.

    Usage::

        libs = LibraryRegistry()
        libs["markdown"] = importlib.import_module("markdown")

        md = libs.get("markdown")
        if md is None:
            ...

    The base :class:`~asset_templates.template.Template` only reads from
    its registry; populating it is up to concrete engines.  There is no
    locking: use one registry per pipeline when pipelines run in
    parallel.
    """

    def __init__(self) -> None:
        self._libs: dict[str, Any] = {}

    def get(self, name: str, default: Any = None) -> Any:
        """Return the library registered under *name*, or *default*."""
        return self._libs.get(name, default)

    def set(self, name: str, library: Any) -> None:
        """Register *library* under *name*; the last write wins."""
        if name in self._libs and self._libs[name] is not library:
            logger.debug("Replacing library %r", name)
        else:
            logger.debug("Registered library %r", name)
        self._libs[name] = library

    def has(self, name: str) -> bool:
        return name in self._libs

    def ensure(self, name: str, factory: Callable[[], Any]) -> Any:
        """Return the entry for *name*, populating it from *factory* once."""
        if name not in self._libs:
            self.set(name, factory())
        return self._libs[name]

    def names(self) -> list[str]:
        return list(self._libs.keys())

    def clear(self) -> None:
        """Remove all entries (teardown / testing utility)."""
        self._libs.clear()

    # Absent keys read as ``None`` instead of raising ``KeyError``.
    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, library: Any) -> None:
        self.set(name, library)

    def __contains__(self, name: object) -> bool:
        return name in self._libs

    def __iter__(self) -> Iterator[str]:
        return iter(self._libs)

    def __len__(self) -> int:
        return len(self._libs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._libs)!r})"


#: Process-wide registry shared by every engine that is not given its own.
default_libraries = LibraryRegistry()
