"""Structural interfaces shared by engines and the pipeline that calls them."""

from __future__ import annotations

from collections.abc import Mapping
from os import PathLike
from typing import Any, Protocol, runtime_checkable

#: Source payload handed to and returned from an engine.
Payload = str | bytes

#: Originating source location of a payload.
SourcePath = str | PathLike[str]

#: Render-time variables.
Locals = Mapping[str, Any]

#: Capability object supplied by the pipeline (path resolution, nested
#: require, output helpers).  Engines negotiate its shape with the pipeline.
Context = Any


@runtime_checkable
class Evaluator(Protocol):
    """Anything that can turn its source payload into output.

    :class:`~asset_templates.template.Template` satisfies this protocol;
    pipelines that only need to call engines can depend on it instead.
    """

    @property
    def file(self) -> SourcePath:
        """Where the payload came from."""
        ...

    data: Payload

    def evaluate(self, context: Context, locals: Locals | None = None) -> Payload:
        """Transform ``data`` and return the result."""
        ...
