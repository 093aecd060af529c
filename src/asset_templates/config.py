"""Configuration models for the dependency loader."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoaderConfig(BaseModel):
    """Settings for :class:`~asset_templates.loader.DependencyLoader`.

    Attributes:
        install_hints: Import name → distribution name on the package
            index, appended to ``DependencyMissingError`` messages
            (``{"yaml": "PyYAML"}`` yields ``pip install PyYAML``).
        package: Anchor package used to resolve relative dependency
            names such as ``".engines.markdown"``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    install_hints: dict[str, str] = Field(default_factory=dict)
    package: str | None = None

    def hint_for(self, name: str) -> str | None:
        """Return the install hint for *name* or its top-level package."""
        if name in self.install_hints:
            return self.install_hints[name]
        return self.install_hints.get(name.split(".", 1)[0])
