"""Tests for DependencyLoader and the Template require wrappers."""

from __future__ import annotations

import json
import logging
import sys
import types

import pytest

from asset_templates.config import LoaderConfig
from asset_templates.exceptions import DependencyMissingError, TemplateError
from asset_templates.libs import LibraryRegistry
from asset_templates.loader import DependencyLoader, LoadResult
from asset_templates.template import Template

MISSING = "definitely_not_installed_module_xyz"


def test_require_missing_names_dependency_and_file() -> None:
    tpl = Template("styles/app.scss", "")
    with pytest.raises(DependencyMissingError) as exc_info:
        tpl.require(MISSING)
    message = str(exc_info.value)
    assert MISSING in message
    assert "styles/app.scss" in message
    assert exc_info.value.dependency == MISSING
    assert exc_info.value.file == "styles/app.scss"
    assert isinstance(exc_info.value.__cause__, ImportError)


def test_dependency_missing_is_an_import_error() -> None:
    with pytest.raises(ImportError):
        Template("a.txt", "").require(MISSING)
    with pytest.raises(TemplateError):
        Template("a.txt", "").require(MISSING)


def test_require_returns_same_module_on_repeated_calls() -> None:
    tpl = Template("a.json", "{}")
    first = tpl.require("json")
    second = tpl.require("json")
    assert first is json
    assert first is second


def test_require_is_shared_across_instances() -> None:
    assert Template("a", "").require("json") is Template("b", "").require("json")


def test_install_hint_in_message() -> None:
    loader = DependencyLoader(LoaderConfig(install_hints={MISSING: "missing-dist"}))
    tpl = Template("a.txt", "", loader=loader)
    with pytest.raises(DependencyMissingError) as exc_info:
        tpl.require(MISSING)
    assert "pip install missing-dist" in str(exc_info.value)
    assert exc_info.value.hint == "missing-dist"


def test_install_hint_for_submodule() -> None:
    loader = DependencyLoader(LoaderConfig(install_hints={MISSING: "missing-dist"}))
    with pytest.raises(DependencyMissingError) as exc_info:
        loader.require(f"{MISSING}.sub", "a.txt")
    assert exc_info.value.hint == "missing-dist"


def test_non_import_errors_propagate(monkeypatch) -> None:
    def broken_import(name, package=None):
        raise ValueError("bad module body")

    monkeypatch.setattr("asset_templates.loader.importlib.import_module", broken_import)
    with pytest.raises(ValueError, match="bad module body"):
        DependencyLoader().require("anything", "a.txt")


def test_missing_dependency_is_logged(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="asset_templates.loader")
    with pytest.raises(DependencyMissingError):
        DependencyLoader().require(MISSING, "a.txt")
    assert MISSING in caplog.text
    assert "a.txt" in caplog.text


def test_try_require_success() -> None:
    result = Template("a", "").try_require("json")
    assert result
    assert result.ok
    assert result.module is json
    assert result.error is None
    assert result.unwrap() is json


def test_try_require_failure() -> None:
    result = Template("a.md", "").try_require(MISSING)
    assert not result
    assert result.module is None
    assert isinstance(result.error, DependencyMissingError)
    assert "a.md" in str(result.error)
    with pytest.raises(DependencyMissingError):
        result.unwrap()


def test_load_result_factories() -> None:
    assert LoadResult.success(json).ok
    error = DependencyMissingError("x", "y")
    assert LoadResult.failure(error).error is error


def test_load_library_caches_in_registry(libs: LibraryRegistry, monkeypatch) -> None:
    fake = types.ModuleType("fake_engine_lib")
    monkeypatch.setitem(sys.modules, "fake_engine_lib", fake)

    tpl = Template("a", "", libs=libs)
    assert tpl.load_library("fake_engine_lib") is fake
    assert libs["fake_engine_lib"] is fake

    monkeypatch.delitem(sys.modules, "fake_engine_lib")
    # served from the registry, no second import
    assert Template("b", "", libs=libs).load_library("fake_engine_lib") is fake


def test_load_library_missing_leaves_registry_empty(libs: LibraryRegistry) -> None:
    with pytest.raises(DependencyMissingError):
        Template("a", "", libs=libs).load_library(MISSING)
    assert MISSING not in libs


def test_relative_name_uses_configured_package() -> None:
    loader = DependencyLoader(LoaderConfig(package="asset_templates"))
    module = loader.require(".libs", "a.txt")
    assert module.__name__ == "asset_templates.libs"


def test_broken_transitive_import_is_not_reported_as_missing(
    tmp_path, monkeypatch
) -> None:
    (tmp_path / "installed_engine_lib.py").write_text(
        "import some_missing_transitive_dep\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, "installed_engine_lib", raising=False)

    with pytest.raises(ModuleNotFoundError) as exc_info:
        Template("a.md", "").require("installed_engine_lib")
    assert not isinstance(exc_info.value, DependencyMissingError)
    assert exc_info.value.name == "some_missing_transitive_dep"


def test_broken_transitive_import_is_not_a_load_failure(
    tmp_path, monkeypatch
) -> None:
    (tmp_path / "other_engine_lib.py").write_text("import another_missing_dep\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, "other_engine_lib", raising=False)

    with pytest.raises(ModuleNotFoundError, match="another_missing_dep"):
        Template("a.md", "").try_require("other_engine_lib")


def test_missing_submodule_of_installed_package() -> None:
    with pytest.raises(DependencyMissingError, match="json.no_such_submodule"):
        Template("a.json", "").require("json.no_such_submodule")


def test_relative_name_without_package_is_rejected() -> None:
    with pytest.raises(ValueError, match="a.md") as exc_info:
        DependencyLoader().require(".markdown", "a.md")
    assert "LoaderConfig.package" in str(exc_info.value)


def test_empty_name_is_rejected() -> None:
    with pytest.raises(ValueError, match="Empty dependency name"):
        DependencyLoader().require("", "a.md")


def test_try_require_logs_missing_at_debug_only(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="asset_templates.loader")
    result = DependencyLoader().try_require(MISSING, "a.txt")
    assert not result
    records = [r for r in caplog.records if MISSING in r.getMessage()]
    assert records
    assert all(r.levelno == logging.DEBUG for r in records)
