"""Shared pytest fixtures and configuration for the envchain test suite.

Guidelines
----------
* Every filesystem layout lives under ``tmp_path``.
* ``HOME`` and the working directory are always redirected.
* ``os.execvpe`` is never allowed to run for real.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from envchain.core.models import SearchConfig
from envchain.infra.trace import TRACE_ENV_VAR, remove_trace


def write_envdir(directory: Path, variables: dict[str, str]) -> Path:
    """Create *directory* holding one file per variable."""
    directory.mkdir(parents=True, exist_ok=True)
    for key, value in variables.items():
        (directory / key).write_text(value, encoding="utf-8")
    return directory


@pytest.fixture(autouse=True)
def _no_trace(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(TRACE_ENV_VAR, raising=False)
    yield
    remove_trace()


@pytest.fixture()
def make_envdir() -> Callable[[Path, dict[str, str]], Path]:
    return write_envdir


@pytest.fixture()
def home(tmp_path: Path) -> Path:
    """``<tmp>/home/u``; its parent ``<tmp>/home`` bounds the search."""
    path = tmp_path / "home" / "u"
    path.mkdir(parents=True)
    return path


@pytest.fixture()
def project(home: Path) -> Path:
    """``<tmp>/home/u/proj`` with ``env.d/db/HOST=localhost``."""
    path = home / "proj"
    write_envdir(path / "env.d" / "db", {"HOST": "localhost\n"})
    return path


@pytest.fixture()
def in_project(
    project: Path,
    home: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Run the test from inside ``project`` with ``HOME`` redirected."""
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    return project


@pytest.fixture()
def config(in_project: Path, home: Path) -> SearchConfig:
    return SearchConfig(start=in_project, home=home)


@pytest.fixture()
def hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every ``rich`` import fail as if the package were not installed."""
    for module in ("rich", "rich.console", "rich.markup", "rich.text", "rich.tree"):
        monkeypatch.setitem(sys.modules, module, None)
