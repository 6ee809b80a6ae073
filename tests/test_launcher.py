"""Tests for environment building and process replacement (infra/launcher.py).

``os.execvpe`` is always mocked.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from envchain.core.arguments import split_invocation
from envchain.core.models import EnvdDirectory
from envchain.exceptions import (
    CommandLaunchError,
    CommandNotFoundError,
    EnvdirNotFoundError,
)
from envchain.infra.launcher import build_environment, collect_assignments, exec_command

MakeEnvdir = Callable[[Path, dict[str, str]], Path]


@pytest.fixture()
def search(tmp_path: Path, make_envdir: MakeEnvdir) -> tuple[EnvdDirectory, ...]:
    envd = tmp_path / "env.d"
    make_envdir(envd / "db", {"HOST": "localhost\n", "PORT": "5432\n"})
    make_envdir(envd / "prod", {"HOST": "db.internal\n"})
    (envd / "quiet").mkdir()
    (envd / "quiet" / "DEBUG").touch()
    return (EnvdDirectory(path=envd),)


# ---------------------------------------------------------------------------
# build_environment
# ---------------------------------------------------------------------------

class TestBuildEnvironment:
    def test_single_envdir(
        self, search: tuple[EnvdDirectory, ...], tmp_path: Path,
    ) -> None:
        env = build_environment(split_invocation(["db"]), {}, search, cwd=tmp_path)
        assert env == {"HOST": "localhost", "PORT": "5432"}

    def test_chained_envdirs_apply_in_order(
        self, search: tuple[EnvdDirectory, ...], tmp_path: Path,
    ) -> None:
        env = build_environment(
            split_invocation(["db", "prod"]), {}, search, cwd=tmp_path,
        )
        assert env == {"HOST": "db.internal", "PORT": "5432"}

    def test_adhoc_pair_applied_verbatim(
        self, search: tuple[EnvdDirectory, ...], tmp_path: Path,
    ) -> None:
        env = build_environment(
            split_invocation(["db", "HOST=override", "EXTRA= x "]),
            {},
            search,
            cwd=tmp_path,
        )
        assert env["HOST"] == "override"
        assert env["EXTRA"] == " x "

    def test_adhoc_pair_needs_no_filesystem(self, tmp_path: Path) -> None:
        env = build_environment(split_invocation(["ONLY=1"]), {}, (), cwd=tmp_path)
        assert env == {"ONLY": "1"}

    def test_zero_byte_file_unsets_inherited_variable(
        self, search: tuple[EnvdDirectory, ...], tmp_path: Path,
    ) -> None:
        env = build_environment(
            split_invocation(["quiet"]), {"DEBUG": "1", "KEEP": "y"}, search, cwd=tmp_path,
        )
        assert env == {"KEEP": "y"}

    def test_base_environment_preserved(
        self, search: tuple[EnvdDirectory, ...], tmp_path: Path,
    ) -> None:
        base = {"PATH": "/usr/bin"}
        env = build_environment(split_invocation(["db"]), base, search, cwd=tmp_path)
        assert env["PATH"] == "/usr/bin"
        assert base == {"PATH": "/usr/bin"}

    def test_failure_aborts_without_partial_result(
        self, search: tuple[EnvdDirectory, ...], tmp_path: Path,
    ) -> None:
        with pytest.raises(EnvdirNotFoundError):
            build_environment(
                split_invocation(["db", "missing", "A=1"]), {}, search, cwd=tmp_path,
            )

    def test_absolute_path_bypasses_search(
        self,
        search: tuple[EnvdDirectory, ...],
        tmp_path: Path,
        make_envdir: MakeEnvdir,
    ) -> None:
        explicit = make_envdir(tmp_path / "other" / "db", {"HOST": "explicit"})
        env = build_environment(
            split_invocation([str(explicit)]), {}, search, cwd=tmp_path,
        )
        assert env == {"HOST": "explicit"}


class TestCollectAssignments:
    def test_sources_recorded(
        self, search: tuple[EnvdDirectory, ...], tmp_path: Path,
    ) -> None:
        assignments = collect_assignments(
            split_invocation(["A=1", "prod"]), search, cwd=tmp_path,
        )
        assert [a.source for a in assignments] == [
            "argv",
            str(search[0].path / "prod"),
        ]


# ---------------------------------------------------------------------------
# exec_command
# ---------------------------------------------------------------------------

class TestExecCommand:
    @patch("envchain.infra.launcher.os.execvpe")
    def test_execs_with_environment(self, mock_exec: MagicMock) -> None:
        exec_command(("printenv", "HOST"), {"HOST": "localhost"})
        mock_exec.assert_called_once_with(
            "printenv", ["printenv", "HOST"], {"HOST": "localhost"},
        )

    @patch("envchain.infra.launcher.os.execvpe", side_effect=FileNotFoundError(2, "No such file"))
    def test_missing_command(self, _mock_exec: MagicMock) -> None:
        with pytest.raises(CommandNotFoundError, match="command not found: nope"):
            exec_command(("nope",), {})

    @patch("envchain.infra.launcher.os.execvpe", side_effect=PermissionError(13, "Permission denied"))
    def test_not_executable(self, _mock_exec: MagicMock) -> None:
        with pytest.raises(CommandLaunchError, match="Permission denied"):
            exec_command(("./script.sh",), {})

    def test_empty_command(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            exec_command((), {})

    @patch("envchain.infra.launcher.os.execvpe")
    @patch("envchain.infra.launcher.flush_trace")
    def test_trace_flushed_before_exec(
        self, mock_flush: MagicMock, mock_exec: MagicMock,
    ) -> None:
        order: list[str] = []
        mock_flush.side_effect = lambda: order.append("flush")
        mock_exec.side_effect = lambda *args: order.append("exec")

        exec_command(("true",), {})
        assert order == ["flush", "exec"]
