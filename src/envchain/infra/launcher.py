"""Infrastructure: building the final environment and replacing the process.

Every name is applied in-process, left to right, before a single
``exec`` of the target command.  Nothing is launched unless every name
resolves: assignments are collected first and merged in one step.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from envchain.core.environment import apply_assignments, assignment_from_argument
from envchain.core.models import EnvAssignment, EnvdDirectory, Invocation, TokenKind
from envchain.exceptions import CommandLaunchError, CommandNotFoundError
from envchain.infra.envdir_reader import read_envdir
from envchain.infra.resolver import resolve_envdir
from envchain.infra.trace import flush_trace

logger = logging.getLogger(__name__)


def collect_assignments(
    invocation: Invocation,
    search: Sequence[EnvdDirectory],
    *,
    cwd: Path,
    allow_relative_fallback: bool = True,
) -> list[EnvAssignment]:
    """Resolve and read every name of *invocation*, in order."""
    assignments: list[EnvAssignment] = []
    for argument in invocation.names:
        if argument.kind is TokenKind.ASSIGNMENT:
            logger.debug("set %s (ad-hoc)", argument.key)
            assignments.append(assignment_from_argument(argument))
            continue
        envdir = resolve_envdir(
            argument,
            search,
            cwd=cwd,
            allow_relative_fallback=allow_relative_fallback,
        )
        assignments.extend(read_envdir(envdir))
    return assignments


def build_environment(
    invocation: Invocation,
    base_env: Mapping[str, str],
    search: Sequence[EnvdDirectory],
    *,
    cwd: Path,
    allow_relative_fallback: bool = True,
) -> dict[str, str]:
    """Return *base_env* with every name of *invocation* applied."""
    assignments = collect_assignments(
        invocation,
        search,
        cwd=cwd,
        allow_relative_fallback=allow_relative_fallback,
    )
    return apply_assignments(base_env, assignments)


def exec_command(command: Sequence[str], env: Mapping[str, str]) -> None:
    """Replace the current process with *command* running under *env*.

    Does not return on success.

    Raises
    ------
    CommandNotFoundError
        If the executable cannot be found on ``PATH``.
    CommandLaunchError
        If ``exec`` fails for any other reason.
    """
    if not command:
        raise ValueError("command must not be empty")

    program = command[0]
    logger.debug("exec %s", " ".join(command))
    flush_trace()
    try:
        os.execvpe(program, list(command), dict(env))
    except FileNotFoundError as exc:
        raise CommandNotFoundError(
            f"command not found: {program}",
            hint="Check the command name and the PATH it runs with.",
        ) from exc
    except OSError as exc:
        raise CommandLaunchError(
            f"cannot run {program}: {exc.strerror or exc}",
        ) from exc
