"""Infrastructure: turning a name or path token into an :class:`Envdir`.

Resolution policy
-----------------
* ``/abs/path`` and ``../rel/path`` are used directly and must exist as
  directories; ``env.d`` directories are never consulted for them.
* A bare name is looked up as ``<env.d>/<name>`` in each discovered
  ``env.d`` directory, nearest first; the first directory match wins.
* Failing that, an existing directory ``<cwd>/<name>`` is accepted
  when the relative fallback is enabled.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from envchain.core.models import EnvdDirectory, Envdir, NameArgument, TokenKind
from envchain.exceptions import (
    EnvdirNotFoundError,
    NotAnEnvdirError,
    append_list_suggestion,
)

logger = logging.getLogger(__name__)


def _explicit_path(argument: NameArgument, cwd: Path) -> Envdir:
    path = Path(argument.token)
    if not path.is_absolute():
        path = cwd / path

    if not path.exists():
        raise EnvdirNotFoundError(f"envdir not found: {path}")
    if not path.is_dir():
        raise NotAnEnvdirError(
            f"not a directory: {path}",
            hint="An envdir is a directory holding one file per variable.",
        )
    logger.debug("%s -> %s (explicit path)", argument.token, path)
    return Envdir(name=argument.token, path=path)


def _search(
    argument: NameArgument,
    search: Sequence[EnvdDirectory],
    cwd: Path,
    *,
    allow_relative_fallback: bool,
) -> Envdir:
    name = argument.token
    if name:
        for envd in search:
            candidate = envd.path / name
            if candidate.is_dir():
                logger.debug("%s -> %s", name, candidate)
                return Envdir(name=name, path=candidate)
            logger.debug("%s: no match in %s", name, envd.path)

        if allow_relative_fallback:
            fallback = cwd / name
            if fallback.is_dir():
                logger.debug("%s -> %s (relative fallback)", name, fallback)
                return Envdir(name=name, path=fallback)

    searched = ", ".join(str(envd.path) for envd in search) or "no env.d directories found"
    raise EnvdirNotFoundError(
        f"unable to find envdir named «{name}»",
        hint=append_list_suggestion(f"Searched: {searched}"),
    )


def resolve_envdir(
    argument: NameArgument,
    search: Sequence[EnvdDirectory],
    *,
    cwd: Path,
    allow_relative_fallback: bool = True,
) -> Envdir:
    """Resolve *argument* to an existing envdir.

    Raises
    ------
    EnvdirNotFoundError
        If an explicit path is missing, or no envdir matches the name.
    NotAnEnvdirError
        If an explicit path exists but is not a directory.
    ValueError
        If *argument* is an ad-hoc ``KEY=VALUE`` pair.
    """
    if argument.kind is TokenKind.ASSIGNMENT:
        raise ValueError(f"{argument.token!r} is a KEY=VALUE pair, not an envdir")
    if argument.kind in (TokenKind.ABSOLUTE_PATH, TokenKind.RELATIVE_PATH):
        return _explicit_path(argument, cwd)
    return _search(
        argument,
        search,
        cwd,
        allow_relative_fallback=allow_relative_fallback,
    )
