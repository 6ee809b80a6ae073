"""Infrastructure: upward ``env.d`` discovery and envdir listing.

The walk starts at the given directory and climbs one parent at a time.
It stops before examining the filesystem root or the parent of the home
directory, so neither of those (nor anything above them) is ever
returned.

Rules
-----
* Directory reads only.
* The process working directory is never changed.
* Unreadable directories are skipped, never fatal.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from envchain.core.models import EnvdDirectory

logger = logging.getLogger(__name__)

DEFAULT_ENVD_NAME: str = "env.d"


def _normalize(path: Path | str) -> Path:
    """Absolute path with every symlink resolved.

    The start directory and the home directory must be compared in the
    same form, otherwise a symlinked ``$HOME`` lets the walk climb past
    the real home parent.
    """
    return Path(os.path.realpath(path))


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as exc:
        logger.debug("skipping %s: %s", path, exc)
        return False


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as exc:
        logger.debug("skipping %s: %s", path, exc)
        return False


# ---------------------------------------------------------------------------
# Upward walk
# ---------------------------------------------------------------------------

def search_stops(home: Path | str) -> frozenset[Path]:
    """Directories at which the upward walk stops without looking inside."""
    home_path = _normalize(home)
    return frozenset({home_path.parent, Path(home_path.anchor)})


def walk_envd_directories(
    start: Path | str,
    home: Path | str,
    *,
    envd_name: str = DEFAULT_ENVD_NAME,
) -> tuple[EnvdDirectory, ...]:
    """Return every ``env.d`` directory above *start*, nearest first."""
    stops = search_stops(home)
    found: list[EnvdDirectory] = []

    candidate = _normalize(start)
    while candidate not in stops and candidate.parent != candidate:
        envd = candidate / envd_name
        if _is_dir(envd):
            logger.debug("found %s", envd)
            found.append(EnvdDirectory(path=envd))
        candidate = candidate.parent

    logger.debug("search stopped at %s (%d found)", candidate, len(found))
    return tuple(found)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

def has_regular_file(directory: Path) -> bool:
    """Return ``True`` if *directory* directly contains a regular file."""
    try:
        return any(_is_file(entry) for entry in directory.iterdir())
    except OSError as exc:
        logger.debug("cannot read %s: %s", directory, exc)
        return False


def list_envdirs(envd: EnvdDirectory) -> tuple[str, ...]:
    """Return the sorted names of candidate envdirs inside *envd*.

    A candidate is an immediate subdirectory holding at least one
    regular file.  Subdirectories that contain only further directories
    (or nothing at all) are excluded.
    """
    try:
        children = sorted(envd.path.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        logger.debug("cannot read %s: %s", envd.path, exc)
        return ()
    return tuple(
        child.name
        for child in children
        if _is_dir(child) and has_regular_file(child)
    )
