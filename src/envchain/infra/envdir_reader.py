"""Infrastructure: reading an envdir into assignments.

Conventional envdir semantics:

* one regular file per variable, the filename is the key;
* the value is the file content with trailing newlines removed and
  NUL bytes turned into newlines;
* a zero-byte file removes the variable.

Entries that are not regular files (subdirectories, sockets, broken
symlinks) are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from envchain.core.models import EnvAssignment, Envdir
from envchain.exceptions import InvalidEnvdirError

logger = logging.getLogger(__name__)


def decode_value(data: bytes) -> str | None:
    """Convert raw file content to a variable value.

    Returns ``None`` (unset) for empty content.  A file holding only a
    newline yields the empty string.
    """
    if not data:
        return None
    text = data.decode("utf-8", errors="surrogateescape")
    return text.rstrip("\r\n").replace("\0", "\n")


def _read_entry(entry: Path) -> bytes:
    try:
        return entry.read_bytes()
    except OSError as exc:
        raise InvalidEnvdirError(
            f"cannot read {entry}: {exc.strerror or exc}",
        ) from exc


def read_envdir(envdir: Envdir) -> tuple[EnvAssignment, ...]:
    """Return one assignment per regular file in *envdir*, sorted by key.

    Raises
    ------
    InvalidEnvdirError
        If the directory or one of its files cannot be read, or a
        filename contains ``=``.
    """
    try:
        entries = sorted(envdir.path.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise InvalidEnvdirError(
            f"cannot read envdir {envdir.path}: {exc.strerror or exc}",
        ) from exc

    source = str(envdir.path)
    assignments: list[EnvAssignment] = []
    for entry in entries:
        if not entry.is_file():
            continue
        if "=" in entry.name:
            raise InvalidEnvdirError(
                f"invalid variable name {entry.name!r} in {envdir.path}",
                hint="Variable names may not contain '='.",
            )
        value = decode_value(_read_entry(entry))
        if value is None:
            logger.debug("unset %s (from %s)", entry.name, source)
        else:
            logger.debug("set %s (from %s)", entry.name, source)
        assignments.append(EnvAssignment(key=entry.name, value=value, source=source))

    return tuple(assignments)
