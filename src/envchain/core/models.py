"""Domain models for envchain.

All models are **frozen** dataclasses — immutable value objects with
little behaviour beyond data access.  They carry zero I/O and zero
dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EnvdDirectory:
    """An ``env.d`` directory found while walking up from the start path."""

    path: Path
    """Absolute path of the ``env.d`` directory itself."""


@dataclass(frozen=True, slots=True)
class Envdir:
    """A directory whose regular files are variable assignments."""

    name: str
    """The command-line token this envdir was resolved from."""

    path: Path
    """Absolute path of the envdir."""


# ---------------------------------------------------------------------------
# Command-line tokens
# ---------------------------------------------------------------------------

class TokenKind(enum.Enum):
    """How a command-line token before ``--`` is interpreted."""

    ABSOLUTE_PATH = "absolute"
    RELATIVE_PATH = "relative"
    ASSIGNMENT = "assignment"
    NAME = "name"


@dataclass(frozen=True, slots=True)
class NameArgument:
    """A classified command-line token."""

    token: str
    kind: TokenKind

    @property
    def key(self) -> str:
        """Variable name of an ad-hoc ``KEY=VALUE`` pair."""
        if self.kind is not TokenKind.ASSIGNMENT:
            raise ValueError(f"{self.token!r} is not a KEY=VALUE pair")
        return self.token.partition("=")[0]

    @property
    def value(self) -> str:
        """Verbatim value of an ad-hoc ``KEY=VALUE`` pair."""
        if self.kind is not TokenKind.ASSIGNMENT:
            raise ValueError(f"{self.token!r} is not a KEY=VALUE pair")
        return self.token.partition("=")[2]


@dataclass(frozen=True, slots=True)
class Invocation:
    """The argument vector split into names and the target command."""

    names: tuple[NameArgument, ...]
    command: tuple[str, ...]
    separator_seen: bool = False


# ---------------------------------------------------------------------------
# Environment changes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EnvAssignment:
    """A single change to the environment.

    ``value=None`` removes the variable (zero-byte envdir file).
    """

    key: str
    value: str | None
    source: str
    """Envdir path the assignment was read from, or ``"argv"``."""


# ---------------------------------------------------------------------------
# Per-invocation settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Settings for one envchain invocation.

    Built once by the CLI layer and passed down explicitly; nothing in
    envchain mutates the process working directory.
    """

    start: Path
    home: Path
    envd_name: str = "env.d"
    allow_relative_fallback: bool = True