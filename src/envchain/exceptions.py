"""Custom exception hierarchy for envchain.

All exceptions that cross layer boundaries must inherit from
:class:`EnvchainError`.  Raw ``OSError`` instances raised while touching
the filesystem or replacing the process must NEVER propagate beyond the
infrastructure layer.  They are caught and re-raised as a typed subclass
defined here.

Hierarchy
---------
EnvchainError
├── ResolutionError
│   ├── EnvdirNotFoundError
│   └── NotAnEnvdirError
├── InvalidEnvdirError
├── LaunchError
│   ├── CommandNotFoundError
│   └── CommandLaunchError
├── TraceSinkError
└── MissingDependencyError
"""

from __future__ import annotations


class EnvchainError(Exception):
    """Base exception for all envchain errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Resolution ------------------------------------------------------------

class ResolutionError(EnvchainError):
    """Raised when a name or path cannot be turned into an envdir."""


class EnvdirNotFoundError(ResolutionError):
    """Raised when no envdir matches a name, or an explicit path is missing."""


class NotAnEnvdirError(ResolutionError):
    """Raised when an explicit path exists but is not a directory."""


# --- Envdir contents -------------------------------------------------------

class InvalidEnvdirError(EnvchainError):
    """Raised when an envdir holds an unusable or unreadable entry."""


# --- Launch ----------------------------------------------------------------

class LaunchError(EnvchainError):
    """Raised when the target command cannot replace the current process."""


class CommandNotFoundError(LaunchError):
    """Raised when the target command is not found on ``PATH``."""


class CommandLaunchError(LaunchError):
    """Raised when ``exec`` fails for any other reason."""


# --- Tracing ---------------------------------------------------------------

class TraceSinkError(EnvchainError):
    """Raised when the ``ENVCHAIN_TRACE`` sink cannot be opened."""


# --- Runtime dependencies --------------------------------------------------

class MissingDependencyError(EnvchainError):
    """Raised when an optional runtime dependency is not available."""


def append_list_suggestion(hint: str) -> str:
    """Append ``--list`` guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Run 'envchain --list' to see available envdirs."
    if marker in hint:
        return hint
    if not hint:
        return marker
    return "\n".join((hint, marker))
