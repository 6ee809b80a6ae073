"""Infrastructure layer — filesystem and operating-system integration.

This layer walks directories, reads envdirs, replaces the process image
and owns the trace sink.  Every raw ``OSError`` must be caught here and
re-raised as a :class:`~envchain.exceptions.EnvchainError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the CLI layer.
"""

from envchain.infra.envdir_reader import read_envdir
from envchain.infra.launcher import build_environment, exec_command
from envchain.infra.resolver import resolve_envdir
from envchain.infra.search import list_envdirs, walk_envd_directories
from envchain.infra.trace import configure_trace

__all__: list[str] = [
    "build_environment",
    "configure_trace",
    "exec_command",
    "list_envdirs",
    "read_envdir",
    "resolve_envdir",
    "walk_envd_directories",
]
