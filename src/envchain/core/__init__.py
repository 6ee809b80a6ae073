"""Core layer — pure models and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from envchain.core.arguments import classify_token, split_invocation
from envchain.core.environment import apply_assignments, format_environment
from envchain.core.models import (
    EnvAssignment,
    EnvdDirectory,
    Envdir,
    Invocation,
    NameArgument,
    SearchConfig,
    TokenKind,
)

__all__: list[str] = [
    "EnvAssignment",
    "EnvdDirectory",
    "Envdir",
    "Invocation",
    "NameArgument",
    "SearchConfig",
    "TokenKind",
    "apply_assignments",
    "classify_token",
    "format_environment",
    "split_invocation",
]
