"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit, including a successful handoff to the target command."""

GENERAL_ERROR: int = 1
"""A known EnvchainError was caught (e.g. an envdir could not be found)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

COMMAND_NOT_FOUND: int = 127
"""The target command is not on PATH.  Matches the POSIX shell value."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
