"""Pure command-line token classification and splitting.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.

Splitting is a single linear pass with two states:

1. **collecting-names** — tokens are classified as paths, ad-hoc
   ``KEY=VALUE`` pairs or bare names.
2. **collecting-command** — entered on the first ``--``; every later
   token (including further ``--``) is part of the command.
"""

from __future__ import annotations

from collections.abc import Sequence

from envchain.core.models import Invocation, NameArgument, TokenKind

SEPARATOR: str = "--"


def is_assignment(token: str) -> bool:
    """Return ``True`` for ``KEY=VALUE`` tokens with a non-empty key."""
    key, sep, _ = token.partition("=")
    return bool(sep) and bool(key)


def classify_token(token: str) -> NameArgument:
    """Classify a single token appearing before the ``--`` separator.

    Paths take precedence over assignments, so ``/srv/a=b`` is an
    absolute path rather than a pair.
    """
    if token.startswith("/"):
        return NameArgument(token=token, kind=TokenKind.ABSOLUTE_PATH)
    if token == ".." or token.startswith("../"):
        return NameArgument(token=token, kind=TokenKind.RELATIVE_PATH)
    if is_assignment(token):
        return NameArgument(token=token, kind=TokenKind.ASSIGNMENT)
    return NameArgument(token=token, kind=TokenKind.NAME)


def split_invocation(argv: Sequence[str]) -> Invocation:
    """Split *argv* into classified names and the target command."""
    names: list[NameArgument] = []
    command: list[str] = []
    separator_seen = False

    for token in argv:
        if separator_seen:
            command.append(token)
        elif token == SEPARATOR:
            separator_seen = True
        else:
            names.append(classify_token(token))

    return Invocation(
        names=tuple(names),
        command=tuple(command),
        separator_seen=separator_seen,
    )


def partition_options(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split *argv* at the first ``--`` without classifying anything.

    Returns ``(head, tail)`` where *tail* still starts with ``--`` when
    a separator was present, so the CLI can hand *head* to ``argparse``
    and keep command arguments away from option parsing.
    """
    tokens = list(argv)
    if SEPARATOR in tokens:
        index = tokens.index(SEPARATOR)
        return tokens[:index], tokens[index:]
    return tokens, []
