"""Pure shell-completion candidate selection.

The CLI layer collects the available envdir names from the filesystem;
this module only decides which of them (or which flags) to offer for a
given cursor position.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from envchain.core.arguments import SEPARATOR

FLAGS: tuple[str, ...] = (
    "--",
    "--help",
    "--list",
    "--version",
    "-V",
    "-h",
    "-l",
)


def in_command_region(words: Sequence[str], cword: int) -> bool:
    """Return ``True`` when a ``--`` appears before the cursor word.

    ``words[0]`` is the program name and is never treated as a
    separator.
    """
    return SEPARATOR in words[1:cword]


def current_word(words: Sequence[str], cword: int) -> str:
    """Return the word under the cursor, or ``""`` past the end."""
    if 0 <= cword < len(words):
        return words[cword]
    return ""


def complete(
    words: Sequence[str],
    cword: int,
    names: Iterable[str],
) -> list[str]:
    """Return completion candidates for the word at index *cword*.

    Parameters
    ----------
    words:
        The shell's word list, program name first.
    cword:
        Index of the word being completed.  Index ``len(words)`` means
        a fresh, empty word after the last one.
    names:
        Envdir names available from every discovered ``env.d``.
    """
    if cword < 1 or cword > len(words):
        return []
    if in_command_region(words, cword):
        return []

    prefix = current_word(words, cword)
    if prefix.startswith("-"):
        return sorted(flag for flag in FLAGS if flag.startswith(prefix))

    return sorted({name for name in names if name.startswith(prefix)})
