"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so that
bootstrap paths (``--help``, ``--version``) and the launch path keep
working even when Rich is not installed.

Messages are written as a markup template plus literal values.  The
values are escaped for whichever backend renders them, so paths and
error text containing ``[`` or ``\\`` always print verbatim.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from envchain.exceptions import MissingDependencyError

_MARKUP_TAG = re.compile(r"\[/?[a-z][a-z ]*\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


def strip_markup(template: str) -> str:
    """Drop Rich style tags such as ``[bold red]`` from a markup template."""
    return _MARKUP_TAG.sub("", template)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool = True) -> None:
        self._stderr = stderr

    def print(self, template: str = "", *values: object) -> None:
        """Render *template* with each ``{}`` replaced by a literal value.

        Rich is used when available; otherwise the style tags are
        stripped from the template and the values are inserted as-is.
        """
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except MissingDependencyError:
            stream = sys.stderr if self._stderr else sys.stdout
            text = strip_markup(template)
            print(text.format(*values) if values else text, file=stream)
            return

        from rich.markup import escape

        if values:
            template = template.format(*(escape(str(value)) for value in values))
        rich_console.print(template)


console = _ConsoleProxy()
