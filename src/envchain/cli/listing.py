"""``envchain --list`` — show discovered ``env.d`` directories.

Each ``env.d`` directory found by the upward walk is printed, nearest
first, followed by its candidate envdirs.  Rendering uses a Rich tree
when Rich is importable and plain indented text otherwise.

No search logic lives here; it only collects and displays.
"""

from __future__ import annotations

import sys

from envchain.cli import exit_codes
from envchain.cli.console import console, get_rich_console
from envchain.core.models import EnvdDirectory, SearchConfig
from envchain.exceptions import MissingDependencyError
from envchain.infra.search import list_envdirs, walk_envd_directories


def collect_listing(
    config: SearchConfig,
) -> list[tuple[EnvdDirectory, tuple[str, ...]]]:
    """Return ``(env.d, candidate names)`` pairs, nearest first."""
    return [
        (envd, list_envdirs(envd))
        for envd in walk_envd_directories(
            config.start,
            config.home,
            envd_name=config.envd_name,
        )
    ]


def _print_plain_listing(listing: list[tuple[EnvdDirectory, tuple[str, ...]]]) -> None:
    for envd, names in listing:
        print(envd.path, file=sys.stdout)
        for name in names:
            print(f"  {name}", file=sys.stdout)


def _print_rich_listing(
    rich_console: object,
    listing: list[tuple[EnvdDirectory, tuple[str, ...]]],
) -> None:
    from rich.text import Text
    from rich.tree import Tree

    for envd, names in listing:
        tree = Tree(Text(str(envd.path), style="bold cyan"))
        for name in names:
            tree.add(Text(name))
        rich_console.print(tree)  # type: ignore[attr-defined]


def run_list(config: SearchConfig) -> int:
    """Print every discovered ``env.d`` and its envdirs.

    Returns
    -------
    int
        Always :data:`exit_codes.SUCCESS`; an empty result is reported
        on stderr but is not an error.
    """
    listing = collect_listing(config)
    if not listing:
        console.print(
            "[yellow]No {} directories found above {}.[/yellow]",
            config.envd_name,
            config.start,
        )
        return exit_codes.SUCCESS

    try:
        rich_console = get_rich_console(stderr=False)
    except MissingDependencyError:
        _print_plain_listing(listing)
    else:
        _print_rich_listing(rich_console, listing)
    return exit_codes.SUCCESS
