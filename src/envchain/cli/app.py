"""CLI application entry point and command routing for envchain.

This module is the **sole error boundary** for the entire application.
It catches :class:`~envchain.exceptions.EnvchainError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No search or resolution logic lives here; all work is delegated to the
  core and infrastructure layers.
* The argument vector is split on the first ``--`` before ``argparse``
  sees it, so the target command's own options are never parsed.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from envchain.cli import exit_codes
from envchain.cli.console import console
from envchain.core.arguments import partition_options, split_invocation
from envchain.core.environment import format_environment
from envchain.core.models import Invocation, SearchConfig
from envchain.exceptions import CommandNotFoundError, EnvchainError
from envchain.infra.trace import configure_trace
from envchain.version import __version__

_COMPLETE_FLAG = "--complete"

_EPILOG = """\
Each NAME is looked up as env.d/NAME in the current directory and its
parents (up to, but not including, the parent of $HOME or /).  Paths
starting with / or ../ are used as-is, and KEY=VALUE sets a variable
directly.  Without a command, the resulting environment is printed.

Set ENVCHAIN_TRACE to a file descriptor number or a file path to trace
the search.
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands are not used; the CLI supports:
    * ``envchain NAME... [-- COMMAND [ARGS...]]``
    * ``envchain --list``
    * ``envchain --complete CWORD WORDS...`` (intercepted before parsing)
    * ``envchain --completion-script``
    * ``envchain --version``
    """
    parser = argparse.ArgumentParser(
        prog="envchain",
        usage="%(prog)s [-h] [-V] [-l] NAME [NAME ...] [-- COMMAND [ARGS ...]]",
        description="Run a command with variables from named envdirs.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List discovered env.d directories and their envdirs.",
    )
    parser.add_argument(
        _COMPLETE_FLAG,
        metavar="CWORD",
        help="Print shell completion candidates (must be the first argument).",
    )
    parser.add_argument(
        "--completion-script",
        action="store_true",
        help="Print a bash completion script.",
    )
    parser.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help="Envdir name, /absolute/path, ../relative/path, or KEY=VALUE.",
    )
    return parser


def _search_config() -> SearchConfig:
    return SearchConfig(start=Path.cwd(), home=Path.home())


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_complete(arguments: Sequence[str]) -> int:
    """Dispatch ``--complete``; the raw arguments bypass ``argparse``."""
    from envchain.cli.completion import run_complete

    return run_complete(arguments, _search_config())


def _handle_list() -> int:
    """Dispatch ``--list``."""
    from envchain.cli.listing import run_list

    return run_list(_search_config())


def _handle_run(invocation: Invocation) -> int:
    """Apply every name, then launch the command or print the environment.

    Flow:
    1. Walk up from the current directory collecting ``env.d`` directories.
    2. Resolve and read every name, in order, into one new environment.
    3. Replace the process with the command, or print the environment.
    """
    from envchain.infra.launcher import build_environment, exec_command
    from envchain.infra.search import walk_envd_directories

    config = _search_config()
    search = walk_envd_directories(
        config.start,
        config.home,
        envd_name=config.envd_name,
    )
    env = build_environment(
        invocation,
        os.environ,
        search,
        cwd=config.start,
        allow_relative_fallback=config.allow_relative_fallback,
    )

    if not invocation.command:
        # Values may carry undecodable bytes as surrogates; emit them raw.
        sys.stdout.flush()
        sys.stdout.buffer.write(
            b"".join(os.fsencode(line) + b"\n" for line in format_environment(env))
        )
        sys.stdout.buffer.flush()
        return exit_codes.SUCCESS

    sys.stdout.flush()
    sys.stderr.flush()
    exec_command(invocation.command, env)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the envchain CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    arguments = list(sys.argv[1:] if argv is None else argv)

    configure_trace(os.environ)

    if arguments[:1] == [_COMPLETE_FLAG]:
        return _handle_complete(arguments[1:])

    head, tail = partition_options(arguments)
    parser = _build_parser()
    args = parser.parse_args(head)

    if args.complete is not None:
        parser.error(f"{_COMPLETE_FLAG} must be the first argument")

    if args.completion_script:
        from envchain.cli.completion import print_completion_script

        return print_completion_script()

    if args.list:
        return _handle_list()

    if not args.names and not tail:
        parser.print_help()
        return exit_codes.SUCCESS

    return _handle_run(split_invocation([*args.names, *tail]))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _report(exc: EnvchainError) -> None:
    console.print("[bold red]Error:[/bold red] {}", exc)
    if exc.hint:
        console.print("[yellow]Hint:[/yellow] {}", exc.hint)


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except CommandNotFoundError as exc:
        _report(exc)
        sys.exit(exit_codes.COMMAND_NOT_FOUND)
    except EnvchainError as exc:
        _report(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n  {}: {}",
            type(exc).__name__,
            exc,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
