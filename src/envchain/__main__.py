"""Allow ``python -m envchain`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m envchain`` behaves identically to the ``envchain``
console script.
"""

from __future__ import annotations

from envchain.cli.app import cli

if __name__ == "__main__":
    cli()
