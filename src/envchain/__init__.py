"""envchain — launch commands with variables from named envdirs.

Envdirs are discovered by walking upward from the current directory
looking for ``env.d`` directories, with a strict layered architecture.
"""

from envchain.version import __version__

__all__: list[str] = ["__version__"]
