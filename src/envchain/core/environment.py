"""Pure environment merging.

The process environment is never touched here: callers pass a base
mapping in and receive a fresh ``dict`` back.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from envchain.core.models import EnvAssignment, NameArgument

ARGV_SOURCE: str = "argv"


def assignment_from_argument(argument: NameArgument) -> EnvAssignment:
    """Turn an ad-hoc ``KEY=VALUE`` token into an assignment, verbatim."""
    return EnvAssignment(key=argument.key, value=argument.value, source=ARGV_SOURCE)


def apply_assignments(
    base: Mapping[str, str],
    assignments: Iterable[EnvAssignment],
) -> dict[str, str]:
    """Return *base* with *assignments* applied in order.

    Later assignments override earlier ones.  ``value=None`` removes the
    key; removing a key that is not set is a no-op.
    """
    env = dict(base)
    for assignment in assignments:
        if assignment.value is None:
            env.pop(assignment.key, None)
        else:
            env[assignment.key] = assignment.value
    return env


def format_environment(env: Mapping[str, str]) -> list[str]:
    """Render *env* as ``KEY=VALUE`` lines in mapping order."""
    return [f"{key}={value}" for key, value in env.items()]
