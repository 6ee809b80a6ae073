"""Shell completion support.

``envchain --complete CWORD WORDS...`` prints candidates, one per line,
for the word at index ``CWORD`` of the shell's word list.
``envchain --completion-script`` prints a bash function that drives it:

    eval "$(envchain --completion-script)"

Completion never fails loudly; malformed input yields no candidates.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from envchain.cli import exit_codes
from envchain.core.completion import complete
from envchain.core.models import SearchConfig
from envchain.infra.search import list_envdirs, walk_envd_directories

BASH_COMPLETION_SCRIPT: str = """\
_envchain_complete() {
    local i
    for (( i=1; i < COMP_CWORD; i++ )); do
        if [[ "${COMP_WORDS[i]}" == "--" ]]; then
            _command_offset $((i + 1))
            return
        fi
    done
    local IFS=$'\\n'
    COMPREPLY=( $(envchain --complete "$COMP_CWORD" "${COMP_WORDS[@]}" 2>/dev/null) )
}
complete -o default -F _envchain_complete envchain
"""


def available_names(config: SearchConfig) -> list[str]:
    """Every candidate envdir name from every discovered ``env.d``."""
    names: list[str] = []
    for envd in walk_envd_directories(
        config.start,
        config.home,
        envd_name=config.envd_name,
    ):
        names.extend(list_envdirs(envd))
    return names


def run_complete(arguments: Sequence[str], config: SearchConfig) -> int:
    """Handle ``--complete``; *arguments* is ``[CWORD, *WORDS]``."""
    if not arguments:
        return exit_codes.SUCCESS
    try:
        cword = int(arguments[0])
    except ValueError:
        return exit_codes.SUCCESS

    words = list(arguments[1:])
    candidates = complete(words, cword, available_names(config))
    for candidate in candidates:
        print(candidate, file=sys.stdout)
    return exit_codes.SUCCESS


def print_completion_script() -> int:
    """Handle ``--completion-script``."""
    sys.stdout.write(BASH_COMPLETION_SCRIPT)
    return exit_codes.SUCCESS
