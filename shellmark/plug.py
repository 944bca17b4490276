"""Shell integration snippets printed by ``shellmark plug``.

Each snippet defines a shell function (``s`` by default) that runs shellmark
with the matching ``--out`` flavour and evaluates whatever it prints.
"""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .shell import OutputType

DEFAULT_FUNCTION_NAME = "s"
DEFAULT_STYLE = "monokai"

POSIX_SCRIPT = """\
#!/usr/bin/env bash

function {name} {
    if ! type shellmark &>/dev/null; then
        echo "shellmark is not in PATH"
        return 1
    fi

    local out
    out="$(shellmark --out posix "$@")"

    if [[ -n $out ]]; then
        eval "$out"
    fi
}
"""

FISH_SCRIPT = """\
function {name}
    if not type -q shellmark
        echo "shellmark is not in PATH"
        return 1
    end

    set -l out (shellmark --out fish $argv)

    if test -n "$out"
        eval $out
    end
end
"""

POWERSHELL_SCRIPT = """\
function {name} {
    if (-not (Get-Command shellmark -ErrorAction SilentlyContinue)) {
        Write-Output "shellmark is not in PATH"
        return
    }

    $out = shellmark --out powershell $args

    if ($out) {
        Invoke-Expression $out
    }
}
"""

_SCRIPTS: dict[OutputType, tuple[str, str]] = {
    OutputType.POSIX: (POSIX_SCRIPT, "bash"),
    OutputType.FISH: (FISH_SCRIPT, "fish"),
    OutputType.POWERSHELL: (POWERSHELL_SCRIPT, "powershell"),
}


def plug_script(out_type: OutputType, name: str = DEFAULT_FUNCTION_NAME) -> str:
    """Integration snippet for ``out_type``; ``plain`` has none."""
    entry = _SCRIPTS.get(out_type)
    if entry is None:
        return ""
    script, _lexer = entry
    return script.replace("{name}", name)


def highlight_script(script: str, out_type: OutputType, style: str = DEFAULT_STYLE) -> str:
    """Colorize ``script`` for terminal display with Pygments."""
    entry = _SCRIPTS.get(out_type)
    if entry is None or not script:
        return script
    _script, lexer_name = entry
    try:
        formatter = Terminal256Formatter(style=style)
    except ClassNotFound:
        formatter = Terminal256Formatter(style=DEFAULT_STYLE)
    return highlight(script, get_lexer_by_name(lexer_name), formatter)
