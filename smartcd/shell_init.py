"""Shell wrapper emitted by ``smartcd init``.

The wrapper evaluates whatever ``smartcd`` prints on stdout, so navigation
commands only ever reach the shell through this function.
"""

from __future__ import annotations

DEFAULT_FUNCTION_NAME = "smartcd"
DEFAULT_DOT_ALIASES = 3

# Subcommands whose stdout is data, not a command to evaluate.
PASSTHROUGH_COMMANDS = ("init", "complete-parent", "shortcuts")

_WRAPPER = """\
export SMARTCD_SESSION="${{SMARTCD_SESSION:-$$}}"
{name}() {{
  case "$1" in
    {passthrough}) command smartcd "$@"; return $? ;;
  esac
  local __smartcd_cmd __smartcd_rc
  __smartcd_cmd="$(command smartcd "$@")"
  __smartcd_rc=$?
  [ -n "$__smartcd_cmd" ] && eval "$__smartcd_cmd"
  return $__smartcd_rc
}}
"""

_BASH_COMPLETION = """\
if [ -n "${{BASH_VERSION:-}}" ]; then
  _{ident}_complete() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    if [ "$COMP_CWORD" -eq 2 ] && [ "${{COMP_WORDS[1]}}" = parent ]; then
      COMPREPLY=($(compgen -W "$(command smartcd complete-parent)" -- "$cur"))
    else
      COMPREPLY=($(compgen -d -- "$cur"))
    fi
  }}
  complete -o filenames -F _{ident}_complete {name}
fi
"""


def dot_alias_name(ascend_count: int) -> str:
    """``..`` goes up one level, ``...`` two, and so on."""
    return "." * (ascend_count + 1)


def render_init_script(name: str = DEFAULT_FUNCTION_NAME, dots: int = DEFAULT_DOT_ALIASES) -> str:
    """Return the POSIX-shell snippet installing the wrapper function.

    ``dots`` dot-named functions are added for ascend counts ``1..dots``.
    """
    ident = "".join(ch if ch.isalnum() else "_" for ch in name)
    parts = [
        _WRAPPER.format(name=name, passthrough="|".join(PASSTHROUGH_COMMANDS)),
        _BASH_COMPLETION.format(name=name, ident=ident),
    ]
    for count in range(1, max(0, dots) + 1):
        parts.append(f'{dot_alias_name(count)}() {{ {name} -u {count} "$@"; }}\n')
    return "".join(parts)
