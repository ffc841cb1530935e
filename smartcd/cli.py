"""Command-line front door for smartcd.

Parses CLI options, picks the navigation mode, and prints one shell command
for the wrapper function to evaluate. Errors go to stderr with a non-zero exit.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from . import shortcuts
from .compose import FileSystem, NavigationRequest, absolute_path, compose
from .errors import SmartCdError, UnknownShortcutError
from .logging_setup import setup_logging
from .navigator import Navigator, ProcessShellEnvironment, ShellEnvironment
from .shell_init import DEFAULT_DOT_ALIASES, DEFAULT_FUNCTION_NAME, render_init_script

logger = logging.getLogger(__name__)

PROG = "smartcd"
SUBCOMMANDS = ("-", "parent", "hist", "shortcuts", "complete-parent", "init")
_FLAGS_WITH_VALUE = ("-u", "--up")


def _non_negative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def split_subcommand(argv: Sequence[str]) -> tuple[str | None, list[str]]:
    """Find the subcommand word among ``argv``.

    Only the first positional token counts; flag values (``-u N``) are
    skipped. Returns ``(None, argv)`` for the plain path form.
    """
    args = list(argv)
    skip_value = False
    for index, token in enumerate(args):
        if skip_value:
            skip_value = False
            continue
        if token in _FLAGS_WITH_VALUE:
            skip_value = True
            continue
        if token in SUBCOMMANDS:
            return token, args[:index] + args[index + 1 :]
        if token.startswith("-"):
            continue
        break
    return None, args


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--plain", action="store_true", help="Leave simple paths unquoted in the emitted command.")
    common.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    return common


def _add_up_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-u",
        "--up",
        type=_non_negative_int,
        default=0,
        help="Number of directories to go up when cd-ing (default: 0).",
    )


def build_path_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "Changes directories. Prints the cd command for the shell wrapper to evaluate. "
            f"Subcommands: {', '.join(SUBCOMMANDS)}."
        ),
        parents=[_common_options()],
    )
    _add_up_flag(parser)
    parser.add_argument("path", nargs="?", default=None, metavar="PATH", help="Destination directory.")
    parser.add_argument("sub_path", nargs="*", metavar="SUB_PATH", help="Subdirectories to continue to.")
    return parser


def build_subcommand_parser(name: str) -> argparse.ArgumentParser:
    common = _common_options()
    if name == "-":
        return argparse.ArgumentParser(prog=f"{PROG} -", description="Go to the previous directory.", parents=[common])
    if name == "parent":
        parser = argparse.ArgumentParser(
            prog=f"{PROG} parent",
            description="Go up to the nearest parent directory with the given name.",
            parents=[common],
        )
        parser.add_argument("parent_dir", metavar="PARENT_DIR", help="Name of the parent directory to go up to.")
        return parser
    if name == "hist":
        return argparse.ArgumentParser(prog=f"{PROG} hist", description="Print the directory history.", parents=[common])
    if name == "complete-parent":
        parser = argparse.ArgumentParser(
            prog=f"{PROG} complete-parent",
            description="Print ancestor directory names, one per line.",
            parents=[common],
        )
        parser.add_argument("prefix", nargs="?", default="", help="Only print names starting with this prefix.")
        return parser
    if name == "init":
        parser = argparse.ArgumentParser(
            prog=f"{PROG} init",
            description='Print the shell wrapper; use as: eval "$(smartcd init)".',
            parents=[common],
        )
        parser.add_argument("--name", default=DEFAULT_FUNCTION_NAME, help="Name of the wrapper function.")
        parser.add_argument(
            "--dots",
            type=_non_negative_int,
            default=DEFAULT_DOT_ALIASES,
            help="Define '..', '...', ... functions for this many levels.",
        )
        return parser
    if name == "shortcuts":
        parser = argparse.ArgumentParser(prog=f"{PROG} shortcuts", description="Manage directory shortcuts.")
        actions = parser.add_subparsers(dest="action", required=True)
        add = actions.add_parser("add", help="Store a directory under a name.", parents=[common])
        add.add_argument("name", metavar="NAME")
        _add_up_flag(add)
        add.add_argument("path", nargs="?", default=None, metavar="PATH")
        add.add_argument("sub_path", nargs="*", metavar="SUB_PATH")
        delete = actions.add_parser("delete", help="Remove a shortcut.", parents=[common])
        delete.add_argument("name", metavar="NAME")
        actions.add_parser("list", help="Print all shortcuts.", parents=[common])
        return parser
    raise ValueError(f"unknown subcommand: {name}")


def _run_shortcuts(args: argparse.Namespace, env: ShellEnvironment, fs: FileSystem | None) -> None:
    if args.action == "list":
        table = shortcuts.load_directory_shortcuts()
        lines = [f"{name}: {' '.join(tokens)}" for name, tokens in sorted(table.items())]
        for line in lines:
            sys.stdout.write(line + "\n")
        return
    if args.action == "delete":
        if not shortcuts.delete_directory_shortcut(args.name):
            raise UnknownShortcutError(args.name)
        return

    cwd = env.getwd()
    request = NavigationRequest(args.up, args.path, tuple(args.sub_path))
    target = compose(request.ascend_count, request.path, request.sub_path, fs=fs, cwd=cwd)
    target = absolute_path(target or ".", cwd)
    shortcuts.add_directory_shortcut(args.name, target)
    logger.info("shortcut %s -> %s", args.name, target)


def run(argv: Sequence[str], env: ShellEnvironment | None = None, fs: FileSystem | None = None) -> None:
    """Dispatch one invocation; raises ``SmartCdError`` on failure."""
    command, rest = split_subcommand(argv)

    if command is None:
        rest = shortcuts.expand_shortcut(rest, shortcuts.load_directory_shortcuts())
        args = build_path_parser().parse_intermixed_args(rest)
    else:
        args = build_subcommand_parser(command).parse_args(rest)
    setup_logging(getattr(args, "verbose", False))
    logger.debug("command=%s args=%s", command, args)

    if command == "init":
        sys.stdout.write(render_init_script(args.name, args.dots))
        return

    if env is None:
        env = ProcessShellEnvironment()

    if command == "complete-parent":
        navigator = Navigator(env, fs=fs)
        for name in navigator.parent_candidates():
            if name.startswith(args.prefix):
                sys.stdout.write(name + "\n")
        return
    if command == "shortcuts":
        _run_shortcuts(args, env, fs)
        return

    navigator = Navigator(env, fs=fs, plain=args.plain)
    if command == "-":
        navigator.previous()
    elif command == "parent":
        navigator.parent(args.parent_dir)
    elif command == "hist":
        navigator.show_history()
    else:
        navigator.change_directory(NavigationRequest(args.up, args.path, tuple(args.sub_path)))


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and print the resulting shell command.

    ``argv`` defaults to ``sys.argv[1:]``. Every ``SmartCdError`` becomes a
    one-line stderr message and exit status 1.
    """
    if argv is None:
        argv = sys.argv[1:]
    setup_logging()
    try:
        run(argv)
    except SmartCdError as exc:
        logger.debug("invocation failed", exc_info=True)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
