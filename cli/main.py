"""
CLI Application Logic

Prints the method lookup path of any importable Python object.
"""
import argparse
import builtins
import importlib
import logging
import re
from typing import Any, Dict, Optional, Sequence

from mropath import LookupPath, PythonObjectModel, StyleTable
from mropath.models import CATEGORIES, OVERRIDDEN_STYLE
from mropath.utils.settings import Settings, load_settings

logger = logging.getLogger(__name__)

OPTION_FLAGS = [c.value for c in CATEGORIES] + [OVERRIDDEN_STYLE]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mropath",
        description="Show the method lookup path of a Python object",
    )
    parser.add_argument(
        "target",
        nargs="?",
        help="Dotted path such as 'collections.OrderedDict'; omit for an interactive session",
    )
    parser.add_argument("--grep", metavar="TEXT", help="Only show methods containing TEXT")
    parser.add_argument("--regex", metavar="PATTERN", help="Only show methods matching PATTERN")
    for flag in OPTION_FLAGS:
        parser.add_argument(
            f"--{flag}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Show {flag} methods (overrides MROPATH_OPTIONS)",
        )
    parser.add_argument(
        "--instance",
        action="store_true",
        help="For a class target, show the lookup path of its instances",
    )
    parser.add_argument("--width", type=int, default=None, help="Wrap method names into columns")
    parser.add_argument("--no-color", dest="color", action="store_false", help="Disable styles")
    return parser


def resolve_target(path: str) -> Any:
    """
    Import the longest importable module prefix of ``path`` and walk the rest.

    Raises:
        LookupError: if no prefix of the path resolves to an object
    """
    parts = path.split(".")
    # Relative or malformed paths such as '.foo' or 'os..path'
    if not all(parts):
        raise LookupError(f"Could not import or find: {path}")
    for i in range(len(parts), 0, -1):
        try:
            obj = importlib.import_module(".".join(parts[:i]))
            for attr in parts[i:]:
                obj = getattr(obj, attr)
            return obj
        except (ImportError, AttributeError):
            continue

    # Builtins such as 'int' or 'dict.fromkeys' are not importable modules
    obj = builtins
    try:
        for attr in parts:
            obj = getattr(obj, attr)
    except AttributeError:
        raise LookupError(f"Could not import or find: {path}") from None
    return obj


def _option_flags(args: argparse.Namespace) -> Dict[str, bool]:
    return {flag: getattr(args, flag) for flag in OPTION_FLAGS if getattr(args, flag) is not None}


def inspect_target(target: Any, args: argparse.Namespace, settings: Settings, grep: Optional[str] = None) -> str:
    """Build, filter and render the lookup path of ``target``."""
    options = settings.options.with_flags(**_option_flags(args))
    styles = settings.style_table() if args.color else StyleTable()
    path = LookupPath(
        target,
        options,
        model=PythonObjectModel(instance_side=args.instance),
        styles=styles,
    )
    if args.regex:
        path = path.grep(re.compile(args.regex))
    for text in filter(None, (args.grep, grep)):
        path = path.grep(text)
    return path.render(args.width if args.width is not None else settings.width)


def interactive_session(args: argparse.Namespace, settings: Settings) -> None:
    """
    Read targets from stdin until 'exit'.

    Each line is ``TARGET [TEXT]``; TEXT narrows the output like --grep.
    """
    logger.info("Commands: 'exit' to quit, or TARGET [TEXT]")

    while True:
        try:
            line = input("mropath> ").strip()
        except (KeyboardInterrupt, EOFError):
            break

        if not line:
            continue
        if line in ("exit", "quit"):
            break

        words = line.split()
        try:
            target = resolve_target(words[0])
            print(inspect_target(target, args, settings, grep=words[1] if len(words) > 1 else None))
        except LookupError as e:
            logger.error("%s", e)
        except Exception as e:
            logger.exception("Error while inspecting %s: %s", words[0], e)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    if args.target is None:
        interactive_session(args, settings)
        return 0

    try:
        target = resolve_target(args.target)
        output = inspect_target(target, args, settings)
    except LookupError as e:
        logger.error("%s", e)
        return 1
    except (re.error, ValueError) as e:
        logger.error("Invalid option: %s", e)
        return 1

    if output:
        print(output)
    return 0
