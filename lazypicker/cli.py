"""Command-line front door for lazypicker.

Reads candidate lines from stdin (or a file), runs the picker on the
controlling terminal, and prints the chosen line(s) to stdout.
"""

from __future__ import annotations

import argparse
import functools
import logging
import sys
from pathlib import Path

from .errors import AbortedByUserError, EmptyInputError, EmptyResultError
from .runtime.app import Picker
from .runtime.config import load_picker_config, save_order_by, save_theme_name
from .runtime.terminal import DEFAULT_TTY_PATH, open_terminal_surface
from .search.matcher import Matcher
from .search.types import OrderBy
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

EXIT_NO_MATCH = 1
EXIT_EMPTY_INPUT = 2
EXIT_ABORTED = 130


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def read_candidates(source: Path | None) -> list[str]:
    """Read one candidate per ``\\n``-terminated line.

    A ``\\r`` before the newline is dropped, as is the empty piece after a
    final newline. Other separators (form feed, ``\\u2028``...) stay inside
    the candidate.
    """
    if source is not None:
        text = source.read_bytes().decode("utf-8", errors="replace")
    elif sys.stdin.isatty():
        return []
    else:
        text = sys.stdin.read()
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def configure_logging(log_file: Path | None) -> None:
    """Send debug logs to ``log_file``; the screen belongs to the picker."""
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    package_logger = logging.getLogger("lazypicker")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypicker",
        description="Fuzzy-select lines from stdin in an interactive terminal picker.",
    )
    parser.add_argument("--input", type=Path, default=None, help="Read candidates from FILE instead of stdin.")
    parser.add_argument(
        "--order",
        choices=[member.value for member in OrderBy],
        default=None,
        help="Rank by match score (default) or by trimmed line length.",
    )
    parser.add_argument("--reverse", action="store_true", default=None, help="Draw results bottom-up.")
    parser.add_argument("--multi", action="store_true", help="Enable multi-select with TAB.")
    parser.add_argument("--max", type=_positive_int, default=None, help="Maximum number of items in multi-select.")
    parser.add_argument(
        "--normalize",
        action="store_true",
        default=None,
        help="Fold diacritics before matching (e.g. 'e' matches 'é').",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument(
        "--filter",
        metavar="QUERY",
        default=None,
        help="Print ranked matches for QUERY without starting the interactive picker.",
    )
    parser.add_argument("--tty", default=DEFAULT_TTY_PATH, help="Terminal device used for the interactive picker.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to FILE.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --order and --theme as defaults for future runs.",
    )
    return parser


def run_filter(items: list[str], query: str, order: str | OrderBy, normalize: bool) -> int:
    with Matcher(items, order_by=order, normalize=normalize) as matcher:
        results = matcher.match(query)
    for result in results:
        sys.stdout.write(result.text + "\n")
    return 0 if results else EXIT_NO_MATCH


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the picker, and exit with an fzf-style status code.

    Exit codes: ``0`` success, ``1`` nothing selected/matched, ``2`` empty
    input, ``130`` aborted by the user.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    if args.save_defaults:
        if args.order is not None:
            save_order_by(args.order)
        if args.theme is not None:
            save_theme_name(args.theme)

    config = load_picker_config(
        order_by=args.order,
        reverse=args.reverse,
        normalize=args.normalize,
        theme=args.theme,
        no_color=args.no_color or None,
        multi_select=args.multi or None,
        max_selected=args.max,
    )
    items = read_candidates(args.input)
    logger.debug("read %d candidates", len(items))

    if args.filter is not None:
        code = run_filter(items, args.filter, config.order_by, config.normalize)
        if code:
            raise SystemExit(code)
        return

    picker = Picker(config, surface_factory=functools.partial(open_terminal_surface, args.tty))
    try:
        if config.multi_select:
            chosen = picker.multi_select(items)
        else:
            chosen = [picker.select(items)]
    except EmptyInputError as exc:
        sys.stderr.write(f"lazypicker: {exc}\n")
        raise SystemExit(EXIT_EMPTY_INPUT) from exc
    except EmptyResultError as exc:
        raise SystemExit(EXIT_NO_MATCH) from exc
    except AbortedByUserError as exc:
        raise SystemExit(EXIT_ABORTED) from exc

    for line in chosen:
        sys.stdout.write(line + "\n")


if __name__ == "__main__":
    main()
