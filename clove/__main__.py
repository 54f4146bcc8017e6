"""Command line entry point: `clove` or `python -m clove`."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from clove import __version__, config
from clove.errors import CloveError
from clove.interpreter import Interpreter
from clove.printer import to_str
from clove.repl import Repl, format_error

logger = logging.getLogger(__name__)


def enable_line_editing() -> bool:
    """Give `input` history and line editing where the platform has readline."""
    try:
        import readline  # noqa: F401
    except ImportError:
        return False
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clove",
        description="Evaluate Clojure-flavoured expressions from SICP chapter 1.",
    )
    parser.add_argument("files", nargs="*", help="source files to evaluate in order")
    parser.add_argument(
        "-e", "--eval", dest="exprs", action="append", default=[], metavar="EXPR",
        help="evaluate EXPR and print its value (repeatable)",
    )
    parser.add_argument(
        "-i", "--interactive", action="store_true",
        help="start the REPL after evaluating files and expressions",
    )
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="seconds allowed per top-level form (default: $CLOVE_EVAL_TIMEOUT or none)",
    )
    parser.add_argument(
        "--prelude", default=None, metavar="FILE",
        help="file evaluated before anything else (default: $CLOVE_PRELUDE_PATH)",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="logging level (default: $CLOVE_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or config.get_log_level()).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Printed results of iterative processes such as fact-iter pass the default digit limit.
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    interp = Interpreter(prelude=None if args.prelude else 'auto', timeout=args.timeout)
    status = 0
    try:
        if args.prelude:
            interp.load_file(args.prelude)
        for path in args.files:
            interp.load_file(path)
        for expr in args.exprs:
            print(to_str(interp.eval(expr)))
    except CloveError as ex:
        print(format_error(ex), file=sys.stderr)
        status = 1
    except OSError as ex:
        logger.error("Cannot read source file: %s", ex)
        status = 1

    if args.interactive or not (args.files or args.exprs):
        enable_line_editing()
        Repl(interp).run()
    return status


if __name__ == "__main__":
    sys.exit(main())
