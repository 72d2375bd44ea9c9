"""Command-line front door for comrad.

Parses CLI options, sets up logging, and dispatches into the interactive
runtime. Log records are held in memory while the TUI owns the screen and
written to stderr once the terminal has been restored.
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
import termios

from . import __version__
from .highlight import DEFAULT_STYLE
from .runtime import run_app
from .runtime.config import AppConfig
from .ui_theme import available_theme_names

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
LOG_BUFFER_CAPACITY = 10_000

DESCRIPTION = "Browse the commands available on your PATH in a terminal UI."
EPILOG = """\
keys:
  j/k or Down/Up   move through the list
  g/G              first/last command
  /                filter the list
  h                show the --help output of the command
  m                show the man page of the command
  M                open the man page in the man pager
  t                show the tldr page of the command
  H                show comrad help
  Esc              go back to the command list
  q                quit
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comrad",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style for help, man, and tldr text.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors and text highlighting.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr on exit.")
    return parser


def configure_logging(verbose: bool) -> logging.handlers.MemoryHandler:
    """Buffer ``comrad`` log records until the terminal is released."""
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    buffer = logging.handlers.MemoryHandler(
        LOG_BUFFER_CAPACITY,
        flushLevel=logging.CRITICAL + 1,
        target=stream_handler,
    )
    package_logger = logging.getLogger("comrad")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.addHandler(buffer)
    return buffer


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and launch the interactive command browser."""
    args = build_parser().parse_args(argv)
    config = AppConfig.from_options(args.theme, args.style, args.no_color)

    log_buffer = configure_logging(args.verbose)
    try:
        return run_app(config)
    except (RuntimeError, OSError, termios.error) as exc:
        logging.getLogger(__name__).debug("fatal terminal error", exc_info=True)
        sys.stderr.write(f"comrad: error: {exc}\n")
        return 1
    finally:
        log_buffer.flush()
        logging.getLogger("comrad").removeHandler(log_buffer)
        log_buffer.close()


if __name__ == "__main__":
    sys.exit(main())
