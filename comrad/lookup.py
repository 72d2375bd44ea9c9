"""External help, man, and tldr lookups.

Every call runs a local program synchronously and turns its output, or its
absence, into text the overlays can show. Nothing here raises for a missing
tool or a failing command; the caller always gets something to display.
Two operations hand the whole terminal to the external program instead of
capturing it: the interactive man pager and tldr cache population.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from collections.abc import Callable
from contextlib import AbstractContextManager

from .highlight import clean_external_text

logger = logging.getLogger(__name__)

NO_HELP_MESSAGE = "No help implemented for this command"
NO_MANUAL_MESSAGE = "No entries in the manual for this command"
NO_TLDR_MESSAGE = "No entries in tldr for this command"
UNEXPECTED_OUTPUT_MESSAGE = "Unexpected error when reading the output."
MAN_MISSING_MESSAGE = "man is not installed on this system."
TLDR_MISSING_MESSAGE = "Error: Check if TLDR is installed in your system."
TLDR_POPULATE_PROMPT = "\nPress Enter to return to comrad..."

_LISTING_SPLIT_RE = re.compile(r"[\s,]+")

Runner = Callable[..., subprocess.CompletedProcess]
HandoverFactory = Callable[[], AbstractContextManager]


def decode_output(raw: bytes | None) -> str | None:
    """Decode captured bytes as UTF-8; ``None`` means the bytes were not UTF-8."""
    if not raw:
        return ""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


class CommandLookup:
    """Run help/man/tldr lookups for command names.

    ``runner`` defaults to :func:`subprocess.run`; ``handover`` returns a
    context manager that releases the terminal for interactive programs (see
    ``TerminalController.suspended``).
    """

    def __init__(
        self,
        runner: Runner | None = None,
        handover: HandoverFactory | None = None,
        wait_for_enter: Callable[[], None] | None = None,
    ) -> None:
        self._run = runner if runner is not None else subprocess.run
        self._handover = handover
        self._wait_for_enter = wait_for_enter if wait_for_enter is not None else _wait_for_enter

    def _capture(self, argv: list[str], env: dict[str, str] | None = None) -> subprocess.CompletedProcess:
        return self._run(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            check=False,
        )

    def command_help(self, command: str) -> str:
        """Return ``command --help`` output or a placeholder."""
        try:
            proc = self._capture([command, "--help"])
        except OSError as exc:
            logger.info("could not run %s --help: %s", command, exc)
            return f"Could not run {command}: {exc.strerror or exc}"

        stdout = decode_output(proc.stdout)
        if stdout is None:
            return UNEXPECTED_OUTPUT_MESSAGE
        if stdout:
            return clean_external_text(stdout)
        if proc.returncode != 0:
            stderr = decode_output(proc.stderr)
            if stderr:
                return clean_external_text(stderr)
        return NO_HELP_MESSAGE

    def manual(self, command: str, width: int | None = None) -> str:
        """Return the rendered man page for ``command`` or a placeholder."""
        env = dict(os.environ)
        env["MANPAGER"] = "cat"
        env["PAGER"] = "cat"
        if width is not None and width > 0:
            env["MANWIDTH"] = str(width)
        try:
            proc = self._capture(["man", command], env=env)
        except OSError as exc:
            logger.info("could not run man: %s", exc)
            return MAN_MISSING_MESSAGE

        stdout = decode_output(proc.stdout)
        if stdout is None:
            return UNEXPECTED_OUTPUT_MESSAGE
        if not stdout.strip():
            return NO_MANUAL_MESSAGE
        return clean_external_text(stdout)

    def tldr_listing(self) -> set[str] | None:
        """Return the names in the local tldr cache, or ``None`` without tldr."""
        try:
            proc = self._capture(["tldr", "--list"])
        except OSError as exc:
            logger.info("could not run tldr --list: %s", exc)
            return None
        listing = (proc.stdout or b"").decode("utf-8", errors="replace")
        return {name for name in _LISTING_SPLIT_RE.split(listing) if name}

    def tldr_page(self, command: str) -> str | None:
        """Return the tldr page text, or ``None`` when it is not cached locally."""
        listing = self.tldr_listing()
        if listing is None:
            return TLDR_MISSING_MESSAGE
        if command not in listing:
            logger.debug("%s is not in the tldr cache", command)
            return None
        try:
            proc = self._capture(["tldr", command])
        except OSError as exc:
            logger.info("could not run tldr: %s", exc)
            return TLDR_MISSING_MESSAGE

        stdout = decode_output(proc.stdout)
        if stdout is None:
            return UNEXPECTED_OUTPUT_MESSAGE
        if not stdout.strip():
            return NO_TLDR_MESSAGE
        return clean_external_text(stdout)

    def open_manual_pager(self, command: str) -> str | None:
        """Show ``man command`` interactively; return an error message on failure."""
        return self._run_interactive(
            ["man", command],
            missing_message="man not found in PATH",
            failure_message=f"No manual entry for {command}",
        )

    def populate_tldr_cache(self, command: str) -> str | None:
        """Run ``tldr command`` in the foreground so it can fetch the page."""
        return self._run_interactive(
            ["tldr", command],
            missing_message="tldr not found in PATH",
            failure_message=f"tldr could not fetch a page for {command}",
            pause_after=True,
        )

    def _run_interactive(
        self,
        argv: list[str],
        *,
        missing_message: str,
        failure_message: str,
        pause_after: bool = False,
    ) -> str | None:
        """Run ``argv`` on the released terminal; return a status line on failure.

        Whatever the program printed is gone once the alternate screen comes
        back, so a non-zero exit is reported through ``failure_message``.
        """
        if self._handover is None:
            raise RuntimeError("interactive lookups need a terminal handover")
        error: str | None = None
        with self._handover():
            try:
                proc = self._run(argv, check=False)
            except FileNotFoundError:
                error = missing_message
            except OSError as exc:
                error = f"failed to launch {argv[0]}: {exc}"
            else:
                if proc.returncode != 0:
                    logger.info("%s exited with status %s", " ".join(argv), proc.returncode)
                    error = failure_message
                if pause_after:
                    self._wait_for_enter()
        if error is not None:
            logger.warning(error)
        return error


def _wait_for_enter() -> None:
    print(TLDR_POPULATE_PROMPT, end="", flush=True)
    try:
        input()
    except EOFError:
        pass
