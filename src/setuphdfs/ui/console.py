"""Console output formatting utilities for setup-hdfs."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from .. import settings


def _escape_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Console:
    """
    Centralized console output formatting.

    Inside GitHub Actions warnings, errors and groups are emitted as workflow
    commands so they show up as annotations; elsewhere they print with plain
    prefixes.
    """

    def __init__(self, debug: bool = False, annotations: bool | None = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            annotations: Force workflow-command output on/off (defaults to
                whether GITHUB_ACTIONS is set)
        """
        self.debug = debug
        self.annotations = settings.in_github_actions() if annotations is None else annotations

    def print_setup_started(self, version: str, url: str) -> None:
        print("\nSETUP STARTED")
        print(f"Hadoop version: {version}")
        print(f"Archive: {url}")
        print()

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Fold everything printed inside the block under `title`."""
        if self.annotations:
            print(f"::group::{title}")
        else:
            print(f"\nPHASE: {title}")
        try:
            yield
        finally:
            if self.annotations:
                print("::endgroup::")

    def print_output(self, stdout: str, stderr: str) -> None:
        """Process stdout goes out as info, stderr as a warning."""
        if stdout and stdout.strip():
            self.print_info(stdout.rstrip("\n"))
        if stderr and stderr.strip():
            self.print_warning(stderr.rstrip("\n"))

    def print_step(self, name: str) -> None:
        print(f"STEP: {name}")

    def print_success(self, result_lines: dict[str, str]) -> None:
        print("\n" + "=" * 40)
        print("HDFS READY")
        print("=" * 40)
        for name, value in result_lines.items():
            print(f"  {name}={value}")

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_warning(self, message: str) -> None:
        if self.annotations:
            print(f"::warning::{_escape_data(message)}")
        else:
            print(f"WARNING: {message}", file=sys.stderr)

    def print_error(
        self,
        title: str,
        message: Optional[str] = None,
        details: Optional[list[str]] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Optional main error message
            details: Optional list of detail lines
        """
        if self.annotations:
            body = title if not message else f"{title}: {message}"
            print(f"::error::{_escape_data(body)}")
        else:
            print(f"\nERROR: {title}", file=sys.stderr)
            if message:
                print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        self.print_error(str(exc))

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if not self.debug:
            return
        if self.annotations:
            print(f"::debug::{_escape_data(message)}")
        else:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
