"""CLI utility functions for cmakespec.

This module provides common utilities used across CLI commands including:
- Logging setup
- Error handling and formatting
- Path validation
"""

import logging
import sys
import traceback
from pathlib import Path


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for console output.

    Args:
        verbose: Log DEBUG and above when True, WARNING and above otherwise
    """
    logger = logging.getLogger()
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_cmakespec", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    console_handler._cmakespec = True  # type: ignore[attr-defined]
    logger.addHandler(console_handler)


class ErrorFormatter:
    """Prints colored status lines to stderr and exits with the CLI exit codes."""

    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print a red `✗ title` line followed by the message details."""
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}\n{message}", file=sys.stderr)

    @staticmethod
    def print_success(message: str) -> None:
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}", file=sys.stderr)

    @staticmethod
    def _fail(title: str, message: str, exit_code: int = 1) -> None:
        ErrorFormatter.print_error(title, message)
        sys.exit(exit_code)

    @staticmethod
    def handle_file_not_found(error: Exception) -> None:
        """Report a missing input whose path is named in the error message."""
        ErrorFormatter._fail("File not found", str(error))

    @staticmethod
    def handle_permission_error(error: PermissionError) -> None:
        ErrorFormatter._fail("Permission denied", str(error))

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        print(f"{ErrorFormatter.YELLOW}✗ Interrupted{ErrorFormatter.RESET}", file=sys.stderr)
        sys.exit(130)  # SIGINT

    @staticmethod
    def handle_failure(title: str, error: Exception, verbose: bool = False) -> None:
        """Report an expected failure (tool check, configure, output).

        Args:
            title: Short description of the failed step
            error: The exception to report
            verbose: Also print the captured tool output carried by the error
        """
        message = str(error)
        output = getattr(error, "output", "")
        if verbose and output:
            message = f"{message}\n{output}"
        ErrorFormatter._fail(title, message)

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Report an unexpected exception, with its traceback when verbose."""
        message = f"{type(error).__name__}: {error}"
        if verbose:
            message = f"{message}\n{traceback.format_exc()}"
        ErrorFormatter._fail("Unexpected error", message)


class PathValidator:
    """Validates input paths, exiting with code 2 on a bad argument."""

    @staticmethod
    def _reject(reason: str, path: Path) -> None:
        ErrorFormatter._fail("Invalid path", f"{reason}: {path}", exit_code=2)

    @staticmethod
    def validate_file(path: Path) -> None:
        if not path.exists():
            PathValidator._reject("Path does not exist", path)
        if not path.is_file():
            PathValidator._reject("Path is not a file", path)

    @staticmethod
    def validate_dir(path: Path) -> None:
        if not path.exists():
            PathValidator._reject("Path does not exist", path)
        if not path.is_dir():
            PathValidator._reject("Path is not a directory", path)
