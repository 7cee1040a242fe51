"""Simple logging helpers for the aig CLI."""

import os
import sys


class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'


def _paint(msg: str, *codes: str) -> str:
    """Wrap msg in color codes unless NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return msg
    return f"{''.join(codes)}{msg}{Colors.RESET}"


def print_header(msg: str) -> None:
    """Print a header message."""
    print(_paint(msg, Colors.HEADER, Colors.BOLD))


def print_info(msg: str) -> None:
    """Print an info message."""
    print(_paint(msg, Colors.CYAN))


def print_dim(msg: str) -> None:
    print(_paint(msg, Colors.DIM))


def print_success(msg: str) -> None:
    """Print a success message."""
    print(_paint(f"✓ {msg}", Colors.GREEN))


def print_warning(msg: str) -> None:
    """Print a warning message to stderr."""
    print(_paint(f"⚠️  {msg}", Colors.YELLOW), file=sys.stderr)


def print_error(msg: str) -> None:
    """Print an error message."""
    print(_paint(f"❌ {msg}", Colors.RED))
