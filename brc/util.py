"""
Console output helpers for the Bible Reader Core.

Every module reports progress through these functions rather than
calling print() directly, so the CLI can switch debug chatter on and off.
"""

import os
import sys

_verbose = os.environ.get("BRC_VERBOSE", "") not in ("", "0")


def set_verbose(enabled: bool) -> None:
    """Turn [debug] output on or off."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def debug(msg: str) -> None:
    """Print a debug message (only when verbose output is enabled)."""
    if _verbose:
        print(f"[debug] {msg}")


def info(msg: str) -> None:
    """Print an info message."""
    print(f"[info] {msg}")


def warn(msg: str) -> None:
    """Print a warning message to stderr."""
    print(f"[warn] {msg}", file=sys.stderr)


def ok(msg: str) -> None:
    """Print a success message."""
    print(f"[ok] {msg}")
