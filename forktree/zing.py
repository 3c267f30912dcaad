"""Greet the user logged in on the controlling terminal."""

from __future__ import annotations

import os
import sys


def welcome_message() -> str:
    """Return the greeting for the current login name."""
    try:
        login = os.getlogin()
    except OSError:
        login = "(null)"
    return f"Welcome, {login}"


def zing() -> str:
    """Print the greeting for the current login name and return it."""
    message = welcome_message()
    sys.stdout.write(message + "\n")
    return message


def main(argv: list[str] | None = None) -> int:
    zing()
    return 0