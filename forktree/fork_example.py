"""Fork one child, let it sleep, and report how it terminated."""

from __future__ import annotations

import os
import sys
import time
from typing import Callable

from .proc_common import change_pname, explain_wait_status

SLEEP_SEC = 10
CHILD_EXIT_STATUS = 101


def _flush_streams() -> None:
    sys.stdout.flush()
    sys.stderr.flush()


def _spawn(work: Callable[..., int], *args) -> int:
    """Fork a child that runs ``work(*args)`` and exits with its result.

    Returns the child's PID in the parent; never returns in the child.
    """
    _flush_streams()
    pid = os.fork()
    if pid:
        return pid
    code = 1
    try:
        code = work(*args)
    except BaseException as exc:  # the child must never return to the caller
        print(exc, file=sys.stderr)
    finally:
        try:
            _flush_streams()
        finally:
            os._exit(code)


def _child() -> int:
    change_pname("child")
    time.sleep(SLEEP_SEC)
    return CHILD_EXIT_STATUS


def main(argv: list[str] | None = None) -> int:
    print(f"Parent, PID = {os.getpid()}: Creating child...", file=sys.stderr)
    try:
        pid = _spawn(_child)
    except OSError as exc:
        print(f"fork: {exc.strerror}", file=sys.stderr)
        return 1

    change_pname("father")
    print(
        f"Parent, PID = {os.getpid()}: Created child with PID = {pid}, "
        "waiting for it to terminate..."
    )
    explain_wait_status(*os.waitpid(pid, 0))

    print("Parent: All done, exiting...")
    return 0