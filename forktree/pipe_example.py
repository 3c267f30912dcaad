"""Send a floating-point value to a child process through a pipe."""

from __future__ import annotations

import os
import struct
import sys

from .fork_example import _spawn
from .proc_common import compute, explain_wait_status

VALUE = 1234.567
COMPUTE_COUNT = 1000
CHILD_EXIT_STATUS = 7
_DOUBLE = struct.Struct("d")


def child(fd: int) -> int:
    """Receive one double from ``fd``, do some work and return the exit status.

    Raises EOFError if a whole value cannot be read.
    """
    print(f"Child: My PID is {os.getpid()}. Receiving a double value from the parent.")
    data = os.read(fd, _DOUBLE.size)
    if len(data) != _DOUBLE.size:
        raise EOFError("child: read from pipe")
    (value,) = _DOUBLE.unpack(data)
    print(f"Child: received value {value:f} from the pipe. Will now compute.")
    compute(COMPUTE_COUNT)
    return CHILD_EXIT_STATUS


def main(argv: list[str] | None = None) -> int:
    print("Parent: Creating pipe...")
    read_fd, write_fd = os.pipe()
    try:
        print("Parent: Creating child...")
        try:
            pid = _spawn(child, read_fd)
        except OSError as exc:
            print(f"fork: {exc.strerror}", file=sys.stderr)
            return 1

        payload = _DOUBLE.pack(VALUE)
        if os.write(write_fd, payload) != len(payload):
            print("parent: write to pipe: short write", file=sys.stderr)
            return 1

        print(f"Parent: Created child with PID = {pid}, waiting for it to terminate...")
        explain_wait_status(*os.waitpid(pid, 0))
    finally:
        os.close(read_fd)
        os.close(write_fd)

    print("Parent: All done, exiting...")
    return 0