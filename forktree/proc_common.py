"""Process helpers: wait-status reporting, process naming and shared memory."""

from __future__ import annotations

import mmap
import os
import subprocess
import sys
import time

_COMM_PATH = "/proc/self/comm"
_COMM_MAX = 15
_PSTREE_COMMAND = "echo; echo; pstree -G -c -p {pid}; echo; echo"


class WaitStatusError(RuntimeError):
    """Raised for a wait status that cannot be explained or is not expected."""


def wait_forever() -> None:
    """Sleep in long intervals and never return."""
    while True:
        time.sleep(100)


def compute(count: int) -> int:
    """Burn CPU time proportional to ``count``; return the iterations done."""
    junk = 0
    for _ in range(count * 1_000_000):
        junk += 1
    return junk


def change_pname(name: str) -> None:
    """Set the name of the calling process as shown by ps or pstree."""
    encoded = name.encode("utf-8")[:_COMM_MAX]
    with open(_COMM_PATH, "wb") as comm:
        comm.write(encoded)


def describe_wait_status(pid: int, status: int) -> str:
    """Return a one-line diagnostic for a status returned by wait()."""
    me = os.getpid()
    if os.WIFEXITED(status):
        return (
            f"My PID = {me}: Child PID = {pid} terminated normally, "
            f"exit status = {os.WEXITSTATUS(status)}"
        )
    if os.WIFSIGNALED(status):
        return (
            f"My PID = {me}: Child PID = {pid} was terminated by a signal, "
            f"signo = {os.WTERMSIG(status)}"
        )
    if os.WIFSTOPPED(status):
        return (
            f"My PID = {me}: Child PID = {pid} has been stopped by a signal, "
            f"signo = {os.WSTOPSIG(status)}"
        )
    raise WaitStatusError(
        f"explain_wait_status: Internal error: Unhandled case, "
        f"PID = {pid}, status = {status}"
    )


def explain_wait_status(pid: int, status: int) -> None:
    """Write the diagnostic for ``status`` to standard error."""
    sys.stderr.write(describe_wait_status(pid, status) + "\n")
    sys.stderr.flush()


def wait_for_ready_children(count: int) -> list[int]:
    """Wait until ``count`` children have stopped; return their PIDs.

    Does not work for children that wait for SIGCONT with pause().
    """
    stopped = []
    for _ in range(count):
        pid, status = os.waitpid(-1, os.WUNTRACED)
        explain_wait_status(pid, status)
        if not os.WIFSTOPPED(status):
            raise WaitStatusError(
                f"Parent: Child with PID {pid} has died unexpectedly!"
            )
        stopped.append(pid)
    return stopped


def show_pstree(pid: int) -> int:
    """Print the process tree rooted at ``pid``; return the shell's exit code."""
    command = _PSTREE_COMMAND.format(pid=pid)
    result = subprocess.run(command, shell=True, executable="/bin/sh")
    return result.returncode


def create_shared_memory_area(numbytes: int) -> mmap.mmap:
    """Create an anonymous mapping shared with all descendants of this process."""
    if numbytes <= 0:
        raise ValueError(
            "create_shared_memory_area: internal error: called for numbytes == 0"
        )
    page = mmap.PAGESIZE
    pages = (numbytes - 1) // page + 1
    return mmap.mmap(
        -1,
        pages * page,
        flags=mmap.MAP_SHARED | mmap.MAP_ANONYMOUS,
        prot=mmap.PROT_READ | mmap.PROT_WRITE,
    )