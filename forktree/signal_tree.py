"""Mirror a tree description as processes synchronised with SIGSTOP and SIGCONT."""

from __future__ import annotations

import os
import signal
import sys

from .fork_example import _flush_streams, _spawn
from .proc_common import (
    WaitStatusError,
    change_pname,
    explain_wait_status,
    show_pstree,
    wait_for_ready_children,
)
from .tree import TreeNode
from .tree_fork import _load_tree

_USAGE = "Usage: forktree-signals <tree_file>"


def _stop_self() -> None:
    _flush_streams()
    os.kill(os.getpid(), signal.SIGSTOP)


def fork_procs(root: TreeNode) -> int:
    """Act as the process for ``root``.

    Children are forked and waited for until all have stopped; then this
    process stops itself. Once continued, it wakes its children one at a
    time, in order, and reaps each before waking the next.
    """
    change_pname(root.name)
    print(f"PID = {os.getpid()}, name = {root.name} is initializing", flush=True)

    pids = [_spawn(fork_procs, child) for child in root.children]
    if pids:
        wait_for_ready_children(len(pids))
    _stop_self()

    print(f"PID = {os.getpid()}, name = {root.name} is awake", flush=True)
    for pid in pids:
        os.kill(pid, signal.SIGCONT)
        explain_wait_status(*os.waitpid(pid, 0))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(_USAGE, file=sys.stderr)
        return 1

    root = _load_tree(args[0])
    if root is None:
        return 1

    try:
        pid = _spawn(fork_procs, root)
    except OSError as exc:
        print(f"main: fork: {exc.strerror}", file=sys.stderr)
        return 1

    try:
        wait_for_ready_children(1)
    except WaitStatusError as exc:
        print(exc, file=sys.stderr)
        return 1

    show_pstree(pid)
    os.kill(pid, signal.SIGCONT)

    explain_wait_status(*os.waitpid(pid, 0))
    return 0