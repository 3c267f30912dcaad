"""Mirror a tree description as a tree of sleeping processes."""

from __future__ import annotations

import os
import sys
import time

from .fork_example import _spawn
from .proc_common import change_pname, explain_wait_status, show_pstree
from .tree import TreeNode, TreeParseError, get_tree_from_file

SLEEP_PROC_SEC = 5
SLEEP_TREE_SEC = 3
_USAGE = "Usage: forktree-fork <input_tree_file>\n"


def fork_procs(root: TreeNode) -> int:
    """Act as the process for ``root``: fork one process per child and reap them.

    Leaves sleep for a while. Returns the exit status of the process.
    """
    change_pname(root.name)
    print(f"{root.name} is initializing with PID: {os.getpid()}  ", flush=True)

    if not root.children:
        time.sleep(SLEEP_PROC_SEC)
        return 0

    for child in root.children:
        _spawn(fork_procs, child)
    for _ in root.children:
        explain_wait_status(*os.wait())
    return 0


def _load_tree(filename: str) -> TreeNode | None:
    """Read a tree file, reporting any problem on stderr and returning None."""
    try:
        root = get_tree_from_file(filename)
    except OSError as exc:
        print(f"{filename}: {exc.strerror}", file=sys.stderr)
        return None
    except TreeParseError as exc:
        print(exc, file=sys.stderr)
        return None
    if root is None:
        print(f"{filename}: the tree is empty", file=sys.stderr)
    return root


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
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

    time.sleep(SLEEP_TREE_SEC)
    show_pstree(pid)

    explain_wait_status(*os.waitpid(pid, 0))
    return 0