"""Evaluate an arithmetic expression tree with one process per node."""

from __future__ import annotations

import os
import re
import struct
import sys

from .fork_example import _spawn
from .proc_common import change_pname
from .tree import TreeNode
from .tree_fork import _load_tree

_INT = struct.Struct("i")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_USAGE = "Usage: forktree-expr <input_tree_file>"


def _wrap(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return _wrap(int(match.group(1))) if match else 0


def _combine(operator: str, left: int, right: int) -> int:
    if operator == "+":
        return _wrap(left + right)
    if operator == "*":
        return _wrap(left * right)
    raise ValueError(f"unknown operator: {operator}")


def _operands(root: TreeNode) -> list[TreeNode]:
    if len(root.children) < 2:
        raise ValueError(f"operator {root.name} needs two operands")
    return root.children[:2]


def evaluate_tree(root: TreeNode) -> int:
    """Compute the value of an expression tree in this process.

    Leaves are integers; inner nodes are ``+`` or ``*`` over their first two
    children. Arithmetic wraps like a 32-bit signed integer.
    """
    if not root.children:
        return _atoi(root.name)
    left, right = (evaluate_tree(child) for child in _operands(root))
    return _combine(root.name, left, right)


def _read_int(fd: int) -> int:
    data = os.read(fd, _INT.size)
    if len(data) != _INT.size:
        raise EOFError("read from pipe: unexpected end of data")
    return _INT.unpack(data)[0]


def _write_int(fd: int, value: int) -> None:
    payload = _INT.pack(value)
    if os.write(fd, payload) != len(payload):
        raise OSError("write to pipe: short write")


def fork_procs(root: TreeNode, father: tuple[int, int]) -> int:
    """Act as the process for ``root`` and send its value up the ``father`` pipe.

    ``father`` is the (read end, write end) pair shared with the parent.
    Returns the exit status of the process.
    """
    change_pname(root.name)
    print(f"Process (name: {root.name}) with PID: {os.getpid()} is created.", flush=True)
    father_read, father_write = father

    if root.children:
        operands = _operands(root)
        child_read, child_write = os.pipe()
        for child in operands:
            _spawn(fork_procs, child, (child_read, child_write))
        os.close(child_write)
        values = [_read_int(child_read) for _ in operands]
        os.close(child_read)
        value = _combine(root.name, *values)
    else:
        os.close(father_read)
        value = _atoi(root.name)

    _write_int(father_write, value)
    os.close(father_write)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(_USAGE, file=sys.stderr)
        return 1

    root = _load_tree(args[0])
    if root is None:
        return 1

    read_fd, write_fd = os.pipe()
    try:
        pid = _spawn(fork_procs, root, (read_fd, write_fd))
    except OSError as exc:
        os.close(read_fd)
        os.close(write_fd)
        print(f"main: fork: {exc.strerror}", file=sys.stderr)
        return 1

    os.close(write_fd)
    try:
        answer = _read_int(read_fd)
    except EOFError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        os.close(read_fd)
        os.waitpid(pid, 0)

    print(f"The final value of the expression tree is: {answer}.")
    return 0