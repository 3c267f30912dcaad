"""Tree description files: parsing, formatting and a small viewer command."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import Iterable, Iterator

NODE_NAME_SIZE = 16
BUFF_SIZE = 1024

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TreeParseError(ValueError):
    """Raised when a tree description is malformed."""


@dataclass
class TreeNode:
    """A named node with an ordered list of children."""

    name: str
    children: list[TreeNode] = field(default_factory=list)

    @property
    def nr_children(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[TreeNode]:
        """Yield this node and its descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child


def _truncate(name: str) -> str:
    return name[: NODE_NAME_SIZE - 1]


def _child_count(text: str) -> int:
    match = _LEADING_INT.match(text)
    count = int(match.group(1)) if match else 0
    if count < 0:
        raise TreeParseError("allocate children failed")
    return count


class _LineReader:
    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)

    def read_line(self) -> str | None:
        raw = next(self._lines, None)
        if raw is None:
            return None
        content = raw[:-1] if raw.endswith("\n") else raw
        if len(content) >= BUFF_SIZE - 2:
            raise TreeParseError(f"line too long: {content}")
        return content

    def read_empty_line(self) -> None:
        line = self.read_line()
        if line:
            raise TreeParseError(f"expecting an empty line: {line}")

    def read_non_empty_line(self) -> str:
        line = self.read_line()
        if line is None:
            raise TreeParseError("unexpected EOF")
        if not line:
            raise TreeParseError("Unexpected empty line")
        return line

    def find_block_start(self) -> str | None:
        while True:
            line = self.read_line()
            if line is None or (line and not line.startswith("#")):
                return line


def _parse_node(reader: _LineReader, node: TreeNode | None) -> TreeNode | None:
    name = reader.find_block_start()
    if name is None:
        if node is None:
            return None
        raise TreeParseError(f"expecting: {node.name} and got EOF")

    if node is None:
        node = TreeNode(_truncate(name))
    elif node.name != name[:NODE_NAME_SIZE]:
        raise TreeParseError(
            "nodes must be placed in a DFS order\n"
            f"expecting: {node.name} and got: {name}"
        )

    count = _child_count(reader.read_non_empty_line())
    node.children = [
        TreeNode(_truncate(reader.read_non_empty_line())) for _ in range(count)
    ]
    reader.read_empty_line()

    for child in node.children:
        _parse_node(reader, child)
    return node


def parse_tree(lines: Iterable[str]) -> TreeNode | None:
    """Parse a tree description; return its root, or None for empty input."""
    return _parse_node(_LineReader(lines), None)


def get_tree_from_file(filename: str) -> TreeNode | None:
    """Read and parse the tree description stored in ``filename``."""
    with open(filename, encoding="utf-8") as handle:
        return parse_tree(handle)


def format_tree(root: TreeNode | None) -> str:
    """Render a tree with one tab of indentation per level."""
    if root is None:
        return ""

    def render(node: TreeNode, level: int) -> Iterator[str]:
        yield "\t" * level + node.name + "\n"
        for child in node.children:
            yield from render(child, level + 1)

    return "".join(render(root, 0))


def print_tree(root: TreeNode | None) -> None:
    """Print a tree to standard output."""
    sys.stdout.write(format_tree(root))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: forktree-tree <input_tree_file>\n", file=sys.stderr)
        return 1

    filename = args[0]
    try:
        root = get_tree_from_file(filename)
    except OSError as exc:
        print(f"{filename}: {exc.strerror}", file=sys.stderr)
        return 1
    except TreeParseError as exc:
        print(exc, file=sys.stderr)
        return 1

    print_tree(root)
    return 0


if __name__ == "__main__":
    sys.exit(main())