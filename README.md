# forktree

Small command-line tools for exploring POSIX processes: creating children
with `fork`, waiting for them, naming them, stopping and resuming them with
signals, and passing values between them through pipes. Most tools build a
process hierarchy from a tree description file and show it with `pstree`.

The tools run on Linux. Process renaming writes to `/proc/self/comm`, and
the tree snapshots need the `pstree` program on the `PATH`.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Tree files

A tree file describes a tree in depth-first order, one block per node. A
block is the node's name, the number of its children, the children's names
one per line, and then an empty line. Empty lines and lines starting with `#`
before a block are skipped. The children's own blocks follow in the order
they were listed.

```
# A has children B, C, D; B has children E, F
A
3
B
C
D

B
2
E
F

E
0

F
0

C
0

D
0
```

Names are cut to 15 characters, the limit for a process name. A block whose
name does not match the expected child is an error, as is a missing block.
An empty file gives no tree at all.

## Commands

| Command | What it does |
| --- | --- |
| `forktree-print-tree FILE` | Parse a tree file and print it, one node per line, indented with tabs by depth. |
| `forktree-zing` | Greet the logged-in user. |
| `forktree-fconc IN1 IN2 [OUT]` | Concatenate two files into `OUT` (default `fconc.out`, created with owner read/write permissions). |
| `forktree-fork-example` | Fork one child, wait for it and report how it ended. |
| `forktree-pipe-example` | Send a number to a child through a pipe. |
| `forktree-tree-fork FILE` | Build the process tree from a tree file, snapshot it with `pstree` after a few seconds, wait for it. |
| `forktree-signal-tree FILE` | Build the tree; each process stops itself once its children are stopped, the snapshot is taken on a frozen tree, then processes are woken depth-first. |
| `forktree-expr-tree FILE` | Evaluate an expression tree with one process per node, the values travelling up through pipes. |

Every parent reports each child that ends or stops on standard error, for
example:

```
My PID = 4321: Child PID = 4322 terminated normally, exit status = 0
```

### Expression trees

For `forktree-expr-tree`, each inner node is `+` or `*` and uses its first
two children as operands. Each leaf is an integer. Arithmetic wraps like a
32-bit signed integer.

```
+
2
10
*

10
0

*
2
3
4

3
0

4
0
```

```
$ forktree-expr-tree expr.tree
...
The final value of the expression tree is: 22.
```

## Using it as a library

```python
from forktree.tree import get_tree_from_file, format_tree
from forktree.expr_tree import evaluate_tree

root = get_tree_from_file("expr.tree")
print(format_tree(root))
print(evaluate_tree(root))
```

`forktree.tree.parse_tree` takes an iterable of lines rather than a file
name and raises `TreeParseError` on malformed input. `TreeNode` iterates
over itself and its descendants in depth-first order.

`forktree.proc_common` holds the shared process helpers:
`describe_wait_status` and `explain_wait_status` for wait statuses,
`wait_for_ready_children`, `change_pname`, `show_pstree`, `compute`,
`wait_forever` and `create_shared_memory_area`. Unexpected statuses raise
`WaitStatusError`.

## What it does not do

There is no command that builds a hard-coded process tree; every tree-shaped
hierarchy comes from a tree file given to `forktree-tree-fork`,
`forktree-signal-tree` or `forktree-expr-tree`.