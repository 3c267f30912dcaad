"""Process trees, signals and pipes: build and observe POSIX process hierarchies."""

__version__ = "0.1.0"
__all__ = [
    "tree",
    "zing",
    "proc_common",
    "fconc",
    "fork_example",
    "pipe_example",
    "tree_fork",
    "signal_tree",
    "expr_tree",
]