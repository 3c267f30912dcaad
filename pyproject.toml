[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "forktree"
version = "0.1.0"
description = "Process trees, signals and pipes on POSIX: build process hierarchies from tree files and watch them run"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "fork",
    "process",
    "process-tree",
    "signals",
    "pipes",
    "pstree",
    "operating-systems",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
forktree-print-tree = "forktree.tree:main"
forktree-zing = "forktree.zing:main"
forktree-fconc = "forktree.fconc:main"
forktree-fork-example = "forktree.fork_example:main"
forktree-pipe-example = "forktree.pipe_example:main"
forktree-tree-fork = "forktree.tree_fork:main"
forktree-signal-tree = "forktree.signal_tree:main"
forktree-expr-tree = "forktree.expr_tree:main"

[tool.hatch.build.targets.wheel]
packages = ["forktree"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
