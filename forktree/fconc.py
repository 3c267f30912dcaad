"""Concatenate two input files into an output file."""

from __future__ import annotations

import os
import shutil
import sys
from typing import Iterable

DEFAULT_OUTPUT = "fconc.out"
_OUTPUT_FLAGS = os.O_CREAT | os.O_WRONLY | os.O_TRUNC
_OUTPUT_MODE = 0o600
_CHUNK_SIZE = 1024
_USAGE = "Usage: fconc infile1 infile2 [outfile (default:fconc.out)]."


def concatenate(outfile: str, infiles: Iterable[str]) -> int:
    """Write the contents of ``infiles`` one after another into ``outfile``.

    The output is created (owner read/write only) or truncated before any
    input is opened. Returns the number of bytes written.
    """
    fd = os.open(outfile, _OUTPUT_FLAGS, _OUTPUT_MODE)
    written = 0
    with open(fd, "wb") as out:
        for infile in infiles:
            with open(infile, "rb") as source:
                shutil.copyfileobj(source, out, _CHUNK_SIZE)
                written += source.tell()
    return written


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not 2 <= len(args) <= 3:
        print(_USAGE)
        return 1

    outfile = args[2] if len(args) == 3 else DEFAULT_OUTPUT
    try:
        concatenate(outfile, args[:2])
    except OSError as exc:
        print(f"fconc: {exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())