"""Report whether a path is a mount point."""

import argparse
import os
import sys


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def is_mountpoint(path: str) -> bool:
    """Return True if ``path`` is a filesystem root or on another device than ``..``."""
    if os.name == "nt":
        return False
    try:
        info = os.stat(path)
    except OSError:
        return False
    # Root inode (typically 2 on most Unix filesystems) marks a mount point.
    if info.st_ino == 2:
        return True
    try:
        parent = os.stat("..")
    except OSError:
        return False
    return parent.st_dev != info.st_dev


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="mountpoint", description="See if a directory or file is a mountpoint.")
    parser.add_argument("path", metavar="PATH", help="Path to check for mountpoint")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    if is_mountpoint(args.path):
        print(f"{args.path} is a mountpoint")
    else:
        print(f"{args.path} is not a mountpoint")
    return 0


if __name__ == "__main__":
    sys.exit(main())