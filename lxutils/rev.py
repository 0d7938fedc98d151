"""Reverse the bytes of each line of files or standard input."""

import argparse
import sys
from typing import BinaryIO, Iterator, Tuple

_CHUNK = 64 * 1024


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _records(stream: BinaryIO, sep: bytes) -> Iterator[Tuple[bytes, bool]]:
    """Yield (record, terminated) pairs split on ``sep``."""
    pending = b""
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            break
        parts = (pending + chunk).split(sep)
        pending = parts.pop()
        for part in parts:
            yield part, True
    yield pending, False


def reverse_stream(stream: BinaryIO, out: BinaryIO, sep: bytes = b"\n") -> None:
    """Write each ``sep``-terminated record of ``stream`` to ``out`` reversed."""
    for record, terminated in _records(stream, sep):
        out.write(record[::-1] + (sep if terminated else b""))


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="rev", description="Reverse lines characterwise.")
    parser.add_argument("files", nargs="*", metavar="FILE", help="Paths of files to reverse")
    parser.add_argument("-0", "--zero", action="store_true",
                        help="Zero termination. Use the byte '\\0' as line separator.")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    sep = b"\0" if args.zero else b"\n"
    out = sys.stdout.buffer
    status = 0

    if not args.files:
        try:
            reverse_stream(sys.stdin.buffer, out, sep)
        except OSError:
            pass
        out.flush()
        return status

    for path in args.files:
        try:
            handle = open(path, "rb")
        except IsADirectoryError:
            status = 1
            print(f"rev: cannot read {path}: Is a directory", file=sys.stderr)
            continue
        except OSError:
            status = 1
            print(f"rev: cannot open {path}: No such file or directory", file=sys.stderr)
            continue
        with handle:
            try:
                reverse_stream(handle, out, sep)
            except OSError as exc:
                status = 1
                print(f"rev: cannot read {path}: {exc.strerror or exc}", file=sys.stderr)
        out.flush()
    return status


if __name__ == "__main__":
    sys.exit(main())