"""Generate a random magic cookie, optionally seeded from files."""

import argparse
import hashlib
import os
import stat
import sys
from typing import BinaryIO, Iterable, Optional

from lxutils.size import ParseSizeError, parse_size

RANDOM_BYTES = 128
DEFAULT_SEED_READ_BYTES = 1024
_CHUNK = 64 * 1024


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _read_limited(stream: BinaryIO, limit: Optional[int]) -> bytes:
    """Read until EOF, or until ``limit`` bytes have been read."""
    parts = []
    remaining = limit
    while remaining is None or remaining > 0:
        size = _CHUNK if remaining is None else min(_CHUNK, remaining)
        chunk = stream.read(size)
        if not chunk:
            break
        parts.append(chunk)
        if remaining is not None:
            remaining -= len(chunk)
    return b"".join(parts)


def read_seed(path: str, max_size: Optional[int] = None, stdin: Optional[BinaryIO] = None) -> bytes:
    """Read seed data from ``path`` (``-`` meaning standard input)."""
    if path == "-":
        source = stdin if stdin is not None else sys.stdin.buffer
        return _read_limited(source, max_size)
    with open(path, "rb") as handle:
        if max_size is not None:
            return _read_limited(handle, max_size)
        if stat.S_ISCHR(os.fstat(handle.fileno()).st_mode):
            return _read_limited(handle, DEFAULT_SEED_READ_BYTES)
        return _read_limited(handle, None)


def make_cookie(seeds: Iterable[bytes], random_bytes: bytes) -> str:
    """Hash the seeds followed by the random bytes and return the hex digest."""
    hasher = hashlib.md5()
    for seed in seeds:
        hasher.update(seed)
    hasher.update(random_bytes)
    return hasher.hexdigest()


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="mcookie", description="Generate magic cookies for xauth.")
    parser.add_argument("-f", "--file", action="append", default=[], metavar="file",
                        help="use file as a cookie seed")
    parser.add_argument("-m", "--max-size", metavar="num",
                        help="limit how much is read from seed files "
                             "(supports B suffix or binary units: KiB, MiB, GiB, TiB)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="explain what is being done")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    max_size = None
    if args.max_size is not None:
        try:
            max_size = parse_size(args.max_size)
        except ParseSizeError:
            print("mcookie: Failed to parse max-size value", file=sys.stderr)
            return 1

    seeds = []
    for path in args.file:
        name = "stdin" if path == "-" else path
        try:
            data = read_seed(path, max_size)
        except OSError as exc:
            print(f"mcookie: {path}: {exc.strerror or exc}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"Got {len(data)} bytes from {name}", file=sys.stderr)
        seeds.append(data)

    random_data = os.urandom(RANDOM_BYTES)
    if args.verbose:
        print(f"Got {RANDOM_BYTES} bytes from randomness source", file=sys.stderr)

    print(make_cookie(seeds, random_data))
    return 0


if __name__ == "__main__":
    sys.exit(main())