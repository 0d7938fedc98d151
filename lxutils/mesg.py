"""Control write access of other users to your terminal."""

import argparse
import os
import stat
import sys
from typing import Iterable, Optional

_GROUP_WRITE = 0o020
_GROUP_OTHER_WRITE = 0o022


class NotATerminalError(OSError):
    """Raised when none of the inspected descriptors is a terminal."""

    def __init__(self) -> None:
        super().__init__("stdin/stdout/stderr is not a terminal")


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def do_mesg(enable: Optional[str] = None, verbose: bool = False,
            fds: Iterable[int] = (0, 1, 2)) -> int:
    """Query or change message permission on the first terminal among ``fds``.

    Returns the exit status: 0 when messages are allowed, 1 when denied.
    Raises NotATerminalError if no descriptor is a terminal.
    """
    if enable not in (None, "y", "n"):
        raise ValueError(f"invalid argument: {enable!r}")

    for fd in fds:
        if not os.isatty(fd):
            continue
        mode = stat.S_IMODE(os.fstat(fd).st_mode)
        if enable is None:
            if mode & _GROUP_OTHER_WRITE:
                print("is y")
                return 0
            print("is n")
            return 1

        # Allowing only sets the group write bit; denying clears group and other.
        if enable == "y":
            new_mode = mode | _GROUP_WRITE
        else:
            new_mode = mode & ~_GROUP_OTHER_WRITE
        os.fchmod(fd, new_mode)
        if verbose:
            verdict = "allowed" if enable == "y" else "denied"
            print(f"write access to your terminal is {verdict}")
        return 1 if enable == "n" else 0

    raise NotATerminalError()


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="mesg", description="Control write access to your terminal.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Explain what is being done")
    parser.add_argument("enable", nargs="?", choices=("y", "n"),
                        help="Whether to allow or disallow messages")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    if os.name != "posix":
        print("mesg: `mesg` is available only on Unix platforms.", file=sys.stderr)
        return 1
    try:
        return do_mesg(args.enable, args.verbose)
    except NotATerminalError as exc:
        print(f"mesg: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"mesg: {exc.strerror or exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())