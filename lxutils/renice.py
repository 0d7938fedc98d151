"""Alter the scheduling priority of a running process."""

import argparse
import os
import re
import sys

_INT = re.compile(r"[+-]?[0-9]+")
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _parse_i32(text: str) -> int:
    if not _INT.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError(text)
    return value


def renice(pid: int, nice_value: int) -> None:
    """Set the nice value of process ``pid``; raises OSError on failure."""
    if not hasattr(os, "setpriority"):
        return
    os.setpriority(os.PRIO_PROCESS, pid, nice_value)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="renice", description="Alter priority of running processes.")
    parser.add_argument("nice_value", metavar="NICE_VALUE", help="The new nice value for the process")
    parser.add_argument("pid", metavar="PID", help="The PID of the process")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        nice_value = _parse_i32(args.nice_value)
    except ValueError:
        print("Invalid nice value", file=sys.stderr)
        return 1
    try:
        pid = _parse_i32(args.pid)
    except ValueError:
        print("Invalid PID", file=sys.stderr)
        return 1

    try:
        renice(pid, nice_value)
    except (OSError, OverflowError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else exc
        print(f"Failed to set nice value: {reason}", file=sys.stderr)
        return 1

    print(f"Nice value of process {pid} set to {nice_value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())