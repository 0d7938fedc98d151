"""List the ranges of available memory with their online status."""

import argparse
import enum
import json
import os
import sys
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from lxutils.humansize import size_to_human_string
from lxutils.memblocks import (
    DEFAULT_COLUMNS,
    PATH_SYS_MEMORY,
    SPLIT_COLUMNS,
    Column,
    MemoryInfo,
    MemoryState,
    ZoneId,
    read_memory_info,
)


class Summary(enum.Enum):
    """When to print the memory summary."""

    NEVER = "never"
    ALWAYS = "always"
    ONLY = "only"


@dataclass
class TableRow:
    """Formatted values of one memory range."""

    range: str
    size: str
    state: str
    removable: str
    block: str
    node: str = ""
    zones: str = ""

    def value(self, column: Column) -> str:
        """Return the formatted value for ``column``."""
        return getattr(self, column.name.lower())


def create_table_rows(info: MemoryInfo, in_bytes: bool = False) -> List[TableRow]:
    """Turn the merged memory blocks into formatted rows."""
    rows = []
    for block in info.blocks:
        start = block.index * info.block_size
        size = block.count * info.block_size
        rows.append(
            TableRow(
                range=f"0x{start:016x}-0x{start + size - 1:016x}",
                size=str(size) if in_bytes else size_to_human_string(size),
                state="?" if block.state is MemoryState.UNKNOWN else str(block.state),
                removable="yes" if block.removable else "no",
                block=str(block.index) if block.count == 1 else f"{block.index}-{block.last_index}",
                node=str(block.node) if info.have_nodes else "",
                zones="/".join(str(zone) for zone in block.zones if zone is not ZoneId.UNKNOWN)
                if info.have_zones
                else "",
            )
        )
    return rows


def _lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def _align(text: str, column: Column, width: int) -> str:
    return text.rjust(width) if column.float_right else text.ljust(width)


def format_table(rows: Sequence[TableRow], columns: Sequence[Column], noheadings: bool = False) -> str:
    """Render rows as an aligned table."""
    widths = [
        max([column.width_hint] + [len(row.value(column)) for row in rows])
        for column in columns
    ]
    lines = []
    if not noheadings:
        lines.append(" ".join(_align(c.value, c, w) for c, w in zip(columns, widths)))
    for row in rows:
        lines.append(" ".join(_align(row.value(c), c, w) for c, w in zip(columns, widths)))
    return _lines(lines)


def format_json(rows: Sequence[TableRow], columns: Sequence[Column], in_bytes: bool = False) -> str:
    """Render rows as the JSON document lsmem prints."""
    records = []
    for row in rows:
        record = {}
        for column in columns:
            value = row.value(column)
            record[column.value.lower()] = (
                int(value) if column is Column.SIZE and in_bytes else value
            )
        records.append(record)
    text = json.dumps({"memory": records}, indent=2)
    text = text.replace("  ", "   ").replace("},\n      {", "},{")
    text = text.replace('"yes"', "true").replace('"no"', "false")
    return text + "\n"


def format_pairs(rows: Sequence[TableRow], columns: Sequence[Column]) -> str:
    """Render rows as KEY="value" pairs."""
    return _lines(
        " ".join(f'{column.value}="{row.value(column)}"' for column in columns)
        for row in rows
    )


def format_raw(rows: Sequence[TableRow], columns: Sequence[Column], noheadings: bool = False) -> str:
    """Render rows as space separated values."""
    lines = []
    if not noheadings:
        lines.append(" ".join(column.value for column in columns))
    lines.extend(" ".join(row.value(column) for column in columns) for row in rows)
    return _lines(lines)


def format_summary(info: MemoryInfo, in_bytes: bool = False) -> str:
    """Render the block size and online/offline totals."""
    values = (
        ("Memory block size:", info.block_size),
        ("Total online memory:", info.mem_online),
        ("Total offline memory:", info.mem_offline),
    )
    if in_bytes:
        return _lines(f"{label:<23} {value:>15}" for label, value in values)
    return _lines(f"{label:<23} {size_to_human_string(value):>5}" for label, value in values)


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _column_list(text: str) -> List[Column]:
    try:
        return [Column(token.upper()) for token in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid column list: {text!r}") from None


def _split_list(text: str) -> List[Column]:
    columns = []
    for token in text.split(","):
        try:
            column = Column(token.upper())
        except ValueError:
            column = None
        if column not in SPLIT_COLUMNS:
            raise argparse.ArgumentTypeError(f"invalid split column: {token!r}")
        columns.append(column)
    return columns


def _summary(text: str) -> Summary:
    try:
        return Summary(text.lower())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid value for --summary: {text!r}") from None


def _build_parser() -> argparse.ArgumentParser:
    epilog = "Available output columns:\n" + "\n".join(
        f"{column.value:>11}  {column.help}" for column in Column
    )
    parser = _Parser(
        prog="lsmem",
        description="List the ranges of available memory with their online status.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    formats = parser.add_mutually_exclusive_group()
    formats.add_argument("-J", "--json", action="store_true", help="use JSON output format")
    formats.add_argument("-P", "--pairs", action="store_true",
                         help='use key="value" output format')
    formats.add_argument("-r", "--raw", action="store_true", help="use raw output format")
    formats.add_argument("--summary", nargs="?", const=Summary.ONLY, type=_summary,
                         metavar="when", help="print summary information")
    splitting = parser.add_mutually_exclusive_group()
    splitting.add_argument("-a", "--all", action="store_true",
                           help="list each individual memory block")
    splitting.add_argument("-S", "--split", type=_split_list, metavar="list",
                           help="split ranges by specified columns")
    parser.add_argument("-b", "--bytes", action="store_true",
                        help="print SIZE in bytes rather than in human readable format")
    parser.add_argument("-n", "--noheadings", action="store_true", help="don't print headings")
    parser.add_argument("-o", "--output", type=_column_list, metavar="list",
                        help="output columns")
    parser.add_argument("--output-all", action="store_true", help="output all columns")
    parser.add_argument("-s", "--sysroot", metavar="dir",
                        help="use the specified directory as system root")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    if args.output:
        columns = list(args.output)
    elif args.output_all:
        columns = list(Column)
    else:
        columns = list(DEFAULT_COLUMNS)

    # Without an explicit split list, ranges are split on the displayed columns.
    split_columns = args.split if args.split else columns

    want_table = True
    want_summary = not (args.json or args.pairs or args.raw)
    if args.summary is Summary.NEVER:
        want_summary = False
    elif args.summary is Summary.ONLY:
        want_table = False

    sysmem = PATH_SYS_MEMORY
    if args.sysroot is not None:
        sysmem = args.sysroot.rstrip(os.sep) + os.sep + PATH_SYS_MEMORY.lstrip(os.sep)

    try:
        info = read_memory_info(sysmem, args.all, split_columns)
    except (OSError, ValueError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else exc
        print(f"lsmem: failed to read memory information: {reason}", file=sys.stderr)
        return 1

    out = []
    if want_table:
        rows = create_table_rows(info, args.bytes)
        if args.json:
            out.append(format_json(rows, columns, args.bytes))
        elif args.pairs:
            out.append(format_pairs(rows, columns))
        elif args.raw:
            out.append(format_raw(rows, columns, args.noheadings))
        else:
            out.append(format_table(rows, columns, args.noheadings))
    if want_table and want_summary:
        out.append("\n")
    if want_summary:
        out.append(format_summary(info, args.bytes))
    sys.stdout.write("".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(main())