"""Reading and merging memory block information from sysfs."""

import enum
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple, Union

PATH_SYS_MEMORY = "/sys/devices/system/memory"

_NAME_MEMORY = "memory"
_NAME_NODE = "node"
_SUB_BLOCK_SIZE_BYTES = "block_size_bytes"
_SUB_REMOVABLE = "removable"
_SUB_STATE = "state"
_SUB_VALID_ZONES = "valid_zones"

_U64_MAX = 2**64 - 1
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")
_HEX = re.compile(r"\+?[0-9a-fA-F]+")


class Column(enum.Enum):
    """Output columns of the memory listing."""

    RANGE = "RANGE"
    SIZE = "SIZE"
    STATE = "STATE"
    REMOVABLE = "REMOVABLE"
    BLOCK = "BLOCK"
    NODE = "NODE"
    ZONES = "ZONES"

    def __str__(self) -> str:
        return self.value

    @property
    def float_right(self) -> bool:
        """Whether values in this column are right aligned."""
        return self is not Column.RANGE

    @property
    def width_hint(self) -> int:
        """Minimum width of the column."""
        return 5 if self is Column.SIZE else len(self.value)

    @property
    def help(self) -> str:
        """One-line description of the column."""
        return _COLUMN_HELP[self]


_COLUMN_HELP = {
    Column.RANGE: "start and end address of the memory range",
    Column.SIZE: "size of the memory range",
    Column.STATE: "online status of the memory range",
    Column.REMOVABLE: "memory is removable",
    Column.BLOCK: "memory block number or blocks range",
    Column.NODE: "numa node of memory",
    Column.ZONES: "valid zones for the memory range",
}

DEFAULT_COLUMNS = (Column.RANGE, Column.SIZE, Column.STATE, Column.REMOVABLE, Column.BLOCK)
SPLIT_COLUMNS = (Column.STATE, Column.REMOVABLE, Column.NODE, Column.ZONES)


class ZoneId(enum.Enum):
    """Memory zones a block may be onlined to."""

    DMA = "DMA"
    DMA32 = "DMA32"
    NORMAL = "Normal"
    HIGHMEM = "Highmem"
    MOVABLE = "Movable"
    DEVICE = "Device"
    NONE = "None"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


MAX_NR_ZONES = len(ZoneId)

_ZONES_BY_NAME = {zone.value.lower(): zone for zone in ZoneId}


class MemoryState(enum.Enum):
    """Online state of a memory block."""

    ONLINE = "online"
    OFFLINE = "offline"
    GOING_OFFLINE = "going-offline"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


def parse_zone(text: str) -> ZoneId:
    """Parse a zone name case-insensitively; raises ValueError if unknown."""
    try:
        return _ZONES_BY_NAME[text.lower()]
    except KeyError:
        raise ValueError(f"unknown memory zone: {text!r}") from None


def parse_state(text: str) -> MemoryState:
    """Parse an exact memory state name; raises ValueError if unknown."""
    try:
        return MemoryState(text)
    except ValueError:
        raise ValueError(f"unknown memory state: {text!r}") from None


@dataclass
class MemoryBlock:
    """A memory block, or a run of ``count`` consecutive merged blocks."""

    index: int
    count: int = 1
    state: MemoryState = MemoryState.UNKNOWN
    node: int = 0
    zones: Tuple[ZoneId, ...] = ()
    removable: bool = True

    @property
    def last_index(self) -> int:
        return self.index + self.count - 1


@dataclass
class MemoryInfo:
    """Memory blocks read from sysfs, merged into ranges, with totals."""

    block_size: int = 0
    blocks: List[MemoryBlock] = field(default_factory=list)
    mem_online: int = 0
    mem_offline: int = 0
    have_nodes: bool = False
    have_zones: bool = False

    def can_merge(self, block: MemoryBlock, list_all: bool, split_columns: Iterable[Column]) -> bool:
        """Whether ``block`` extends the last range without crossing a split."""
        if not self.blocks:
            return False
        if list_all:
            return False
        split = set(split_columns)
        current = self.blocks[-1]
        if current.index + current.count != block.index:
            return False
        if Column.STATE in split and current.state != block.state:
            return False
        if Column.REMOVABLE in split and current.removable != block.removable:
            return False
        if Column.NODE in split and self.have_nodes and current.node != block.node:
            return False
        if Column.ZONES in split and self.have_zones:
            if len(current.zones) != len(block.zones):
                return False
            for mine, theirs in zip(current.zones, block.zones):
                if mine is ZoneId.UNKNOWN or mine != theirs:
                    return False
        return True


def _read_first_line(path: Path) -> str:
    with open(path, encoding="utf-8", errors="replace") as handle:
        return handle.readline().strip()


def _parse_int(text: str, pattern: "re.Pattern[str]", low: int, high: int) -> int:
    if not pattern.fullmatch(text):
        raise ValueError(f"invalid number: {text!r}")
    value = int(text)
    if not low <= value <= high:
        raise ValueError(f"number out of range: {text!r}")
    return value


def _block_index(path: Path) -> int:
    return _parse_int(path.name[len(_NAME_MEMORY):], _UNSIGNED, 0, _U64_MAX)


def _block_paths(sysmem: Path) -> List[Path]:
    with os.scandir(sysmem) as entries:
        paths = [
            Path(entry.path)
            for entry in entries
            if entry.is_dir() and entry.name.startswith(_NAME_MEMORY)
        ]
    return sorted(paths, key=_block_index)


def _block_node(path: Path) -> int:
    """Return the NUMA node of a block, -1 if none; ValueError if malformed."""
    with os.scandir(path) as entries:
        names = sorted(
            entry.name
            for entry in entries
            if entry.is_dir() and entry.name.startswith(_NAME_NODE)
        )
    if not names:
        return -1
    return _parse_int(names[0][len(_NAME_NODE):], _SIGNED, _I32_MIN, _I32_MAX)


def _is_integer(text: str) -> bool:
    try:
        _parse_int(text, _SIGNED, _I32_MIN, _I32_MAX)
    except ValueError:
        return False
    return True


def _read_block(path: Path, have_nodes: bool, have_zones: bool) -> MemoryBlock:
    block = MemoryBlock(index=_block_index(path))
    block.removable = _is_integer(_read_first_line(path / _SUB_REMOVABLE))
    block.state = parse_state(_read_first_line(path / _SUB_STATE))
    if have_nodes:
        block.node = _block_node(path)
    if have_zones:
        tokens = _read_first_line(path / _SUB_VALID_ZONES).split(" ")
        block.zones = tuple(parse_zone(token) for token in tokens[:MAX_NR_ZONES])
    return block


def read_memory_info(
    sysmem: Union[str, "os.PathLike[str]"] = PATH_SYS_MEMORY,
    list_all: bool = False,
    split_columns: Iterable[Column] = (),
) -> MemoryInfo:
    """Read all memory blocks under ``sysmem`` and merge them into ranges."""
    root = Path(sysmem)
    split = tuple(split_columns)
    block_size_text = _read_first_line(root / _SUB_BLOCK_SIZE_BYTES)
    if not _HEX.fullmatch(block_size_text):
        raise ValueError(f"invalid memory block size: {block_size_text!r}")
    info = MemoryInfo(block_size=int(block_size_text, 16))

    paths = _block_paths(root)
    for path in paths:
        if not info.have_nodes:
            try:
                _block_node(path)
            except ValueError:
                pass
            else:
                info.have_nodes = True
        if not info.have_zones and (path / _SUB_VALID_ZONES).is_file():
            info.have_zones = True
        if info.have_nodes and info.have_zones:
            break

    for path in paths:
        block = _read_block(path, info.have_nodes, info.have_zones)
        if block.state is MemoryState.ONLINE:
            info.mem_online += info.block_size
        else:
            info.mem_offline += info.block_size
        if info.can_merge(block, list_all, split):
            info.blocks[-1].count += 1
        else:
            info.blocks.append(block)
    return info