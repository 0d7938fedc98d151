from pathlib import Path

import pytest

from lxutils.lsmem import (
    Summary,
    TableRow,
    create_table_rows,
    format_json,
    format_pairs,
    format_raw,
    format_summary,
    format_table,
    main,
)
from lxutils.memblocks import (
    DEFAULT_COLUMNS,
    Column,
    MemoryBlock,
    MemoryInfo,
    MemoryState,
    read_memory_info,
)

MEMORY_BLOCK_IDS = [0, 1, 2, 3, 4, 5, 6] + list(range(32, 150))

RANGE_LOW = "0x0000000000000000-0x0000000037ffffff"
RANGE_HIGH = "0x0000000100000000-0x00000004afffffff"


def _write(directory: Path, name: str, content: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(content)


@pytest.fixture
def sysroot(tmp_path):
    sysmem = tmp_path / "sys" / "devices" / "system" / "memory"
    _write(sysmem, "block_size_bytes", "8000000\n")
    for i in MEMORY_BLOCK_IDS:
        block_dir = sysmem / f"memory{i}"
        _write(block_dir, "removable", "1\n")
        _write(block_dir, "state", "online\n")
        if i == 0:
            zone = "none\n"
        elif i <= 6:
            zone = "DMA32\n"
        else:
            zone = "Normal\n"
        _write(block_dir, "valid_zones", zone)
        _write(block_dir / "node0", ".gitkeep", "")
    return tmp_path


def _sysmem(root: Path) -> Path:
    return root / "sys" / "devices" / "system" / "memory"


def _run(capsys, root, *args):
    code = main(["-s", str(root), *args])
    captured = capsys.readouterr()
    assert captured.err == ""
    return code, captured.out


def test_invalid_arg():
    with pytest.raises(SystemExit) as exc:
        main(["--definitely-invalid"])
    assert exc.value.code == 1


@pytest.mark.parametrize("fmt", ["-J", "-P", "-r"])
def test_summary_conflicts(fmt):
    with pytest.raises(SystemExit) as exc:
        main(["--summary", fmt])
    assert exc.value.code == 1


def test_all_conflicts_with_split():
    with pytest.raises(SystemExit) as exc:
        main(["-a", "-S", "node"])
    assert exc.value.code == 1


def test_table_default(capsys, sysroot):
    code, out = _run(capsys, sysroot)
    assert code == 0
    assert out == (
        "RANGE" + " " * 34 + "SIZE  STATE REMOVABLE  BLOCK\n"
        f"{RANGE_LOW}  896M online       yes    0-6\n"
        f"{RANGE_HIGH} 14.8G online       yes 32-149\n"
        "\n"
        "Memory block size:       128M\n"
        "Total online memory:    15.6G\n"
        "Total offline memory:      0B\n"
    )


def test_table_noheadings(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-n")
    lines = out.splitlines()
    assert lines[0] == f"{RANGE_LOW}  896M online       yes    0-6"
    assert lines[2] == ""


def test_columns_table(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-o", "block,size", "--summary=never")
    assert out == " BLOCK  SIZE\n   0-6  896M\n32-149 14.8G\n"


def test_columns_pairs(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-o", "block,size", "-P")
    assert out == 'BLOCK="0-6" SIZE="896M"\nBLOCK="32-149" SIZE="14.8G"\n'


def test_columns_raw(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-o", "block,size", "-r")
    assert out == "BLOCK SIZE\n0-6 896M\n32-149 14.8G\n"


def test_columns_json(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-o", "block,size", "-J")
    assert out == (
        "{\n"
        '   "memory": [\n'
        "      {\n"
        '         "block": "0-6",\n'
        '         "size": "896M"\n'
        "      },{\n"
        '         "block": "32-149",\n'
        '         "size": "14.8G"\n'
        "      }\n"
        "   ]\n"
        "}\n"
    )


def test_json_removable_is_boolean(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-J")
    assert '"removable": true' in out
    assert '"yes"' not in out
    assert "Memory block size" not in out


def test_json_bytes(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-J", "-b", "-o", "size")
    assert '"size": 939524096' in out


def test_pairs(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-P")
    assert out.splitlines()[0] == (
        f'RANGE="{RANGE_LOW}" SIZE="896M" STATE="online" REMOVABLE="yes" BLOCK="0-6"'
    )
    assert len(out.splitlines()) == 2


def test_pairs_all(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-P", "-a")
    lines = out.splitlines()
    assert len(lines) == 125
    assert lines[0] == (
        'RANGE="0x0000000000000000-0x0000000007ffffff" SIZE="128M" '
        'STATE="online" REMOVABLE="yes" BLOCK="0"'
    )
    assert lines[-1].endswith('BLOCK="149"')


def test_raw_bytes(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-r", "-b")
    assert out.splitlines()[1] == f"{RANGE_LOW} 939524096 online yes 0-6"


def test_split_zones(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-P", "-S", "zones", "-o", "block,zones")
    assert out == (
        'BLOCK="0" ZONES="None"\n'
        'BLOCK="1-6" ZONES="DMA32"\n'
        'BLOCK="32-149" ZONES="Normal"\n'
    )


def test_split_node(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-P", "-S", "node", "-o", "block,node")
    assert out == 'BLOCK="0-6" NODE="0"\nBLOCK="32-149" NODE="0"\n'


def test_split_output_default(capsys, sysroot):
    _, out = _run(capsys, sysroot, "-P", "-o", "block,size,zones,node")
    assert len(out.splitlines()) == 3


def test_summary_only(capsys, sysroot):
    _, out = _run(capsys, sysroot, "--summary=only")
    assert out == (
        "Memory block size:       128M\n"
        "Total online memory:    15.6G\n"
        "Total offline memory:      0B\n"
    )


def test_summary_empty_means_only(capsys, sysroot):
    _, out = _run(capsys, sysroot, "--summary")
    assert out.startswith("Memory block size:")
    assert "RANGE" not in out


def test_summary_never(capsys, sysroot):
    _, out = _run(capsys, sysroot, "--summary=never")
    assert "Memory block size" not in out
    assert len(out.splitlines()) == 3


def test_summary_always(capsys, sysroot):
    _, out = _run(capsys, sysroot, "--summary=always")
    assert len(out.splitlines()) == 7


def test_format_summary_bytes(sysroot):
    info = read_memory_info(_sysmem(sysroot), False, DEFAULT_COLUMNS)
    assert format_summary(info, True) == (
        "Memory block size:" + " " * 12 + "134217728\n"
        "Total online memory:" + " " * 8 + "16777216000\n"
        "Total offline memory:" + " " * 17 + "0\n"
    )


def test_create_table_rows_values(sysroot):
    info = read_memory_info(_sysmem(sysroot), False, [Column.ZONES])
    rows = create_table_rows(info, False)
    assert [row.zones for row in rows] == ["None", "DMA32", "Normal"]
    assert [row.block for row in rows] == ["0", "1-6", "32-149"]
    assert rows[1].size == "768M"
    assert rows[0].node == "0"


def test_unknown_state_and_not_removable():
    info = MemoryInfo(
        block_size=0x8000000,
        blocks=[MemoryBlock(index=2, state=MemoryState.UNKNOWN, removable=False)],
    )
    (row,) = create_table_rows(info, False)
    assert row == TableRow(
        range="0x0000000010000000-0x0000000017ffffff",
        size="128M",
        state="?",
        removable="no",
        block="2",
    )
    assert row.value(Column.STATE) == "?"
    assert '"removable": false' in format_json([row], [Column.REMOVABLE])


def test_format_raw_and_pairs_empty():
    assert format_raw([], [Column.BLOCK], noheadings=True) == ""
    assert format_pairs([], [Column.BLOCK]) == ""
    assert format_table([], [Column.BLOCK, Column.SIZE]) == "BLOCK  SIZE\n"


def test_summary_enum_values():
    assert Summary("only") is Summary.ONLY
    with pytest.raises(ValueError):
        Summary("sometimes")


def test_missing_sysroot_fails(capsys, tmp_path):
    assert main(["-s", str(tmp_path / "nothing")]) == 1
    assert "lsmem:" in capsys.readouterr().err