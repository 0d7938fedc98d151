# lxutils

A set of small command-line utilities for Linux system administration. The
package ships six commands:

| Command      | What it does                                                      |
|--------------|-------------------------------------------------------------------|
| `lsmem`      | List the ranges of memory blocks and their online state           |
| `mcookie`    | Print a random 128-bit hexadecimal "magic cookie"                 |
| `mesg`       | Show or change whether others may write to your terminal          |
| `mountpoint` | Tell whether a path is a mount point                              |
| `renice`     | Change the scheduling priority of a running process               |
| `rev`        | Reverse each line of files or standard input                      |

## Installation

```
pip install .
```

Python 3.10 or newer is required. The package has no third-party runtime
dependencies.

## Usage

### lsmem

```
lsmem                     # table of memory ranges plus a summary
lsmem -a                  # one row per memory block
lsmem -b                  # sizes in bytes
lsmem -J                  # JSON output
lsmem -P                  # key="value" pairs
lsmem -r                  # raw output
lsmem -n                  # no headings
lsmem -o block,size       # choose columns
lsmem --output-all        # every column
lsmem -S node             # split ranges on NODE (also state, removable, zones)
lsmem --summary=only      # summary only (never, always, only)
lsmem -s /path/to/root    # read sys/devices/system/memory below another root
```

Available columns: `RANGE`, `SIZE`, `STATE`, `REMOVABLE`, `BLOCK`, `NODE`,
`ZONES`. Without `-S`, ranges are split on the displayed columns.

### mcookie

```
mcookie                       # print a random cookie
mcookie -f seedfile -v        # mix a file into the hash and explain what is read
mcookie -f - -m 2KiB          # read at most 2 KiB of seed from standard input
```

`--max-size` accepts a plain number of bytes, a `B` suffix, or the binary
units `KiB`, `MiB`, `GiB` and `TiB`. Without a limit, character devices are
read for at most 1024 bytes.

### mesg

```
mesg          # prints "is y" or "is n"
mesg y        # allow messages
mesg n        # deny messages
mesg -v n     # deny and say so
```

The exit status is 0 when messages are allowed, 1 when denied and 2 when
none of standard input, output or error is a terminal.

### mountpoint

```
mountpoint /mnt/data
```

### renice

```
renice 10 1234      # set the nice value of process 1234 to 10
```

### rev

```
rev file.txt
echo "a test" | rev
rev --zero file.bin  # use NUL as the line separator
```

## Using it as a library

The pieces behind the commands can be imported directly, for example:

```python
from lxutils.humansize import size_to_human_string
from lxutils.size import parse_size
from lxutils.memblocks import read_memory_info

size_to_human_string(12000)   # '11.7K'
parse_size("2KiB")            # 2048
info = read_memory_info()     # merged memory ranges from sysfs
```

Other entry points include `lxutils.rev.reverse_stream`,
`lxutils.mcookie.make_cookie`, `lxutils.mountpoint.is_mountpoint`,
`lxutils.renice.renice`, `lxutils.mesg.do_mesg` and the formatters in
`lxutils.lsmem` (`create_table_rows`, `format_table`, `format_json`,
`format_pairs`, `format_raw`, `format_summary`).

## What it does not do

There is no command for running a program in a new session; the package
offers only the six commands listed above.

## Running the tests

```
pip install .[test]
pytest
```