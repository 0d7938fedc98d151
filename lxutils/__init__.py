"""Small Linux system administration utilities: lsmem, mcookie, mesg, mountpoint, renice and rev."""

__version__ = "0.1.0"