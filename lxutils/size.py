"""Parsing of size values with an optional byte or binary-unit suffix."""

import re

_U64_MAX = 2**64 - 1
_NUMBER = re.compile(r"\+?[0-9]+")
_BINARY_UNITS = (("KiB", 1), ("MiB", 2), ("GiB", 3), ("TiB", 4))


class ParseSizeError(ValueError):
    """Raised when a size string cannot be parsed."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid size format: {text}")
        self.text = text


def _parse_u64(digits: str, original: str) -> int:
    if not _NUMBER.fullmatch(digits):
        raise ParseSizeError(original)
    value = int(digits)
    if value > _U64_MAX:
        raise ParseSizeError(original)
    return value


def parse_size(text: str) -> int:
    """Parse ``1234``, ``1024B`` or ``2KiB``-style sizes into a byte count."""
    s = text.strip()

    if s.endswith("B") and not s.endswith("iB"):
        return _parse_u64(s[:-1].strip(), s)

    for suffix, exponent in _BINARY_UNITS:
        if s.endswith(suffix):
            value = _parse_u64(s[: -len(suffix)].strip(), s) * 1024**exponent
            if value > _U64_MAX:
                raise ParseSizeError(s)
            return value

    return _parse_u64(s, s)