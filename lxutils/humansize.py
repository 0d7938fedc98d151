"""Human readable rendering of byte counts with binary suffixes."""

_SUFFIXES = "BKMGTPE"
_U64_MAX = 2**64 - 1


def _exponent(value: int) -> int:
    """Return the largest power-of-two exponent (multiple of 10) not above value."""
    shift = 10
    while shift <= 60:
        if value < (1 << shift):
            break
        shift += 10
    return shift - 10


def size_to_human_string(nbytes: int) -> str:
    """Format a byte count as e.g. ``11.7K``, ``512B`` or ``1G``."""
    exp = _exponent(nbytes)
    suffix = _SUFFIXES[exp // 10] if exp // 10 < len(_SUFFIXES) else "B"
    if exp:
        dec, frac = divmod(nbytes, 1 << exp)
    else:
        dec, frac = nbytes, 0

    if frac:
        if frac >= _U64_MAX // 1000:
            frac = ((frac // 1024) * 1000) // (1 << (exp - 10))
        else:
            frac = (frac * 1000) // (1 << exp)
        # Round to one decimal place.
        frac = ((frac + 50) // 100) * 10
        if frac == 100:
            dec += 1
            frac = 0

    if frac:
        text = f"{dec}.{frac:02d}"
        if text.endswith("0"):
            text = text[:-1]
        return text + suffix
    return f"{dec}{suffix}"