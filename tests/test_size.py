import pytest

from lxutils.size import ParseSizeError, parse_size


def test_parse_numeric():
    assert parse_size("1234") == 1234


def test_parse_with_suffix():
    assert parse_size("1024B") == 1024
    assert parse_size("1KiB") == 1024
    assert parse_size("1MiB") == 1024 * 1024
    assert parse_size("1GiB") == 1024 * 1024 * 1024
    assert parse_size("1TiB") == 1024 * 1024 * 1024 * 1024


def test_invalid_input():
    with pytest.raises(ParseSizeError):
        parse_size("invalid")


def test_whitespace_is_trimmed():
    assert parse_size("  2 KiB ") == 2048
    assert parse_size("5 B") == 5


@pytest.mark.parametrize("text", ["1.5KiB", "-3", "12XB", "KiB", "", "1_000"])
def test_rejected_formats(text):
    with pytest.raises(ParseSizeError):
        parse_size(text)


def test_error_message_names_input():
    with pytest.raises(ParseSizeError, match="Invalid size format: bogus"):
        parse_size("bogus")


def test_out_of_range_rejected():
    with pytest.raises(ParseSizeError):
        parse_size(str(2**64))