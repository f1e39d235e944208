import pytest

from hashtab.utl import (
    Version,
    find_hash_in_string,
    floor_icon_size,
    hash_bytes_to_string,
    hash_string_to_bytes,
    hex_digit,
    make_path_long_compatible,
    unhex,
)

UPPER_DIGITS = "0123456789ABCDEF"
LOWER_DIGITS = "0123456789abcdef"


@pytest.mark.parametrize("n", range(16))
def test_hex_digit_matches_digit_table(n):
    assert hex_digit(n) == UPPER_DIGITS[n]
    assert hex_digit(n, upper=False) == LOWER_DIGITS[n]


def test_hex_digit_rejects_out_of_range():
    with pytest.raises(ValueError):
        hex_digit(16)


@pytest.mark.parametrize("n", range(16))
def test_unhex_inverts_hex_digit(n):
    assert unhex(hex_digit(n)) == n
    assert unhex(hex_digit(n, upper=False)) == n


@pytest.mark.parametrize("ch", ["g", "G", " ", "\u00e9", "\u0660", "/"])
def test_unhex_rejects_non_hex(ch):
    with pytest.raises(ValueError):
        unhex(ch)


def test_hash_bytes_to_string_matches_stdlib_hex():
    data = bytes(range(256))
    assert hash_bytes_to_string(data, upper=False) == data.hex()
    assert hash_bytes_to_string(data) == data.hex().upper()


def test_hash_roundtrip():
    data = bytes([0x00, 0x7F, 0x80, 0xFF, 0x12, 0xAB])
    assert hash_string_to_bytes(hash_bytes_to_string(data)) == data
    assert hash_string_to_bytes(hash_bytes_to_string(data, upper=False)) == data


def test_hash_string_to_bytes_accepts_spaces_between_pairs():
    assert hash_string_to_bytes("de ad be ef") == bytes.fromhex("deadbeef")
    assert hash_string_to_bytes("  DEAD  BEEF") == bytes.fromhex("deadbeef")


def test_hash_string_to_bytes_invalid_is_empty():
    assert hash_string_to_bytes("zz11") == b""
    assert hash_string_to_bytes("d e") == b""


def test_hash_string_to_bytes_ignores_odd_trailing_char():
    assert hash_string_to_bytes("abc") == bytes.fromhex("ab")


def test_hash_string_to_bytes_trailing_spaces_at_odd_end_invalid():
    assert hash_string_to_bytes("ab  ") == b""
    assert hash_string_to_bytes("ab ") == bytes.fromhex("ab")


def test_hash_string_to_bytes_short_inputs():
    assert hash_string_to_bytes("") == b""
    assert hash_string_to_bytes("a") == b""


def test_find_hash_in_string_finds_embedded_hash():
    digest = "d41d8cd98f00b204e9800998ecf8427e"
    text = f"MD5 of the file is {digest} as published."
    assert find_hash_in_string(text) == bytes.fromhex(digest)


def test_find_hash_in_string_spaced_upper():
    assert find_hash_in_string("crc: DE AD BE EF ok") == bytes.fromhex("deadbeef")


def test_find_hash_in_string_rejects_mixed_case_and_short():
    assert find_hash_in_string("value DeAdBeEf here") == b""
    assert find_hash_in_string("only abcdef") == b""
    assert find_hash_in_string("no hashes here") == b""


@pytest.mark.parametrize(
    "size, expected",
    [(300, 256), (256, 256), (255, 192), (47, 40), (16, 16), (10, 10)],
)
def test_floor_icon_size(size, expected):
    assert floor_icon_size(size) == expected


def test_make_path_long_compatible_adds_prefix():
    path = "C:\\Windows\\file.txt"
    assert make_path_long_compatible(path) == "\\\\?\\" + path


def test_make_path_long_compatible_leaves_unc_and_prefixed():
    unc = "\\\\server\\share\\file"
    prefixed = "\\\\?\\C:\\file"
    assert make_path_long_compatible(unc) == unc
    assert make_path_long_compatible(prefixed) == prefixed


def test_make_path_long_compatible_idempotent():
    once = make_path_long_compatible("relative\\x")
    assert make_path_long_compatible(once) == once


def test_version_ordering_is_lexicographic():
    assert Version(1, 0, 0) > Version(0, 65535, 65535)
    assert Version(0, 2, 0) > Version(0, 1, 65535)
    assert Version(3, 1, 4) < Version(3, 1, 5)
    assert Version(3, 1, 4) == Version(3, 1, 4)


def test_version_default_is_zero():
    assert Version().as_number() == 0
    assert Version() < Version(0, 0, 1)


def test_version_as_number_preserves_order():
    versions = [Version(2, 0, 0), Version(0, 0, 9), Version(1, 5, 0), Version(1, 4, 7)]
    by_number = sorted(versions, key=Version.as_number)
    assert by_number == sorted(versions)
    assert [str(v) for v in by_number] == ["0.0.9", "1.4.7", "1.5.0", "2.0.0"]


def test_version_rejects_out_of_range_component():
    with pytest.raises(ValueError):
        Version(65536, 0, 0)
    with pytest.raises(ValueError):
        Version(0, -1, 0)