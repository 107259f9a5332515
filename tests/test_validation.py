import pytest

from wafops.operators.validation import (
    UrlEncodingStatus,
    ValidateByteRange,
    ValidateUrlEncoding,
    validate_url_encoding,
)


def ascii_to_string(codes):
    return "".join("\ufffd" if c < 0 else chr(c) for c in codes)


GOOD_920272 = [
    [104, 101, 108, 111, 32, 119, 97, 122, 122, 117, 112, 32, 98, 114, 111],
    [38, 104, 101, 108, 111, 32, 119, 97, 122, 122, 117, 112, 32, 98, 114, 111, 126],
    [32, 104, 101, 108, 111, 32, 119, 97, 122, 122, 117, 112, 32, 98, 114, 111, 125],
]

BAD_920272 = [
    [35, 38, 104, 101, 108, 111, 32, 119, 97, 122, 122, 117, 112, 32, 98, 114, 127, 128],
    [104, 101, 108, 111, 32, 119, 97, 122, 122, 117, 112, 32, 98, 114, 111, -1],
    [104, 101, 108, 111, 32, 119, 97, 122, 122, 117, 112, 32, 98, 114, 111, 0],
]

GOOD_920270 = GOOD_920272 + [
    [1, 104, 101, 108, 111, 32, 119, 97, 122, 122, 117, 112, 32, 98, 114, 111, 255],
]


@pytest.mark.parametrize("codes", GOOD_920272)
def test_crs_920272_good(codes):
    assert ValidateByteRange("32-36,38-126").evaluate(None, ascii_to_string(codes)) is False


@pytest.mark.parametrize("codes", BAD_920272)
def test_crs_920272_bad(codes):
    assert ValidateByteRange("32-36,38-126").evaluate(None, ascii_to_string(codes)) is True


@pytest.mark.parametrize("codes", GOOD_920270)
def test_crs_920270_good(codes):
    assert ValidateByteRange("1-255").evaluate(None, ascii_to_string(codes)) is False


def test_crs_920270_flags_null():
    assert ValidateByteRange("1-255").evaluate(None, "abc\x00") is True


def test_ranges_with_spaces():
    op = ValidateByteRange(" 97-99 , 100-102 ")
    assert op.evaluate(None, "abcdef") is False
    assert op.evaluate(None, "abcg") is True


def test_single_value_allows_from_zero():
    op = ValidateByteRange("5")
    assert op.evaluate(None, "\x00\x03\x05") is False
    assert op.evaluate(None, "\x06") is True


def test_empty_value_is_not_flagged():
    assert ValidateByteRange("32-126").evaluate(None, "") is False


def test_reversed_range_raises():
    with pytest.raises(ValueError):
        ValidateByteRange("50-10")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", UrlEncodingStatus.EMPTY),
        ("plain", UrlEncodingStatus.VALID),
        ("a%41b%2f", UrlEncodingStatus.VALID),
        ("%41", UrlEncodingStatus.VALID),
        ("abc%4", UrlEncodingStatus.TRUNCATED),
        ("abc%", UrlEncodingStatus.TRUNCATED),
        ("%zz1", UrlEncodingStatus.NON_HEXADECIMAL),
        ("%4g", UrlEncodingStatus.NON_HEXADECIMAL),
    ],
)
def test_validate_url_encoding_status(value, expected):
    assert validate_url_encoding(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", False),
        ("hello%20world", False),
        ("100%", True),
        ("%G1x", True),
        ("%%41", True),
    ],
)
def test_validate_url_encoding_operator(value, expected):
    assert ValidateUrlEncoding().evaluate(None, value) is expected