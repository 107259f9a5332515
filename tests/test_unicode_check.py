import pytest

from wafops.operators.unicode_check import (
    Utf8Error,
    Utf8Fault,
    ValidateUtf8Encoding,
    detect_utf8_character,
)


@pytest.mark.parametrize("char", ["A", "z", "~", "\x00"])
def test_ascii_is_single_byte(char):
    assert detect_utf8_character(char.encode()) == len(char.encode())


@pytest.mark.parametrize("char", ["é", "ñ", "ÿ"])
def test_two_byte_with_high_low_byte_passes(char):
    assert detect_utf8_character(char.encode()) == len(char.encode())


def test_only_first_character_is_measured():
    assert detect_utf8_character("éabc".encode()) == len("é".encode())


def test_accepts_text():
    assert detect_utf8_character("é") == len("é".encode())


@pytest.mark.parametrize(
    "data, fault",
    [
        (b"", Utf8Fault.DECODING_ERROR),
        (b"\xc3", Utf8Fault.CHARACTERS_MISSING),
        (b"\xe2\x82", Utf8Fault.CHARACTERS_MISSING),
        (b"\xc3\x41", Utf8Fault.INVALID_ENCODING),
        (b"\xe2\x41\x80", Utf8Fault.INVALID_ENCODING),
        (b"\xff", Utf8Fault.INVALID_ENCODING),
        (b"\x80", Utf8Fault.INVALID_ENCODING),
        (b"\xc0\x80", Utf8Fault.OVERLONG_CHARACTER),
        (b"\xc1\xbf", Utf8Fault.OVERLONG_CHARACTER),
        (b"\xf5\x80\x80\x80", Utf8Fault.RESTRICTED_CHARACTER),
        ("€".encode(), Utf8Fault.OVERLONG_CHARACTER),
        ("😀".encode(), Utf8Fault.OVERLONG_CHARACTER),
    ],
)
def test_faults(data, fault):
    with pytest.raises(Utf8Error) as info:
        detect_utf8_character(data)
    assert info.value.fault is fault


def test_error_is_value_error():
    with pytest.raises(ValueError):
        detect_utf8_character(b"\xff")


def test_operator_passes_plain_text():
    op = ValidateUtf8Encoding()
    assert op.evaluate(None, "hello world") is False
    assert op.evaluate(None, "café olé") is False
    assert op.evaluate(None, "") is False


def test_operator_flags_invalid_bytes():
    op = ValidateUtf8Encoding()
    invalid = b"abc\xffdef".decode("utf-8", "surrogateescape")
    assert op.evaluate(None, invalid) is True


def test_operator_flags_truncated_sequence():
    op = ValidateUtf8Encoding()
    truncated = b"abc\xc3".decode("utf-8", "surrogateescape")
    assert op.evaluate(None, truncated) is True


def test_operator_flags_three_byte_characters():
    assert ValidateUtf8Encoding().evaluate(None, "price €") is True