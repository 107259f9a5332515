import pytest

from wafops.transformations.utf8 import utf8_to_unicode


def _raw(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def test_empty_input():
    assert utf8_to_unicode("") == ""


@pytest.mark.parametrize("text", ["hello world", "SELECT * FROM t", "a+b=c;"])
def test_ascii_is_unchanged(text):
    assert utf8_to_unicode(text) == text


def test_two_byte_character():
    assert utf8_to_unicode("é") == "%u00e9"


def test_three_byte_character_keeps_low_byte_and_lead():
    assert utf8_to_unicode("€") == "%u00ac" + _raw(b"\xe2")


def test_bytes_and_text_give_same_result():
    assert utf8_to_unicode("caf\u00e9".encode("utf-8")) == utf8_to_unicode("caf\u00e9")


def test_stray_continuation_byte_is_copied():
    assert utf8_to_unicode(b"\x80A") == _raw(b"\x80A")


def test_broken_sequence_drops_lead_byte():
    assert utf8_to_unicode(b"\xc3A") == "A"


def test_truncated_sequence_drops_lead_byte():
    assert utf8_to_unicode(b"A\xc3") == "A"


def test_nul_inside_is_dropped():
    assert utf8_to_unicode("a\x00b") == "ab"


def test_trailing_nul_is_kept():
    assert utf8_to_unicode("ab\x00") == "ab\x00"


def test_escapes_are_six_characters_each():
    result = utf8_to_unicode("éü")
    assert len(result) == 12
    assert result.count("%u00") == 2