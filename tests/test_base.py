import pytest

from wafops.operators.base import (
    NoMatch,
    Operator,
    UnconditionalMatch,
    capture_field,
    expand_macros,
    parse_int,
)


class FakeTransaction:
    def __init__(self):
        self.captures = {}

    def macro_expansion(self, data):
        return data.replace("%{tx.a}", "value")

    def capture_field(self, index, value):
        self.captures[index] = value


@pytest.mark.parametrize("value", ["", "anything", "1 OR 1=1"])
def test_no_match_never_matches(value):
    assert NoMatch().evaluate(None, value) is False


@pytest.mark.parametrize("value", ["", "anything", "1 OR 1=1"])
def test_unconditional_match_always_matches(value):
    assert UnconditionalMatch("ignored").evaluate(FakeTransaction(), value) is True


def test_operator_keeps_its_argument():
    assert NoMatch("some data").data == "some data"
    assert UnconditionalMatch().data == ""


def test_operator_base_is_abstract():
    with pytest.raises(TypeError):
        Operator("x")


def test_expand_macros_without_transaction():
    assert expand_macros(None, "x-%{tx.a}") == "x-%{tx.a}"


def test_expand_macros_with_transaction():
    assert expand_macros(FakeTransaction(), "x-%{tx.a}") == "x-value"


def test_capture_field_records_value():
    tx = FakeTransaction()
    capture_field(tx, 0, "first")
    capture_field(tx, 3, "fourth")
    assert tx.captures == {0: "first", 3: "fourth"}


@pytest.mark.parametrize("text, expected", [("2500", 2500), ("-7", -7), ("+42", 42), ("0", 0)])
def test_parse_int_valid(text, expected):
    assert parse_int(text) == expected


@pytest.mark.parametrize("text", ["", "abc", " 1", "1 ", "1_000", "12a", "٣", "9223372036854775808"])
def test_parse_int_invalid_gives_zero(text):
    assert parse_int(text) == 0


def test_parse_int_limits():
    assert parse_int("9223372036854775807") == 2**63 - 1
    assert parse_int("-9223372036854775808") == -(2**63)