import pytest

from cart_decoder.coerce import coerce_amount, coerce_zip, to_float32, U32_MAX
from cart_decoder.errors import CoercionError, TypeMismatchError

PATH = "$.x"


# ============ amount ============


@pytest.mark.parametrize("raw", ["123.0", 123.0, 123, "123", "+123", "1.23e2"])
def test_amount_string_and_number_agree(raw):
    result = coerce_amount(raw, PATH)
    assert result.is_right
    assert result.value == 123.0


def test_amount_is_rounded_to_float32():
    result = coerce_amount("0.1", PATH)
    assert result.value == to_float32(0.1)
    assert result.value != 0.1


@pytest.mark.parametrize("raw", ["abc", "", " 1.0", "1.0 ", "1_000", "1e", "0x10", "1,5"])
def test_amount_bad_text_is_coercion_error(raw):
    result = coerce_amount(raw, PATH)
    assert result.is_left
    assert isinstance(result.value, CoercionError)
    assert result.value.value == raw
    assert result.value.path == PATH


@pytest.mark.parametrize("raw", ["1e40", 1e39, 10**400])
def test_amount_out_of_range(raw):
    result = coerce_amount(raw, PATH)
    assert isinstance(result.value, CoercionError)


def test_amount_special_text_values():
    assert coerce_amount("inf", PATH).value == float("inf")
    assert coerce_amount("-Infinity", PATH).value == float("-inf")
    nan = coerce_amount("NaN", PATH).value
    assert nan != nan


@pytest.mark.parametrize("raw", [True, False, None, [], [1], {}, {"amount": 1}])
def test_amount_wrong_type(raw):
    result = coerce_amount(raw, PATH)
    assert isinstance(result.value, TypeMismatchError)
    assert result.value.expected == "a string or a number"


# ============ zip ============


@pytest.mark.parametrize("raw", ["123123", 123123, "+123123", "0123123"])
def test_zip_string_and_number_agree(raw):
    result = coerce_zip(raw, PATH)
    assert result.is_right
    assert result.value == 123123


def test_zip_bounds():
    assert coerce_zip(0, PATH).value == 0
    assert coerce_zip(U32_MAX, PATH).value == U32_MAX
    assert coerce_zip(str(U32_MAX), PATH).value == U32_MAX


@pytest.mark.parametrize(
    "raw", [-1, "-1", "-0", U32_MAX + 1, str(U32_MAX + 1), 123.0, 1.5, "12.5", "abc", " 1", "1_0", ""]
)
def test_zip_unrepresentable_is_coercion_error(raw):
    result = coerce_zip(raw, PATH)
    assert result.is_left
    assert isinstance(result.value, CoercionError)


@pytest.mark.parametrize("raw", [True, None, [], {}])
def test_zip_wrong_type(raw):
    result = coerce_zip(raw, PATH)
    assert isinstance(result.value, TypeMismatchError)
    assert result.value.actual in ("boolean", "null", "array", "object")


def test_zip_text_past_int_digit_limit():
    result = coerce_zip("1" * 5000, PATH)
    assert isinstance(result.value, CoercionError)


def test_zip_text_leading_zeros_do_not_count_as_digits():
    assert coerce_zip("0" * 20 + "42", PATH).value == 42
    assert coerce_zip("0" * 20, PATH).value == 0
    assert isinstance(coerce_zip("0" + "9" * 11, PATH).value, CoercionError)
