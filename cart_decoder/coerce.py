import math
import re
import struct
from typing import Any, Callable, Dict

from .errors import CoercionError, DecodeError, type_mismatch
from .ftypes import Either

U32_MAX = 2**32 - 1
U32_DIGITS = len(str(U32_MAX))

# Текстовая грамматика чисел: без пробелов и "_", в отличие от float()/int()
_FLOAT_TEXT = re.compile(
    r"[+-]?(?:(?P<special>inf|infinity|nan)|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)
_UINT_TEXT = re.compile(r"\+?[0-9]+")

STRING_OR_NUMBER = "a string or a number"


def to_float32(value: float) -> float:
    """Округляет double до binary32. OverflowError, если конечное значение не влезает."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _coercion_error(path: str, value: Any, message: str) -> Either[DecodeError, Any]:
    return Either.left(CoercionError(path=path, message=message, value=value))


def _is_json_number(value: Any) -> bool:
    # bool — подкласс int, но в JSON это отдельный тип
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _float32_from_double(value: float, path: str, raw: Any) -> Either[DecodeError, float]:
    try:
        return Either.right(to_float32(value))
    except OverflowError:
        return _coercion_error(path, raw, f"number {raw!r} out of range for f32")


def coerce_amount(value: Any, path: str) -> Either[DecodeError, float]:
    """
    amount: string | number -> float (binary32).
      "123.0" -> 123.0
      123     -> 123.0
      "abc"   -> CoercionError
      true    -> TypeMismatchError
    """
    if isinstance(value, str):
        match = _FLOAT_TEXT.fullmatch(value)
        if match is None:
            return _coercion_error(path, value, f"invalid float literal {value!r}")
        parsed = float(value)
        if math.isinf(parsed) and match.group("special") is None:
            return _coercion_error(path, value, f"number {value!r} out of range for f32")
        return _float32_from_double(parsed, path, value)

    if _is_json_number(value):
        try:
            widened = float(value)
        except OverflowError:
            return _coercion_error(path, value, "invalid number: integer too large for f64")
        # json.loads превращает 1e400 в inf — для JSON-числа это выход за диапазон
        if math.isinf(widened):
            return _coercion_error(path, value, "invalid number: out of range for f64")
        return _float32_from_double(widened, path, value)

    return Either.left(type_mismatch(path, STRING_OR_NUMBER, value))


def coerce_zip(value: Any, path: str) -> Either[DecodeError, int]:
    """
    zip: string | number -> int в диапазоне u32.
    Число должно быть целым JSON-числом (123.0 не подходит), без знака минус.
    """
    if isinstance(value, str):
        if _UINT_TEXT.fullmatch(value) is None:
            return _coercion_error(path, value, f"invalid digit in {value!r}")
        digits = value.lstrip("+").lstrip("0")
        if len(digits) > U32_DIGITS or int(digits or "0") > U32_MAX:
            return _coercion_error(path, value, "number too large to fit in u32")
        return Either.right(int(digits or "0"))

    if _is_json_number(value):
        if isinstance(value, float):
            return _coercion_error(path, value, "invalid number: expected an unsigned integer")
        if value < 0:
            return _coercion_error(path, value, "invalid number: negative value for unsigned field")
        if value > U32_MAX:
            return _coercion_error(path, value, "number too large to fit in u32")
        return Either.right(value)

    return Either.left(type_mismatch(path, STRING_OR_NUMBER, value))


RULES: Dict[str, Callable[[Any, str], Either[DecodeError, Any]]] = {
    "amount": coerce_amount,
    "zip": coerce_zip,
}
