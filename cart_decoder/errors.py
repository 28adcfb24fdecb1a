from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class DecodeError:
    """Базовая ошибка декодирования. Возвращается в Either.left, не бросается."""

    kind: ClassVar[str] = "decode"

    path: str  # "$.cart.deliveryGroups[0].deliveryAddress.zip"
    message: str

    def __str__(self) -> str:
        return f"{self.message} at {self.path}"


@dataclass(frozen=True)
class JsonSyntaxError(DecodeError):
    """Невалидный JSON (имя без shadowing встроенного SyntaxError)"""

    kind: ClassVar[str] = "syntax"

    line: int
    column: int
    position: int

    def __str__(self) -> str:
        return f"{self.message} at line {self.line} column {self.column}"


@dataclass(frozen=True)
class UnexpectedEndOfInput(DecodeError):
    """Поток закончился раньше, чем документ"""

    kind: ClassVar[str] = "eof"

    line: int
    column: int
    position: int

    def __str__(self) -> str:
        return f"{self.message} at line {self.line} column {self.column}"


@dataclass(frozen=True)
class MissingFieldError(DecodeError):
    kind: ClassVar[str] = "missing_field"

    field: str


@dataclass(frozen=True)
class TypeMismatchError(DecodeError):
    kind: ClassVar[str] = "type_mismatch"

    expected: str
    actual: str


@dataclass(frozen=True)
class CoercionError(DecodeError):
    kind: ClassVar[str] = "coercion"

    value: Any


class DecodeFailed(Exception):
    """Исключение для decode_or_raise: оборачивает DecodeError"""

    def __init__(self, error: DecodeError):
        super().__init__(str(error))
        self.error = error


def json_type_name(value: Any) -> str:
    """Имя JSON-типа для значения, полученного из json.loads"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def type_mismatch(path: str, expected: str, value: Any) -> TypeMismatchError:
    actual = json_type_name(value)
    return TypeMismatchError(
        path=path,
        message=f"invalid type: {actual}, expected {expected}",
        expected=expected,
        actual=actual,
    )
