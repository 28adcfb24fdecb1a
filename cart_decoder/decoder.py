import dataclasses
import json
import logging
import re
from functools import lru_cache
from typing import Any, Callable, Tuple, get_args, get_origin, get_type_hints

from .coerce import RULES
from .compose import chain
from .domain import Shop
from .errors import (
    DecodeError,
    DecodeFailed,
    JsonSyntaxError,
    MissingFieldError,
    UnexpectedEndOfInput,
    type_mismatch,
)
from .ftypes import Either, Maybe

logger = logging.getLogger(__name__)

ROOT = "$"

FieldDecoder = Callable[[Any, str], Either[DecodeError, Any]]

# строковый литерал целиком | константа вне строк (группа 1)
_CONSTANT_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)')


class _RejectedConstant(ValueError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


# ============ Чтение источника ============


def _line_col(data, pos: int) -> Tuple[int, int]:
    newline = b"\n" if isinstance(data, (bytes, bytearray)) else "\n"
    line = data.count(newline, 0, pos) + 1
    column = pos - (data.rfind(newline, 0, pos) + 1) + 1
    return line, column


def read_source(source) -> Either[DecodeError, str]:
    """
    bytes / bytearray / memoryview / str или объект с .read() -> текст документа.
    Невалидный UTF-8 -> Left(JsonSyntaxError), обрыв многобайтового символа -> Left(UnexpectedEndOfInput).
    """
    if isinstance(source, (bytes, bytearray, memoryview, str)):
        data = source
    elif hasattr(source, "read"):
        data = source.read()
    else:
        raise TypeError(f"cannot decode from {type(source).__name__}")

    if isinstance(data, str):
        return Either.right(data)

    raw = bytes(data)
    try:
        return Either.right(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        line, column = _line_col(raw, exc.start)
        error_cls = UnexpectedEndOfInput if exc.reason == "unexpected end of data" else JsonSyntaxError
        return Either.left(
            error_cls(
                path=ROOT,
                message=f"invalid UTF-8: {exc.reason}",
                line=line,
                column=column,
                position=exc.start,
            )
        )


# ============ JSON-синтаксис ============


def _reject_constant(name: str):
    raise _RejectedConstant(name)


def _parse_int(literal: str):
    """
    Целое длиннее лимита int() (4300 цифр) читается как float.
    Дальше его отвергает правило приведения поля.
    """
    try:
        return int(literal)
    except ValueError:
        return float(literal)


def _constant_position(text: str) -> int:
    found = next((m for m in _CONSTANT_TOKEN.finditer(text) if m.group(1)), None)
    return found.start(1) if found else 0


def parse_document(text: str) -> Either[DecodeError, Any]:
    """Текст -> JSON-значение. NaN/Infinity не допускаются."""
    try:
        return Either.right(json.loads(text, parse_constant=_reject_constant, parse_int=_parse_int))
    except json.JSONDecodeError as exc:
        at_end = exc.pos >= len(text) or exc.msg.startswith("Unterminated string")
        error_cls = UnexpectedEndOfInput if at_end else JsonSyntaxError
        message = "EOF while parsing" if at_end else exc.msg
        return Either.left(
            error_cls(
                path=ROOT,
                message=message,
                line=exc.lineno,
                column=exc.colno,
                position=exc.pos,
            )
        )
    except _RejectedConstant as exc:
        pos = _constant_position(text)
        line, column = _line_col(text, pos)
        return Either.left(
            JsonSyntaxError(
                path=ROOT,
                message=f"invalid JSON constant {exc.name}",
                line=line,
                column=column,
                position=pos,
            )
        )
    except RecursionError:
        return Either.left(
            JsonSyntaxError(
                path=ROOT,
                message="recursion limit exceeded",
                line=1,
                column=1,
                position=0,
            )
        )


# ============ Структурное декодирование ============


def _decode_str(value: Any, path: str) -> Either[DecodeError, str]:
    if isinstance(value, str):
        return Either.right(value)
    return Either.left(type_mismatch(path, "a string", value))


def _decode_sequence(item_decoder: FieldDecoder) -> FieldDecoder:
    def decode_items(value: Any, path: str) -> Either[DecodeError, Tuple]:
        if not isinstance(value, list):
            return Either.left(type_mismatch(path, "a sequence", value))
        return Either.sequence(
            item_decoder(item, f"{path}[{index}]") for index, item in enumerate(value)
        )

    return decode_items


def _decoder_for(hint, field: dataclasses.Field) -> FieldDecoder:
    rule = field.metadata.get("coerce")
    if rule is not None:
        return RULES[rule]
    if hint is str:
        return _decode_str
    if get_origin(hint) is tuple:
        return _decode_sequence(_decoder_for(get_args(hint)[0], field))
    if dataclasses.is_dataclass(hint):
        return lambda value, path: decode_entity(hint, value, path)
    raise TypeError(f"no decoder for {hint!r} ({field.name})")


@lru_cache
def schema(cls) -> Tuple[Tuple[str, FieldDecoder], ...]:
    """
    Таблица (json-ключ, декодер поля) для сущности, в порядке полей dataclass.
    Строится один раз на класс.
    """
    hints = get_type_hints(cls)
    return tuple(
        (f.metadata.get("key", f.name), _decoder_for(hints[f.name], f))
        for f in dataclasses.fields(cls)
    )


def decode_entity(cls, value: Any, path: str) -> Either[DecodeError, Any]:
    """
    JSON-объект -> экземпляр cls.
    Экземпляр создаётся только после успешного декодирования всех полей.
    Лишние ключи игнорируются.
    """
    if not isinstance(value, dict):
        return Either.left(type_mismatch(path, f"struct {cls.__name__}", value))

    def decode_field(key: str, field_decoder: FieldDecoder) -> Either[DecodeError, Any]:
        missing = MissingFieldError(path=path, message=f"missing field `{key}`", field=key)
        return Maybe.lookup(value, key).to_either(missing).bind(
            lambda raw: field_decoder(raw, f"{path}.{key}")
        )

    fields = Either.sequence(decode_field(key, dec) for key, dec in schema(cls))
    return fields.map(lambda values: cls(*values))


def decode_shop(value: Any) -> Either[DecodeError, Shop]:
    return decode_entity(Shop, value, ROOT)


# ============ Публичный API ============

_pipeline = chain(read_source, parse_document, decode_shop)


def decode(source) -> Either[DecodeError, Shop]:
    """
    Декодирует один JSON-документ корзины.
    Right(Shop) при успехе, Left(DecodeError) при первой же ошибке.
    """
    result = _pipeline(source)
    if result.is_left:
        logger.debug("decode failed: %s %s", result.value.kind, result.value)
    else:
        logger.debug(
            "decoded shop with %d delivery group(s)",
            len(result.value.cart.delivery_groups),
        )
    return result


def decode_file(path: str) -> Either[DecodeError, Shop]:
    """Открывает файл в бинарном режиме; OSError пробрасывается вызывающему"""
    with open(path, "rb") as f:
        return decode(f)


def decode_or_raise(source) -> Shop:
    result = decode(source)
    if result.is_left:
        raise DecodeFailed(result.value)
    return result.value
