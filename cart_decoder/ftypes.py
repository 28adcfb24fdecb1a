# cart_decoder/ftypes.py
# Result types for the decoder: Maybe for key lookups, Either for decode outcomes.
# Both are immutable; Left always carries a DecodeError.

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, Tuple, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
L = TypeVar("L")
R = TypeVar("R")


@dataclass(frozen=True)
class Maybe(Generic[T]):
    """
    Maybe (Option): Maybe.some(value) или Maybe.nothing().
    В декодере — результат поиска ключа в JSON-объекте.
    """

    value: Optional[T]
    present: bool = True

    @staticmethod
    def some(value: T) -> "Maybe[T]":
        return Maybe(value, True)

    @staticmethod
    def nothing() -> "Maybe[T]":
        return Maybe(None, False)

    @staticmethod
    def lookup(mapping: dict, key: str) -> "Maybe":
        # JSON null — это значение, а не отсутствие ключа
        return Maybe.some(mapping[key]) if key in mapping else Maybe.nothing()

    def to_either(self, error: L) -> "Either[L, T]":
        """Some(v) -> Right(v), Nothing -> Left(error)"""
        return Either.right(self.value) if self.present else Either.left(error)

    def __repr__(self) -> str:
        return f"Some({self.value!r})" if self.present else "Nothing"


@dataclass(frozen=True)
class Either(Generic[L, R]):
    """
    Either<L, R>: Left — ошибка декодирования, Right — готовое значение.

    Фабрики: Either.left(val), Either.right(val), Either.sequence(items)
    Методы: map, bind, is_left (атрибут), is_right (свойство)
    """

    is_left: bool
    value: Union[L, R]

    @staticmethod
    def left(value: L) -> "Either[L, R]":
        return Either(True, value)

    @staticmethod
    def right(value: R) -> "Either[L, R]":
        return Either(False, value)

    @staticmethod
    def sequence(items: Iterable["Either[L, R]"]) -> "Either[L, Tuple[R, ...]]":
        """
        Собирает Right-значения в кортеж с сохранением порядка.
        Останавливается на первом Left и возвращает его.
        """
        collected = []
        for item in items:
            if item.is_left:
                return item  # type: ignore[return-value]
            collected.append(item.value)
        return Either.right(tuple(collected))

    @property
    def is_right(self) -> bool:
        return not self.is_left

    def map(self, fn: Callable[[R], U]) -> "Either[L, U]":
        return Either.right(fn(self.value)) if not self.is_left else self  # type: ignore[return-value]

    def bind(self, fn: Callable[[R], "Either[L, U]"]) -> "Either[L, U]":
        return fn(self.value) if not self.is_left else self  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Left({self.value!r})" if self.is_left else f"Right({self.value!r})"
