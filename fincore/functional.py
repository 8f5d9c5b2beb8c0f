from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')
R = TypeVar('R')


class Maybe(Generic[T], ABC):
    """Optional value: ``Some(x)`` when a rule produced something, ``Nothing()`` otherwise."""

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()

    def to_optional(self) -> Optional[T]:
        return self.get_or_else(None)


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return self

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


def maybe_when(condition: bool, build: Callable[[], T]) -> Maybe[T]:
    """``Some(build())`` if condition holds; ``build`` is not called otherwise."""
    return Some(build()) if condition else Nothing()


def collect_some(values: Iterable[Maybe[T]]) -> tuple[T, ...]:
    """Unwrap every ``Some`` in order, dropping the ``Nothing`` values."""
    return tuple(m.get_or_else(None) for m in values if m.is_some())


class Either(Generic[E, T], ABC):
    """Result of a check: ``Right(value)`` on success, ``Left(error)`` on failure."""

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def fold(self, on_left: Callable[[E], R], on_right: Callable[[T], R]) -> R:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    def get_or_else(self, default: T) -> T:
        return self.fold(lambda _: default, lambda value: value)

    def get_error(self) -> E:
        return self.fold(lambda error: error, _no_error)


def _no_error(value):
    raise ValueError("Cannot get error from Right")


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def fold(self, on_left: Callable[[E], R], on_right: Callable[[T], R]) -> R:
        return on_right(self._value)

    def is_right(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def fold(self, on_left: Callable[[E], R], on_right: Callable[[T], R]) -> R:
        return on_left(self._error)

    def is_right(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def compose(*funcs):
    """Return the composition of the given functions.

    compose(f, g, h)(x) == f(g(h(x)))
    """
    def _composed(x):
        res = x
        for f in reversed(funcs):
            res = f(res)
        return res
    return _composed


def pipe(x, *funcs):
    """Thread a value through functions left to right.

    pipe(x, f, g, h) == h(g(f(x)))
    """
    res = x
    for f in funcs:
        res = f(res)
    return res
