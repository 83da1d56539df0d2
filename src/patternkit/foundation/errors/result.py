"""Result/Either monad for value-based error handling.

Used by callers that prefer inspecting a failure over catching it, e.g.
``RetryingClient.request_result``. Ok wraps a success, Err wraps a failure.

Example:
    >>> Ok(2).map(lambda x: x * 21).unwrap()
    42
    >>> Err("boom").map(lambda x: x * 21).unwrap_or(0)
    0
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")
F = TypeVar("F")


class Result(Generic[T, E]):
    """Discriminated union of success (Ok) and failure (Err).

    Immutable: every combinator returns a new Result. Construct through
    ``Ok()`` / ``Err()`` rather than directly.
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value: T | E = value
        self._is_ok: bool = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            RuntimeError: If Result is Err
        """
        if self._is_ok:
            return cast(T, self._value)
        raise RuntimeError(f"Called unwrap() on Err value: {self._value!r}")

    def unwrap_err(self) -> E:
        """Extract Err value.

        Raises:
            RuntimeError: If Result is Ok
        """
        if not self._is_ok:
            return cast(E, self._value)
        raise RuntimeError(f"Called unwrap_err() on Ok value: {self._value!r}")

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._is_ok else default

    def ok(self) -> T | None:
        return cast(T, self._value) if self._is_ok else None

    def err(self) -> E | None:
        return None if self._is_ok else cast(E, self._value)

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to the Ok value, pass Err through unchanged."""
        return Ok(f(cast(T, self._value))) if self._is_ok else Err(cast(E, self._value))

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to the Err value, pass Ok through unchanged."""
        return Err(f(cast(E, self._value))) if not self._is_ok else Ok(cast(T, self._value))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind: chain a step that can itself fail."""
        return f(cast(T, self._value)) if self._is_ok else Err(cast(E, self._value))

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive case analysis over both variants."""
        return ok(cast(T, self._value)) if self._is_ok else err(cast(E, self._value))

    def __bool__(self) -> bool:
        return self._is_ok

    def __repr__(self) -> str:
        return f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct the success variant."""
    return Result(value, is_ok=True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct the failure variant."""
    return Result(error, is_ok=False)


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Collapse Results into one, failing fast on the first Err.

    Example:
        >>> sequence([Ok(1), Ok(2)]).unwrap()
        [1, 2]
        >>> sequence([Ok(1), Err("fail")]).unwrap_err()
        'fail'
    """
    values: list[T] = []
    for result in results:
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())
    return Ok(values)
