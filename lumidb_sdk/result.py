from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from .errors import SDKError

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

Result = Union[Ok[T], Err[E]]

# Combinators

def map(result: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:
    if isinstance(result, Ok):
        try:
            return Ok(f(result.value))
        except Exception as ex:  # mapping should not normally raise; surface as Err
            return Err(SDKError(f"{type(ex).__name__}: {ex}"))  # type: ignore[arg-type]
    return result  # type: ignore[return-value]


def and_then(result: Result[T, E], f: Callable[[T], Result[U, E]]) -> Result[U, E]:
    if isinstance(result, Ok):
        try:
            return f(result.value)
        except Exception as ex:
            return Err(SDKError(f"{type(ex).__name__}: {ex}"))  # type: ignore[arg-type]
    return result  # type: ignore[return-value]
