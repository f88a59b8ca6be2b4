"""Lightweight Result types (Ok/Err) for non-raising bridge flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Tuple, Type, TypeGuard, TypeVar, Union

from ..exceptions import BaseError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: Exception

    @property
    def code(self) -> str:
        return getattr(self.error, "error_code", type(self.error).__name__)


Result = Union[Ok[T], Err]


def is_ok(result: Result[T]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err(result: Result[T]) -> TypeGuard[Err]:
    return isinstance(result, Err)


def unwrap(result: Result[T]) -> T:
    if isinstance(result, Ok):
        return result.value
    raise result.error


def unwrap_or(result: Result[T], default: T) -> T:
    if isinstance(result, Ok):
        return result.value
    return default


def error_message(result: Result[T]) -> Optional[str]:
    if isinstance(result, Err):
        return str(result.error)
    return None


def capture(
    func: Callable[..., T],
    *args: Any,
    catch: Tuple[Type[Exception], ...] = (BaseError,),
    **kwargs: Any,
) -> Result[T]:
    """Call ``func`` and wrap its return value or a caught project error."""
    try:
        return Ok(func(*args, **kwargs))
    except catch as exc:
        return Err(exc)
