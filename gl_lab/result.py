"""Result type for structured error handling.

A ``Result`` is either ``Ok(value)`` or ``Err(error)`` where ``error`` is a
``LabError``. Callers check with ``isinstance`` or ``is_ok``:

    result = client.user_by_id(42).run()
    if isinstance(result, Err):
        # handle result.error
    else:
        print(result.value.username)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from gl_lab.errors import LabError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        return fn(self.value)

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        return Ok(fn(self.value))

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: LabError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def bind(self, fn: Callable) -> Err:
        return self

    def map(self, fn: Callable) -> Err:
        return self

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]
