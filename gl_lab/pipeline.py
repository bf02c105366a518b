"""Deferred, short-circuiting request pipeline."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from gl_lab.errors import LabError
from gl_lab.result import Err, Ok, Result

T = TypeVar("T")
U = TypeVar("U")


def _attempt(step: Callable[[], Result[T]]) -> Result[T]:
    try:
        return step()
    except LabError as e:
        return Err(e)


class Pipeline(Generic[T]):
    """
    A chain of dependent steps that yields a ``Result`` when run.

    Building a pipeline does no work; ``run()`` executes the stages in the
    order they were chained. The first failure skips every later stage and
    becomes the pipeline's result unchanged.
    """

    def __init__(self, step: Callable[[], Result[T]]):
        self._step = step

    @classmethod
    def of(cls, value: T) -> Pipeline[T]:
        return cls(lambda: Ok(value))

    @classmethod
    def fail(cls, error: LabError) -> Pipeline[Any]:
        return cls(lambda: Err(error))

    @classmethod
    def from_call(cls, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Pipeline[T]:
        """Wrap a plain function that signals failure by raising a LabError."""
        return cls(lambda: Ok(fn(*args, **kwargs)))

    def bind(self, stage: Callable[[T], Pipeline[U]]) -> Pipeline[U]:
        def step() -> Result[U]:
            upstream = _attempt(self._step)
            if isinstance(upstream, Err):
                return upstream
            return _attempt(lambda: stage(upstream.value)._step())

        return Pipeline(step)

    def map(self, transform: Callable[[T], U]) -> Pipeline[U]:
        return self.bind(lambda value: Pipeline.of(transform(value)))

    def run(self) -> Result[T]:
        return _attempt(self._step)
