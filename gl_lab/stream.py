"""Lazy pagination stream over GitLab collection endpoints."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Generic, TypeVar

from gl_lab.errors import LabError
from gl_lab.models import LOGGER_NAME, Page, Request
from gl_lab.pipeline import Pipeline
from gl_lab.result import Err, Ok, Result

T = TypeVar("T")


class StreamState(Enum):
    NOT_STARTED = "not_started"
    FETCHING = "fetching"
    HAS_BUFFERED_PAGE = "has_buffered_page"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


TERMINAL_STATES = {StreamState.EXHAUSTED, StreamState.FAILED}


class _End:
    """Marker returned by ``Stream.next`` once the collection is used up."""

    def __repr__(self) -> str:
        return "END"


# Elements may legitimately be None (JSON null), so the end needs its own value
END = _End()


class Stream(Generic[T]):
    """
    Cursor over a paginated collection, fetched one page at a time.

    Creating a stream performs no I/O. ``next()`` serves elements from the
    buffered page and fetches the following page only once the buffered one is
    used up. Pages are fetched strictly in order and never twice. A failed fetch
    leaves the stream in the FAILED state and every later ``next()`` returns
    that same failure without touching the network.
    """

    def __init__(self, initial_request: Request, fetch_page: Callable[[Request], Pipeline[Page[T]]]):
        self._fetch_page = fetch_page
        self._next_request: Request | None = initial_request
        self._items: list[T] = []
        self._index = 0
        self._failure: Err | None = None
        self.state = StreamState.NOT_STARTED
        self.pages_fetched = 0
        self.logger = logging.getLogger(LOGGER_NAME)

    def next(self) -> Result[T | _End]:
        """Return ``Ok(element)``, ``Ok(END)`` at the end, or the stream's ``Err``."""
        while True:
            if self.state == StreamState.FAILED:
                return self._failure
            if self.state == StreamState.EXHAUSTED:
                return Ok(END)

            if self._index < len(self._items):
                item = self._items[self._index]
                self._index += 1
                return Ok(item)

            if self._next_request is None:
                self._items = []
                self.state = StreamState.EXHAUSTED
                return Ok(END)

            self._fetch()

    def _fetch(self) -> None:
        request = self._next_request
        self.state = StreamState.FETCHING
        self.logger.debug(f"Fetching page {self.pages_fetched + 1}: {request.url}")
        result = self._fetch_page(request).run()
        self.pages_fetched += 1

        if isinstance(result, Err):
            self._items = []
            self._next_request = None
            self._failure = result
            self.state = StreamState.FAILED
            return

        page = result.value
        self._items = list(page.items)
        self._index = 0
        self._next_request = page.next_request
        self.state = StreamState.HAS_BUFFERED_PAGE

    # -- Drains --

    def for_each(self, consumer: Callable[[T], object]) -> Result[int]:
        """
        Feed every element to ``consumer`` in order.

        The drain stops at the first failure, whether it comes from fetching a
        page or from the consumer (returning an ``Err`` or raising a LabError).
        """
        count = 0
        while True:
            result = self.next()
            if isinstance(result, Err):
                return result
            if result.value is END:
                return Ok(count)
            try:
                outcome = consumer(result.value)
            except LabError as e:
                return Err(e)
            if isinstance(outcome, Err):
                return outcome
            count += 1

    def take(self, limit: int | None) -> Result[list[T]]:
        """Collect up to ``limit`` elements (all of them when ``limit`` is None)."""
        items: list[T] = []
        while limit is None or len(items) < limit:
            result = self.next()
            if isinstance(result, Err):
                return result
            if result.value is END:
                break
            items.append(result.value)
        return Ok(items)

    def to_list(self) -> Result[list[T]]:
        """Collect the whole collection. Only for collections known to be small."""
        return self.take(None)

    def first(self) -> Result[T | _End]:
        return self.next()

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES
