"""Base class and registry for commands."""

from __future__ import annotations

import argparse
import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from gl_lab.models import LOGGER_NAME
from gl_lab.result import Result

if TYPE_CHECKING:
    from gl_lab.client import GitLabClient
    from gl_lab.stream import Stream

# ---------------------------------------------------------------------------
# Command Registry
# ---------------------------------------------------------------------------

_command_registry: dict[str, type[Command]] = {}


def register_command(name: str):
    """Decorator to register a command class under a CLI subcommand name."""

    def decorator(cls):
        _command_registry[name] = cls
        cls.command_name = name
        return cls

    return decorator


def get_command_registry() -> dict[str, type[Command]]:
    """Get the command registry."""
    return _command_registry


# ---------------------------------------------------------------------------
# Command Base Class
# ---------------------------------------------------------------------------


class Command(ABC):
    """Base class for all commands."""

    command_name: str = ""
    requires_token: bool = True

    def __init__(self, client: GitLabClient, args: argparse.Namespace):
        self.client = client
        self.args = args
        self.json_output = getattr(args, "json_output", False)
        self.verbose = getattr(args, "verbose", False)
        self.logger = logging.getLogger(LOGGER_NAME)

    @staticmethod
    @abstractmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific CLI arguments."""
        ...

    @abstractmethod
    def execute(self) -> Result[Any]:
        """Build and run this command's pipeline or stream, printing the output."""
        ...

    # -- Output helpers --

    def emit(self, line: str) -> None:
        print(line)

    def emit_json(self, data: Any) -> None:
        print(json.dumps(data, indent=2))

    def emit_stream(self, stream: Stream, format_line: Callable[[Any], str], limit: int | None = None) -> Result[Any]:
        """
        Print a collection either as one JSON array or one line per element.

        Without --json and without a limit the stream is drained element by
        element, so only one page is held in memory at a time.
        """
        if self.json_output:
            return stream.take(limit).map(lambda items: self.emit_json([item.raw for item in items]))
        if limit is None:
            return stream.for_each(lambda item: self.emit(format_line(item)))

        def print_lines(items: list) -> None:
            for item in items:
                self.emit(format_line(item))

        return stream.take(limit).map(print_lines)


def positive_int(value: str) -> int:
    """argparse type for --limit: an integer of at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number
