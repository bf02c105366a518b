"""Logging utilities for lab."""

from __future__ import annotations

import json
import logging
import sys

from gl_lab.models import LOGGER_NAME


class StructuredFormatter(logging.Formatter):
    """Formatter that can emit JSON lines when configured."""

    def __init__(self, json_mode: bool = False):
        super().__init__()
        self.json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        command = getattr(record, "command", None)
        if self.json_mode:
            payload = {"level": record.levelname, "message": record.getMessage()}
            if command:
                payload["command"] = command
            return json.dumps(payload)
        prefix = f"{command}: " if command else ""
        return f"[{record.levelname:<7}] {prefix}{record.getMessage()}"


def setup_logging(json_mode: bool = False, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    # main() may run more than once per process (tests); replace the handler
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(json_mode=json_mode))
    logger.addHandler(handler)
    return logger
