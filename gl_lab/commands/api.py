"""Low-level passthrough to any GitLab API endpoint."""

from __future__ import annotations

import argparse

from gl_lab.commands.base import Command, register_command
from gl_lab.result import Result


@register_command("api")
class ApiCommand(Command):
    """Low-level GitLab API request interface."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "endpoint",
            metavar="ENDPOINT",
            help="The GitLab API endpoint to send the HTTP request to (e.g. /projects/42 or a full URL)",
        )

    def execute(self) -> Result[None]:
        return self.client.raw_get(self.args.endpoint).map(self.emit_json).run()
