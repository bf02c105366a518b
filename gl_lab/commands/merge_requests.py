"""Merge request listing."""

from __future__ import annotations

import argparse

from gl_lab.commands.base import Command, positive_int, register_command
from gl_lab.result import Result


@register_command("merge-requests")
class MergeRequestsCommand(Command):
    """List user's merge requests."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--state",
            default=None,
            choices=["opened", "closed", "locked", "merged", "all"],
            help="Only merge requests in this state",
        )
        parser.add_argument(
            "--scope",
            default=None,
            choices=["created_by_me", "assigned_to_me", "all"],
            help="GitLab scope filter (GitLab default: created_by_me)",
        )
        parser.add_argument("--limit", type=positive_int, default=None, help="Stop after this many merge requests")

    def execute(self) -> Result:
        merge_requests = self.client.merge_requests(state=self.args.state, scope=self.args.scope)
        return self.emit_stream(merge_requests, lambda mr: f"#{mr.id} {mr.title}", limit=self.args.limit)
