"""Commit build status commands."""

from __future__ import annotations

import argparse

from gl_lab.commands.base import Command, positive_int, register_command
from gl_lab.commands.projects import add_project_id
from gl_lab.errors import EmptyResultError
from gl_lab.models import CommitState, CommitStatus, NewCommitStatus
from gl_lab.result import Err, Ok, Result

# Printed when a commit has no statuses at all
NO_STATUS_LINE = "failure"


def _add_commit(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("commit", metavar="COMMIT", help="A commit SHA or branch name")


def _require_statuses(statuses: list[CommitStatus]) -> Result[list[CommitStatus]]:
    if not statuses:
        return Err(EmptyResultError("No commit statuses found"))
    return Ok(statuses)


@register_command("ci-status")
class CiStatusCommand(Command):
    """List build status of a commit."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_project_id(parser)
        _add_commit(parser)
        parser.add_argument("--limit", type=positive_int, default=None, help="Stop after this many statuses")

    def execute(self) -> Result[None]:
        stream = self.client.commit_statuses(self.args.project_id, self.args.commit)
        result = stream.take(self.args.limit).bind(_require_statuses)

        if isinstance(result, Err):
            if isinstance(result.error, EmptyResultError):
                self.logger.debug(str(result.error))
                self.emit(NO_STATUS_LINE)
                return Ok(None)
            return result

        statuses = result.value
        if self.json_output:
            self.emit_json([status.raw for status in statuses])
        elif self.verbose:
            for status in statuses:
                self.emit(f"{status.status}\t{status.name}\t{status.target_url or ''}")
        else:
            for status in statuses:
                self.emit(status.status)
        return Ok(None)


@register_command("set-ci-status")
class SetCiStatusCommand(Command):
    """Set or update the build status of a commit."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_project_id(parser)
        _add_commit(parser)
        parser.add_argument(
            "state",
            metavar="STATE",
            nargs="?",
            default=CommitState.PENDING.value,
            choices=[s.value for s in CommitState],
            help="CI state (default: pending)",
        )
        parser.add_argument("--ref", default=None, help="Branch or tag the commit belongs to")
        parser.add_argument("--name", default=None, help="Label distinguishing this status from others")
        parser.add_argument("--target-url", default=None, help="URL associated with this status")
        parser.add_argument("--description", default=None, help="Short description of the status")
        parser.add_argument("--coverage", type=float, default=None, help="Total code coverage")
        parser.add_argument("--pipeline-id", type=int, default=None, help="Pipeline to set the status on")

    def execute(self) -> Result[None]:
        new_status = NewCommitStatus(
            state=CommitState(self.args.state),
            ref=self.args.ref,
            name=self.args.name,
            target_url=self.args.target_url,
            description=self.args.description,
            coverage=self.args.coverage,
            pipeline_id=self.args.pipeline_id,
        )
        pipeline = self.client.set_commit_status(self.args.project_id, self.args.commit, new_status)
        return pipeline.map(lambda status: self.emit_json(status.raw)).run()
