"""Project, branch and external status check commands."""

from __future__ import annotations

import argparse

from gl_lab.commands.base import Command, positive_int, register_command
from gl_lab.result import Result


def add_project_id(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p",
        "--project-id",
        required=True,
        help="Project id, namespace path (myorg/myproject) or project URL",
    )


@register_command("project-create")
class ProjectCreateCommand(Command):
    """Creates a new project owned by the authenticated user."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project_name", metavar="PROJECT_NAME", help="The repository name on GitLab")
        parser.add_argument(
            "-d", "--description", required=True, help="A short description of the GitLab repository"
        )
        parser.add_argument(
            "--visibility", default=None, choices=["private", "internal", "public"], help="Project visibility"
        )

    def execute(self) -> Result[None]:
        pipeline = self.client.create_project(
            self.args.project_name, description=self.args.description, visibility=self.args.visibility
        )
        return pipeline.map(lambda project: self.emit_json(project.raw)).run()


@register_command("status-checks")
class StatusChecksCommand(Command):
    """List external status checks."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_project_id(parser)

    def execute(self) -> Result:
        checks = self.client.external_status_checks(self.args.project_id)
        return self.emit_stream(checks, lambda check: f"{check.name}\t{check.external_url}\t{check.id}")


@register_command("branch")
class BranchCommand(Command):
    """List branches for a project."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_project_id(parser)
        parser.add_argument("--limit", type=positive_int, default=None, help="Stop after this many branches")

    def execute(self) -> Result:
        branches = self.client.branches(self.args.project_id)
        return self.emit_stream(branches, lambda branch: branch.name, limit=self.args.limit)
