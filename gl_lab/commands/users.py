"""User commands."""

from __future__ import annotations

import argparse

from gl_lab.commands.base import Command, register_command
from gl_lab.result import Result


def _add_owner(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-o", "--owner", dest="owner_id", required=True, help="GitLab owner (user) id")


@register_command("user-list")
class UserListCommand(Command):
    """Display user name and id."""

    requires_token = False

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        _add_owner(parser)

    def execute(self) -> Result[None]:
        def show(user):
            if self.json_output:
                self.emit_json(user.raw)
            else:
                self.emit(user.username)

        return self.client.user_by_id(self.args.owner_id).map(show).run()


@register_command("user-name")
class UserNameCommand(Command):
    """Display users by name and id."""

    requires_token = False

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-n", "--owner-name", dest="owner_name", required=True, help="GitLab username")

    def execute(self) -> Result:
        users = self.client.users_by_name(self.args.owner_name)
        return self.emit_stream(users, lambda user: f"{user.username}:{user.id}")


@register_command("user-projects")
class UserProjectsCommand(Command):
    """List public projects owned by the user."""

    requires_token = False

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        _add_owner(parser)

    def execute(self) -> Result:
        projects = self.client.user_projects(self.args.owner_id)
        return self.emit_stream(projects, lambda project: project.name)


@register_command("user-events")
class UserEventsCommand(Command):
    """List all user events."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        _add_owner(parser)

    def execute(self) -> Result:
        # Events are always printed as structured data
        events = self.client.user_events(self.args.owner_id)
        return events.to_list().map(lambda items: self.emit_json([event.raw for event in items]))
