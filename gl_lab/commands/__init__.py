"""Commands for lab."""

from gl_lab.commands.api import ApiCommand
from gl_lab.commands.base import Command, get_command_registry, register_command

# Import all commands to register them
from gl_lab.commands.commits import CiStatusCommand, SetCiStatusCommand
from gl_lab.commands.merge_requests import MergeRequestsCommand
from gl_lab.commands.projects import BranchCommand, ProjectCreateCommand, StatusChecksCommand
from gl_lab.commands.users import UserEventsCommand, UserListCommand, UserNameCommand, UserProjectsCommand

__all__ = [
    "Command",
    "register_command",
    "get_command_registry",
    "ApiCommand",
    "BranchCommand",
    "CiStatusCommand",
    "MergeRequestsCommand",
    "ProjectCreateCommand",
    "SetCiStatusCommand",
    "StatusChecksCommand",
    "UserEventsCommand",
    "UserListCommand",
    "UserNameCommand",
    "UserProjectsCommand",
]
