"""CLI entry point for lab."""

from __future__ import annotations

import argparse
import sys

# Ensure all commands are registered by importing the commands package
import gl_lab.commands  # noqa: F401
from gl_lab.client import GitLabClient
from gl_lab.commands import get_command_registry
from gl_lab.config import resolve_config
from gl_lab.errors import ConfigurationError
from gl_lab.logging_utils import setup_logging
from gl_lab.models import CONFIG_ENV, TOKEN_ENV, URL_ENV
from gl_lab.result import Err

__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lab",
        description="Make git easier with GitLab.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
lab wraps the GitLab REST API in small composable subcommands. Collections are
fetched one page at a time, only as far as the output needs.

Environment:
    {TOKEN_ENV} - GitLab Personal Access Token
    {URL_ENV}   - GitLab instance URL (default: https://gitlab.com)
    {CONFIG_ENV}   - Path to the JSON config file (default: ~/.config/lab/config.json)

Examples:
    # Print the build statuses of a commit, one per line
    lab ci-status -p 42 1a2b3c4d

    # Mark a commit as running
    lab set-ci-status -p myorg/myproject 1a2b3c4d running --name ci/build

    # First 20 branches as JSON
    lab --json branch -p 42 --limit 20

    # Raw API access
    lab api /projects/42/issues
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--json", action="store_true", dest="json_output", help="Print output as formatted JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging and detailed reports")
    parser.add_argument(
        "--token", default=None, help=f"GitLab access token (default: from {TOKEN_ENV} or config file)"
    )
    parser.add_argument(
        "--gitlab-url",
        default=None,
        help=f"GitLab instance URL (default: from {URL_ENV}, config file or https://gitlab.com)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    registry = get_command_registry()
    for name, cmd_cls in sorted(registry.items()):
        sub = subparsers.add_parser(name, help=cmd_cls.__doc__, description=cmd_cls.__doc__)
        cmd_cls.add_arguments(sub)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging
    logger = setup_logging(json_mode=args.json_output, verbose=args.verbose)

    cmd_cls = get_command_registry()[args.command]

    # Resolve configuration once, before any network call
    try:
        config = resolve_config(token=args.token, gitlab_url=args.gitlab_url)
        if cmd_cls.requires_token:
            config.require_token()
    except ConfigurationError as e:
        logger.error(str(e), extra={"command": args.command})
        return 1

    client = GitLabClient(base_url=config.base_url, token=config.token)
    command = cmd_cls(client=client, args=args)
    logger.debug(f"Running {args.command} against {client.api_url}")

    try:
        result = command.execute()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    if isinstance(result, Err):
        logger.error(f"{type(result.error).__name__}: {result.error}", extra={"command": args.command})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
