"""Command line entry point for inspecting GitHub pull requests."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import Any

from src.config import ConfigurationError, LogLevel, load_config

from .client import GitHubClient
from .exceptions import GitHubError
from .models import PullRequestStateFilter

logger = logging.getLogger(__name__)


def _split_repository(value: str) -> tuple[str, str]:
    owner, sep, repo = value.partition("/")
    if not sep or not owner or not repo:
        raise argparse.ArgumentTypeError(f"expected OWNER/REPO, got {value!r}")
    return owner, repo


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pr-minder", description="Query GitHub pull request status"
    )
    parser.add_argument("--config", help="Configuration file path")
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Override configured log level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check", help="Validate the token and show the rate limit")

    pull_parser = subparsers.add_parser("pull", help="Fetch a single pull request")
    pull_parser.add_argument("repository", type=_split_repository, help="OWNER/REPO")
    pull_parser.add_argument("number", type=int, help="Pull request number")

    pulls_parser = subparsers.add_parser("pulls", help="List pull requests")
    pulls_parser.add_argument("repository", type=_split_repository, help="OWNER/REPO")
    pulls_parser.add_argument(
        "--state",
        choices=[state.value for state in PullRequestStateFilter],
        default=PullRequestStateFilter.OPEN.value,
    )
    pulls_parser.add_argument("--page", type=int, default=1)
    pulls_parser.add_argument("--per-page", type=int, default=30)

    return parser


async def run_command(client: GitHubClient, args: argparse.Namespace) -> Any:
    """Execute a parsed command and return a JSON-serializable result."""
    if args.command == "check":
        valid = await client.validate_credential()
        rate_limit = client.get_rate_limit()
        return {
            "valid": valid,
            "rate_limit": asdict(rate_limit) if rate_limit else None,
        }

    owner, repo = args.repository
    if args.command == "pull":
        pull = await client.fetch_pull_request(owner, repo, args.number)
        return pull.model_dump(mode="json") if pull else None

    pulls = await client.list_pull_requests(
        owner, repo, state=args.state, page=args.page, per_page=args.per_page
    )
    return [pull.model_dump(mode="json") for pull in pulls]


async def main(argv: list[str] | None = None) -> int:
    """Main entry point, returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    level = args.log_level or config.logging.level.value
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=config.logging.format,
    )

    client_config = config.github.to_client_config()
    logger.debug(f"Using {client_config!r}")

    try:
        async with GitHubClient(client_config) as client:
            result = await run_command(client, args)
    except GitHubError as e:
        logger.error(f"GitHub request failed ({e.kind.value}): {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
