#!/usr/bin/env python3
"""FirstFix CLI - search beginner-friendly issues and open their starter kits."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.logging import RichHandler

from .api import FirstFixClient
from .config import API_BASE, DEFAULT_SKILLS
from .display import console, display_error, display_search_results, display_starter_kit
from .errors import FirstFixError, MissingTargetError
from .models import IssueTarget, SearchResults
from .output import write_json
from .session import DetailState, IssueDetailView


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def parse_target(parts: list[str]) -> IssueTarget:
    """``owner/repo#N``, an issue URL, or ``OWNER REPO N``."""
    if len(parts) == 1:
        target = IssueTarget.parse(parts[0])
        if target:
            return target
    elif len(parts) == 3 and parts[2].isdigit() and int(parts[2]) > 0:
        owner, repo, number = parts
        if owner and repo and "/" not in owner + repo:
            return IssueTarget(owner=owner, repo=repo, number=int(number))
    raise MissingTargetError(f"Cannot derive owner/repo/number from: {' '.join(parts)}")


def open_starter_kit(client: FirstFixClient, target: IssueTarget, json_out: str | None = None) -> int:
    """Load and render the starter kit for ``target``; returns an exit code."""
    with IssueDetailView(client.fetch_starter_kit) as view:
        view.navigate(target)
        with console.status(f"Loading starter kit for {target.key}…"):
            snapshot = view.wait()

    if snapshot.state is not DetailState.READY:
        display_error(snapshot.error or "Failed to load starter kit")
        return 1

    display_starter_kit(snapshot.kit)
    if json_out:
        path = write_json(json_out, snapshot.kit)
        console.print(f"[green]Saved to {path}[/green]")
    return 0


def cmd_search(client: FirstFixClient, args) -> int:
    skills = args.skills or DEFAULT_SKILLS
    try:
        with console.status("Searching for matching issues…"):
            cards = client.search_issues(skills)
    except FirstFixError as e:
        display_error(str(e))
        return 1

    shown = cards[: max(args.top, 0)] if args.top is not None else cards
    display_search_results(shown, skills)

    if args.json_out:
        path = write_json(args.json_out, SearchResults(skills=skills, cards=tuple(shown)))
        console.print(f"[green]Saved to {path}[/green]")

    if args.open is None:
        return 0
    if not 1 <= args.open <= len(shown):
        display_error(f"No result #{args.open} to open")
        return 1
    target = shown[args.open - 1].navigation_target()
    if target is None:
        display_error("This result has no complete owner/repo/issue number; cannot open its starter kit")
        return 1
    return open_starter_kit(client, target, args.kit_json_out)


def cmd_kit(client: FirstFixClient, args) -> int:
    try:
        target = parse_target(args.target)
    except MissingTargetError as e:
        display_error(str(e))
        return 1
    return open_starter_kit(client, target, args.json_out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="firstfix",
        description="Find beginner-friendly GitHub issues and get a starter kit for one.",
    )
    parser.add_argument(
        "--api-base", default=None,
        help=f"Backend base URL (or set FIRSTFIX_API_BASE; default: {API_BASE})",
    )
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Request timeout in seconds (default: none)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search issues matching your skills")
    search.add_argument(
        "skills", nargs="?", default=None,
        help=f'Comma-separated skills (default: "{DEFAULT_SKILLS}")',
    )
    search.add_argument("--top", type=int, default=None, help="Maximum results to show")
    search.add_argument(
        "--open", type=int, default=None, metavar="K",
        help="Open the starter kit of result K (1-based)",
    )
    search.add_argument("--json-out", default=None, help="Write results to a JSON file")
    search.add_argument("--kit-json-out", default=None, help="Write the opened starter kit to a JSON file")
    search.set_defaults(handler=cmd_search)

    kit = sub.add_parser("kit", help="Show the starter kit for one issue")
    kit.add_argument(
        "target", nargs="+",
        help="owner/repo#NUMBER, a GitHub issue URL, or OWNER REPO NUMBER",
    )
    kit.add_argument("--json-out", default=None, help="Write the starter kit to a JSON file")
    kit.set_defaults(handler=cmd_kit)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    try:
        return _main_inner(argv)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        return 130


def _main_inner(argv: list[str] | None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    client = FirstFixClient(base_url=args.api_base, timeout=args.timeout)
    return args.handler(client, args)


if __name__ == "__main__":
    sys.exit(main())
