"""Rich terminal output for search results and starter kits."""

from datetime import datetime

from rich import box
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.syntax import Syntax
from rich.text import Text

from .config import HINTS_FALLBACK_NOTE, MAX_CARD_TAGS, NO_RUN_HINTS_NOTE
from .linkify import CodeLink
from .models import SearchResultCard
from .starter_kit import StarterKitPayload

console = Console()

LINK_STYLE = "underline blue"


def _link(label: str, url: str | None, style: str = LINK_STYLE) -> Text:
    if not url:
        return Text(label)
    return Text(label, style=Style.parse(style) + Style(link=url))


def format_updated(updated_at: str) -> str:
    """ISO timestamp to ``Mar 4, 2025``; unparseable values are shown as-is."""
    if not updated_at:
        return "unknown"
    try:
        dt = datetime.fromisoformat(updated_at.replace("Z", "+00:00"))
    except ValueError:
        return updated_at
    return f"{dt:%b} {dt.day}, {dt.year}"


def card_tags(card: SearchResultCard) -> tuple[list[str], list[str], int]:
    """Labels and topics to show, plus how many were left out."""
    labels = list(card.issue.labels[:MAX_CARD_TAGS])
    topics = list(card.repo.topics[:MAX_CARD_TAGS])
    total = len(card.issue.labels) + len(card.repo.topics)
    hidden = total - 2 * MAX_CARD_TAGS if total > 2 * MAX_CARD_TAGS else 0
    return labels, topics, hidden


def render_card(rank: int, card: SearchResultCard) -> Panel:
    repo, issue = card.repo, card.issue

    title = Text(f"{rank}. ", style="bold")
    title.append_text(_link(issue.title or "(untitled)", issue.url, "bold cyan"))

    meta = Text()
    meta.append_text(_link(repo.name_with_owner, repo.url, "bold"))
    meta.append(f"  #{issue.number}", style="dim")
    meta.append(f"  ★ {repo.stargazer_count:,}", style="yellow")

    details = Text()
    if repo.primary_language:
        details.append(repo.primary_language, style="magenta")
        details.append("  •  ", style="dim")
    details.append(f"Updated {format_updated(issue.updated_at)}", style="dim")

    labels, topics, hidden = card_tags(card)
    tags = Text()
    for label in labels:
        tags.append(f" {label} ", style="black on green")
        tags.append(" ")
    for topic in topics:
        tags.append(f" {topic} ", style="black on magenta")
        tags.append(" ")
    if hidden:
        tags.append(f"+{hidden} more", style="dim")

    return Panel(Group(title, meta, details, tags), box=box.ROUNDED)


def display_search_results(cards: list[SearchResultCard], skills: str = ""):
    """Display search cards in backend relevance order."""
    if not cards:
        console.print("\n[yellow]No matches found.[/yellow]")
        console.print("[dim]Try different skills or technologies to find more issues.[/dim]")
        return

    heading = f"Found {len(cards)} matches"
    if skills:
        heading += f" for [cyan]{escape(skills)}[/cyan]"
    console.print()
    console.print(f"[bold]{heading}[/bold]")
    for rank, card in enumerate(cards, 1):
        console.print(render_card(rank, card))


def segments_text(segments: list) -> Text:
    """Hint line with code references as terminal hyperlinks."""
    text = Text()
    for part in segments:
        if isinstance(part, CodeLink):
            text.append("(")
            text.append_text(_link(part.label, part.url, "underline cyan"))
            text.append(")")
        else:
            text.append(part)
    return text


def _bullets(heading: str, lines) -> list:
    if not lines:
        return []
    out = [Text(heading, style="bold")]
    for line in lines:
        item = Text("  • ")
        item.append_text(line if isinstance(line, Text) else Text(line))
        out.append(item)
    return out


def _section(title: str, *renderables) -> Panel:
    return Panel(Group(*renderables), title=f"[bold]{title}[/bold]", title_align="left", box=box.ROUNDED)


def render_roadmap(kit: StarterKitPayload) -> list:
    rows = []
    for i, step in enumerate(kit.roadmap, 1):
        line = Text(f"{i}. {step.text}")
        if step.action_url:
            line.append(" - ")
            line.append_text(_link("open ↗", step.action_url))
        rows.append(line)
        if step.code_block:
            rows.append(Syntax(step.code_block, "bash", theme="ansi_dark", padding=(0, 3)))
    return rows


def render_hints(kit: StarterKitPayload) -> list:
    hints = kit.hints
    rows = []
    if hints.high_level_goal:
        goal = Text("High-level goal: ", style="bold")
        goal.append(hints.high_level_goal)
        rows.append(goal)
    rows += _bullets("Where to work", [segments_text(s) for s in kit.where_to_work_segments])
    rows += _bullets("What to change", [segments_text(s) for s in kit.what_to_change_segments])
    rows += _bullets("How to verify", hints.how_to_verify)
    rows += _bullets("Gotchas", hints.gotchas)
    if hints.is_empty:
        rows.append(Text("No hints available for this issue.", style="dim"))
    if kit.hints_fallback:
        rows.append(Text(HINTS_FALLBACK_NOTE, style="dim italic"))
    return rows


def display_starter_kit(kit: StarterKitPayload):
    """Display the full starter kit for one issue."""
    header = Text("Starter Kit", style="bold")
    header.append(f"\n{kit.owner}/{kit.repo}", style="cyan")
    header.append(f"  Issue #{kit.issue.number}")
    if kit.short_sha:
        header.append(f"  SHA {kit.short_sha}", style="dim")
    console.print()
    console.print(Panel(header, box=box.DOUBLE))

    summary = Text("📌 " if kit.issue.summary else "")
    summary.append(kit.summary)
    summary.append(" ")
    summary.append_text(_link("Read the full issue ↗", kit.issue.url))
    console.print(_section("What this issue is asking", summary))

    console.print(_section("Next steps to contribute", *render_roadmap(kit)))

    hints_title = "Hints & ideas"
    if kit.hints_fallback:
        hints_title += " (quick analysis)"
    console.print(_section(hints_title, *render_hints(kit)))

    if kit.run_hints:
        run_rows = [Text("  • ").append(hint, style="bold green") for hint in kit.run_hints]
    else:
        run_rows = [Text(NO_RUN_HINTS_NOTE, style="dim")]
    console.print(_section("Run locally", *run_rows))


def display_error(message: str):
    console.print(f"[red]Error: {escape(message)}[/red]")
