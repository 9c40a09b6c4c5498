"""Rich components for the CLI.

Kept apart from the commands so tables and panels can be reused and the
commands stay free of layout details.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from chrome_webstore.core.domain.models import Detail, Issue, Item, Review


def _stars(value: float) -> str:
    return f"{value:.1f}★"


def format_timestamp(value: int) -> str:
    """Render an epoch value (seconds or milliseconds) as a UTC date."""

    seconds = value / 1000 if value > 10**11 else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        # Outside the platform's datetime range; show the raw value.
        return str(value)


def build_items_table(items: Sequence[Item], *, title: str = "Items") -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Author", style="magenta")
    table.add_column("Rating", style="yellow", justify="right")
    table.add_column("Users", style="green", justify="right")
    table.add_column("Category", style="dim")
    for position, item in enumerate(items, start=1):
        table.add_row(
            str(position),
            item.id,
            item.name,
            item.author.name,
            f"{_stars(item.rating.average)} ({item.rating.count})",
            item.users,
            item.category.name,
        )
    return table


def build_detail_panel(detail: Detail) -> Panel:
    body = Text()
    body.append(f"{detail.title}\n\n", style="italic")
    rows = (
        ("ID", detail.id),
        ("Author", detail.author.name + (f" ({detail.author.domain})" if detail.author.domain else "")),
        ("Version", detail.version),
        ("Size", detail.size),
        ("Published", detail.published),
        ("Users", detail.users),
        ("Rating", f"{_stars(detail.rating.average)} ({detail.rating.count})"),
        ("Category", detail.category.name),
        ("Type", detail.type),
        ("Website", detail.website),
        ("Support", detail.support),
        ("Languages", ", ".join(detail.languages)),
    )
    for label, value in rows:
        if value:
            body.append(f"{label}: ", style="bold")
            body.append(f"{value}\n")
    if detail.developer.email:
        body.append("Developer: ", style="bold")
        body.append(f"{detail.developer.email}\n")
    if detail.description:
        body.append("\n" + detail.description.strip())

    return Panel(body, title=Text(detail.name, style="bold cyan"), border_style="cyan")


def build_reviews_table(reviews: Sequence[Review]) -> Table:
    table = Table(title="Reviews")
    table.add_column("Rating", style="yellow", no_wrap=True)
    table.add_column("Author", style="magenta")
    table.add_column("Created", style="dim", no_wrap=True)
    table.add_column("Message", style="white")
    for review in reviews:
        table.add_row(
            "★" * review.rating,
            review.author.name or "-",
            format_timestamp(review.created),
            review.message,
        )
    return table


def build_issues_table(issues: Sequence[Issue]) -> Table:
    table = Table(title="Issues")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Status", style="green")
    table.add_column("Date", style="dim", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Browser", style="dim")
    for issue in issues:
        table.add_row(
            issue.type,
            issue.status,
            format_timestamp(issue.date),
            issue.title,
            issue.browser,
        )
    return table
