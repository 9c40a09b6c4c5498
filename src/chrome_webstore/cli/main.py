"""`chrome-webstore` command line.

Thin layer over `StoreClient`: parse flags, run one operation, render the
result as Rich tables or JSON.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional

import typer
from rich.console import Console, Group
from rich.logging import RichHandler

from chrome_webstore.adapters.http_client import HttpxTransport
from chrome_webstore.adapters.json_exporter import dumps_result, export_result_json
from chrome_webstore.cli import doctor
from chrome_webstore.cli.ui_components import (
    build_detail_panel,
    build_issues_table,
    build_items_table,
    build_reviews_table,
)
from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.options import Feature, IssueType, SortOrder
from chrome_webstore.core.errors import InvalidOptions, WebStoreError
from chrome_webstore.core.services.store_client import StoreClient
from chrome_webstore.utils.logger import setup_logger

app = typer.Typer(no_args_is_help=True, help="Query the Chrome Web Store's internal endpoints.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def build_client(settings: AppSettings) -> StoreClient:
    return StoreClient(HttpxTransport(settings), settings)


def _transport_kwargs(proxy: Optional[str], timeout: Optional[float]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if proxy:
        kwargs["proxy"] = proxy
    if timeout is not None:
        kwargs["timeout"] = timeout
    return kwargs


def _run(
    call: Callable[[StoreClient], Awaitable[Any]],
    *,
    render: Callable[[Any], Any],
    json_output: bool,
    output: Optional[Path],
) -> None:
    settings = AppSettings()
    client = build_client(settings)
    try:
        result = asyncio.run(call(client))
    except InvalidOptions as exc:
        _err_console.print(f"[red]Invalid options:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except WebStoreError as exc:
        _err_console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _err_console.print(f"[green]Saved:[/green] {path}")
    if json_output:
        typer.echo(dumps_result(result))
    elif output is None:
        _console.print(render(result))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Chrome Web Store client."""

    level = logging.DEBUG if verbose else AppSettings().log_level
    setup_logger(
        "chrome_webstore",
        level=level,
        format_string="%(message)s",
        handler=RichHandler(console=_err_console, show_path=False),
    )


@app.command()
def detail(
    id: str = typer.Argument(..., help="Listing ID."),
    related: bool = typer.Option(False, "--related", help="Include related listings."),
    more: bool = typer.Option(False, "--more", help="Include more listings from the developer."),
    locale: Optional[str] = typer.Option(None, "--locale", "-l"),
    api_version: Optional[str] = typer.Option(None, "--api-version", help="Store API version."),
    proxy: Optional[str] = typer.Option(None, "--proxy"),
    timeout: Optional[float] = typer.Option(None, "--timeout"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON to a file."),
) -> None:
    """Full details about a listing."""

    def render(result: Any) -> Any:
        if not (result.related or result.more):
            return build_detail_panel(result)
        parts: List[Any] = [build_detail_panel(result)]
        if result.related:
            parts.append(build_items_table(result.related, title="Related"))
        if result.more:
            parts.append(build_items_table(result.more, title="More from this developer"))
        return Group(*parts)

    _run(
        lambda client: client.detail(
            id=id,
            related=related,
            more=more,
            locale=locale,
            version=api_version,
            **_transport_kwargs(proxy, timeout),
        ),
        render=render,
        json_output=json_output,
        output=output,
    )


@app.command()
def items(
    search: Optional[str] = typer.Option(None, "--search", "-s"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    rating: Optional[int] = typer.Option(None, "--rating", help="Minimum stars (2-5)."),
    feature: List[Feature] = typer.Option([], "--feature", "-f", help="Repeat to combine."),
    count: int = typer.Option(5, "--count", "-n"),
    offset: Optional[int] = typer.Option(None, "--offset", help="Requires --category."),
    locale: Optional[str] = typer.Option(None, "--locale", "-l"),
    api_version: Optional[str] = typer.Option(None, "--api-version"),
    proxy: Optional[str] = typer.Option(None, "--proxy"),
    timeout: Optional[float] = typer.Option(None, "--timeout"),
    json_output: bool = typer.Option(False, "--json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Search or browse listings."""

    _run(
        lambda client: client.items(
            search=search,
            category=category,
            rating=rating,
            features=feature,
            count=count,
            offset=offset,
            locale=locale,
            version=api_version,
            **_transport_kwargs(proxy, timeout),
        ),
        render=build_items_table,
        json_output=json_output,
        output=output,
    )


@app.command()
def reviews(
    id: str = typer.Argument(..., help="Listing ID."),
    count: int = typer.Option(5, "--count", "-n"),
    offset: int = typer.Option(0, "--offset"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Only reviews in this locale."),
    sort: SortOrder = typer.Option(SortOrder.HELPFUL, "--sort"),
    api_version: Optional[str] = typer.Option(None, "--api-version"),
    proxy: Optional[str] = typer.Option(None, "--proxy"),
    timeout: Optional[float] = typer.Option(None, "--timeout"),
    json_output: bool = typer.Option(False, "--json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """User reviews of a listing."""

    _run(
        lambda client: client.reviews(
            id=id,
            count=count,
            offset=offset,
            locale=locale,
            sort=sort,
            version=api_version,
            **_transport_kwargs(proxy, timeout),
        ),
        render=build_reviews_table,
        json_output=json_output,
        output=output,
    )


@app.command()
def issues(
    id: str = typer.Argument(..., help="Listing ID."),
    type: Optional[IssueType] = typer.Option(None, "--type", "-t"),
    count: int = typer.Option(5, "--count", "-n"),
    page: int = typer.Option(0, "--page"),
    api_version: Optional[str] = typer.Option(None, "--api-version"),
    proxy: Optional[str] = typer.Option(None, "--proxy"),
    timeout: Optional[float] = typer.Option(None, "--timeout"),
    json_output: bool = typer.Option(False, "--json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Support issues reported for a listing."""

    _run(
        lambda client: client.issues(
            id=id,
            type=type,
            count=count,
            page=page,
            version=api_version,
            **_transport_kwargs(proxy, timeout),
        ),
        render=build_issues_table,
        json_output=json_output,
        output=output,
    )


@app.command()
def version(
    proxy: Optional[str] = typer.Option(None, "--proxy"),
    timeout: Optional[float] = typer.Option(None, "--timeout"),
    json_output: bool = typer.Option(False, "--json"),
) -> None:
    """Currently active store API version."""

    _run(
        lambda client: client.version(**_transport_kwargs(proxy, timeout)),
        render=lambda result: result,
        json_output=json_output,
        output=None,
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
