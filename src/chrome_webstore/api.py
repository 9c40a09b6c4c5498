"""Module-level operations.

Each call builds its own `StoreClient` over a fresh `HttpxTransport`, so
calls share no state and may run concurrently.
"""

from __future__ import annotations

from typing import Any, Mapping

from chrome_webstore.adapters.http_client import HttpxTransport
from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.models import Detail, Issue, Item, Review
from chrome_webstore.core.domain.options import (
    DetailOptions,
    IssuesOptions,
    ItemsOptions,
    RequestOptions,
    ReviewsOptions,
)
from chrome_webstore.core.services.store_client import StoreClient


def _client(settings: AppSettings | None) -> StoreClient:
    settings = settings or AppSettings()
    return StoreClient(HttpxTransport(settings), settings)


async def detail(
    options: DetailOptions | Mapping[str, Any] | None = None,
    *,
    settings: AppSettings | None = None,
    **kwargs: Any,
) -> Detail:
    """Full details about a store listing (`id` required)."""

    return await _client(settings).detail(options, **kwargs)


async def items(
    options: ItemsOptions | Mapping[str, Any] | None = None,
    *,
    settings: AppSettings | None = None,
    **kwargs: Any,
) -> list[Item]:
    """List store listings (summary view), in upstream ranking order."""

    return await _client(settings).items(options, **kwargs)


async def reviews(
    options: ReviewsOptions | Mapping[str, Any] | None = None,
    *,
    settings: AppSettings | None = None,
    **kwargs: Any,
) -> list[Review]:
    """List reviews for a listing (`id` required)."""

    return await _client(settings).reviews(options, **kwargs)


async def issues(
    options: IssuesOptions | Mapping[str, Any] | None = None,
    *,
    settings: AppSettings | None = None,
    **kwargs: Any,
) -> list[Issue]:
    """List support issues for a listing (`id` required)."""

    return await _client(settings).issues(options, **kwargs)


async def version(
    options: RequestOptions | Mapping[str, Any] | None = None,
    *,
    settings: AppSettings | None = None,
    **kwargs: Any,
) -> str:
    """Currently active store API version."""

    return await _client(settings).version(options, **kwargs)
