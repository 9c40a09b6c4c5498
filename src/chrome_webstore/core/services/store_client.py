"""StoreClient: the single request pipeline.

Every operation runs the same linear flow:
options validation -> request construction -> transport -> response mapping.
The client keeps no session, cache or pool; concurrent calls share nothing
but the (immutable) settings and transport objects.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.models import Detail, Issue, Item, Review
from chrome_webstore.core.domain.options import (
    DetailOptions,
    IssuesOptions,
    ItemsOptions,
    RequestOptions,
    ReviewsOptions,
    coerce_options,
)
from chrome_webstore.core.errors import NetworkError, NotFound, WebStoreError
from chrome_webstore.core.interfaces.transport import RawResponse, Transport
from chrome_webstore.core.services import request_builder, response_mapper
from chrome_webstore.core.services.request_builder import StoreRequest

logger = logging.getLogger(__name__)


class StoreClient:
    """Asynchronous client for the store's internal endpoints.

    Each method accepts either an options model, a mapping, or keyword
    arguments (or a mix, keywords winning).
    """

    def __init__(self, transport: Transport, settings: AppSettings | None = None) -> None:
        self._transport = transport
        self._settings = settings or AppSettings()

    async def detail(self, options: DetailOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> Detail:
        opts = coerce_options(DetailOptions, options, **kwargs)
        request = request_builder.build_detail_request(opts, self._settings)
        response = await self._send(request)
        result = self._map(
            request,
            response_mapper.map_detail,
            response.text,
            listing_id=opts.id,
            related=opts.related,
            more=opts.more,
        )
        logger.debug(
            "detail %s mapped (related=%s, more=%s)",
            opts.id,
            None if result.related is None else len(result.related),
            None if result.more is None else len(result.more),
        )
        return result

    async def items(self, options: ItemsOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> list[Item]:
        opts = coerce_options(ItemsOptions, options, **kwargs)
        request = request_builder.build_items_request(opts, self._settings)
        response = await self._send(request)
        result = self._map(request, response_mapper.map_items, response.text, count=opts.count)
        logger.debug("items mapped %d/%d", len(result), opts.count)
        return result

    async def reviews(
        self, options: ReviewsOptions | Mapping[str, Any] | None = None, **kwargs: Any
    ) -> list[Review]:
        opts = coerce_options(ReviewsOptions, options, **kwargs)
        request = request_builder.build_reviews_request(opts, self._settings)
        response = await self._send(request)
        result = self._map(request, response_mapper.map_reviews, response.text)
        logger.debug("reviews for %s mapped %d", opts.id, len(result))
        return result

    async def issues(self, options: IssuesOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> list[Issue]:
        opts = coerce_options(IssuesOptions, options, **kwargs)
        request = request_builder.build_issues_request(opts, self._settings)
        response = await self._send(request)
        result = self._map(request, response_mapper.map_issues, response.text)
        logger.debug("issues for %s mapped %d", opts.id, len(result))
        return result

    async def version(self, options: RequestOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> str:
        opts = coerce_options(RequestOptions, options, **kwargs)
        request = request_builder.build_version_request(opts, self._settings)
        response = await self._send(request)
        result = self._map(request, response_mapper.map_version, response.text)
        logger.debug("store version %s", result)
        return result

    async def _send(self, request: StoreRequest) -> RawResponse:
        logger.debug("%s %s %s", request.resource, request.method, request.url)
        response = await self._transport.send(request)
        logger.debug("%s answered %s from %s", request.resource, response.status_code, response.url)
        self._check_status(request, response)
        return response

    @staticmethod
    def _check_status(request: StoreRequest, response: RawResponse) -> None:
        if response.status_code == 404 and request.listing_id:
            logger.warning("%s %s not found upstream", request.resource, request.listing_id)
            raise NotFound(request.resource, request.listing_id)
        if not 200 <= response.status_code < 300:
            logger.warning("%s answered HTTP %s", request.resource, response.status_code)
            raise NetworkError(
                f"{request.resource} request returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

    @staticmethod
    def _map(request: StoreRequest, mapper: Any, text: str, **kwargs: Any) -> Any:
        try:
            return mapper(text, **kwargs)
        except WebStoreError as exc:
            logger.warning("%s response rejected: %s", request.resource, exc)
            raise
