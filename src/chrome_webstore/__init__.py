"""Asynchronous client for the Chrome Web Store's internal endpoints."""

from chrome_webstore.api import detail, issues, items, reviews, version
from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.models import Detail, Issue, Item, Review
from chrome_webstore.core.domain.options import (
    DetailOptions,
    Feature,
    IssuesOptions,
    IssueType,
    ItemsOptions,
    RequestOptions,
    ReviewsOptions,
    SearchRating,
    SortOrder,
)
from chrome_webstore.core.errors import (
    InvalidOptions,
    NetworkError,
    NotFound,
    ParseError,
    WebStoreError,
)
from chrome_webstore.core.services.store_client import StoreClient

__version__ = "0.1.0"

__all__ = [
    "AppSettings",
    "Detail",
    "DetailOptions",
    "Feature",
    "InvalidOptions",
    "Issue",
    "IssueType",
    "IssuesOptions",
    "Item",
    "ItemsOptions",
    "NetworkError",
    "NotFound",
    "ParseError",
    "RequestOptions",
    "Review",
    "ReviewsOptions",
    "SearchRating",
    "SortOrder",
    "StoreClient",
    "WebStoreError",
    "detail",
    "issues",
    "items",
    "reviews",
    "version",
]
