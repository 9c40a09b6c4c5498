import json
from typing import Any, Callable

import httpx
import pytest

from chrome_webstore.adapters.http_client import HttpxTransport
from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.models import Detail, Item
from chrome_webstore.core.services.store_client import StoreClient

LISTING_ID = "aapbdbdomjkkjkaonfhkkikfgjllcleb"


def item_row(
    id: str = LISTING_ID,
    name: str = "Google Translate",
    **overrides: Any,
) -> list[Any]:
    """Positional item row as sent by the ajax endpoints."""

    values = {
        "author": "translate.google.com",
        "title": "View translations easily as you browse the web.",
        "image_26x26": "//lh3.googleusercontent.com/icon26",
        "image_128x128": "https://lh3.googleusercontent.com/icon128",
        "image_141x90": None,
        "image_220x140": "https://lh3.googleusercontent.com/tile220",
        "image_440x280": "",
        "image_460x340": "https://lh3.googleusercontent.com/promo460",
        "category_slug": "7_productivity",
        "category_name": "Productivity",
        "rating_average": 4.3,
        "rating_count": 43000,
        "users": "10,000,000+ users",
        "url": f"https://chrome.google.com/webstore/detail/google-translate/{id}",
        "author_domain": "google.com",
        "author_url": "https://chrome.google.com/webstore/search/Google",
        "price": None,
        "status": "Featured",
    }
    values.update(overrides)
    return [
        id,
        name,
        values["author"],
        values["title"],
        values["image_26x26"],
        values["image_128x128"],
        values["image_141x90"],
        values["image_220x140"],
        values["image_440x280"],
        values["image_460x340"],
        values["category_slug"],
        values["category_name"],
        values["rating_average"],
        values["rating_count"],
        values["users"],
        values["url"],
        values["author_domain"],
        values["author_url"],
        values["price"],
        values["status"],
    ]


def serialize_item(item: Item) -> list[Any]:
    """Inverse of the item-row mapping, for round-trip checks."""

    images = item.images.model_dump(by_alias=True)
    return [
        item.id,
        item.name,
        item.author.name,
        item.title,
        images["26x26"],
        images["128x128"],
        images["141x90"],
        images["220x140"],
        images["440x280"],
        images["460x340"],
        item.category.slug,
        item.category.name,
        item.rating.average,
        item.rating.count,
        item.users,
        item.url,
        item.author.domain,
        item.author.url,
        item.price,
        item.status,
    ]


def xssi(payload: Any) -> str:
    return ")]}'\n\n" + json.dumps(payload)


def detail_body(
    row: list[Any] | None = None,
    *,
    related: list[list[Any]] | None = None,
    more: list[list[Any]] | None = None,
    **fields: Any,
) -> str:
    values = {
        "description": "Translate words and phrases while you browse.",
        "website": "https://translate.google.com",
        "support": "https://support.google.com/translate",
        "version": "2.0.13",
        "size": "1.2MiB",
        "published": "March 7, 2024",
        "languages": ["English", "Deutsch"],
        "developer": ["translate@google.com", "1600 Amphitheatre Pkwy", "https://policies.google.com"],
        "type": "Extension",
        "manifest": '{"manifest_version": 3}',
    }
    values.update(fields)
    section = [
        row if row is not None else item_row(),
        values["description"],
        values["website"],
        values["support"],
        values["version"],
        values["size"],
        values["published"],
        values["languages"],
        values["developer"],
        values["type"],
        values["manifest"],
    ]
    return xssi([["getitemdetailresponse", section, related, more]])


def serialize_detail(detail: Detail) -> str:
    return detail_body(
        serialize_item(detail),
        related=[serialize_item(item) for item in detail.related] if detail.related is not None else None,
        more=[serialize_item(item) for item in detail.more] if detail.more is not None else None,
        description=detail.description,
        website=detail.website,
        support=detail.support,
        version=detail.version,
        size=detail.size,
        published=detail.published,
        languages=list(detail.languages),
        developer=[detail.developer.email, detail.developer.address, detail.developer.policy],
        type=detail.type,
        manifest=detail.manifest,
    )


def items_body(rows: list[list[Any]]) -> str:
    return xssi([["getitemsresponse", rows, "token@5"]])


def review_annotation(
    rating: int,
    created: int,
    message: str = "Works great",
    author: str | None = "Ada",
    author_id: str | None = "1001",
) -> dict[str, Any]:
    return {
        "starRating": rating,
        "comment": message,
        "timestamp": created,
        "lastUpdated": created + 60,
        "entity": {
            "author": author,
            "authorId": author_id,
            "avatarUrl": "//lh3.googleusercontent.com/avatar",
        },
    }


def issue_annotation(issue_type: str, date: int, title: str = "Does not load") -> dict[str, Any]:
    return {
        "issueType": issue_type,
        "issueStatus": "open",
        "title": title,
        "comment": "Nothing happens after install.",
        "attributes": {"sbrowser": "Chrome 120", "sversion": "2.0.13"},
        "timestamp": date,
        "entity": {"author": "Grace", "authorId": "2002"},
    }


def annotations_body(annotations: list[dict[str, Any]]) -> str:
    return xssi({"channel": {"annotations": annotations}})


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_version=None, proxy_url=None)


@pytest.fixture
def make_client(settings: AppSettings) -> Callable[..., StoreClient]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> StoreClient:
        transport = HttpxTransport(settings, transport=httpx.MockTransport(handler))
        return StoreClient(transport, settings)

    return factory
