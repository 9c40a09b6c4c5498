"""Response mapping.

The store's internal endpoints answer with loosely structured JSON: ajax
endpoints use positional arrays, the reviews component uses objects. Both are
prefixed with an anti-XSSI guard. This module turns them into the domain
models, or raises `ParseError`/`NotFound` with the section that failed.

Upstream ordering is preserved; nothing is filtered or re-sorted here.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from chrome_webstore.core.domain.models import (
    Author,
    Detail,
    DetailDeveloper,
    Issue,
    Item,
    ItemAuthor,
    ItemCategory,
    ItemImages,
    ItemRating,
    Review,
)
from chrome_webstore.core.errors import NotFound, ParseError

XSSI_PREFIX = ")]}'"

_VERSION_RE = re.compile(r"[?&;]pv=(\d{8})\b")
_SLUG_RE = re.compile(r"/detail/([^/?#]+)/")

# Positions inside an item row.
_ITEM_FIELDS = (
    "id",
    "name",
    "author",
    "title",
    "image_26x26",
    "image_128x128",
    "image_141x90",
    "image_220x140",
    "image_440x280",
    "image_460x340",
    "category_slug",
    "category_name",
    "rating_average",
    "rating_count",
    "users",
    "url",
    "author_domain",
    "author_url",
    "price",
    "status",
)

# Positions inside the detail section (index 0 is the item row).
_DETAIL_FIELDS = (
    "item",
    "description",
    "website",
    "support",
    "version",
    "size",
    "published",
    "languages",
    "developer",
    "type",
    "manifest",
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_json(text: str, *, section: str) -> Any:
    """Strip the anti-XSSI guard and decode the JSON body."""

    body = text.lstrip()
    if body.startswith(XSSI_PREFIX):
        body = body[len(XSSI_PREFIX):]
    try:
        return json.loads(body)
    except ValueError as exc:
        raise ParseError(f"invalid JSON ({exc})", section=section) from exc


def _build(model: Callable[..., ModelT], section: str, **values: Any) -> ModelT:
    try:
        return model(**values)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ParseError(first.get("msg", "invalid value"), section=section, field=field) from exc


def _envelope(payload: Any, *, tag: str, section: str) -> list[Any]:
    """Return the `[tag, ...]` entry from an ajax response."""

    if not isinstance(payload, list) or not payload or not isinstance(payload[0], list):
        raise ParseError("expected a list of response entries", section=section)
    entry = payload[0]
    if not entry or entry[0] != tag:
        raise ParseError(f"expected '{tag}' entry", section=section)
    return entry


def _at(row: list[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def _text(value: Any, *, section: str, field: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ParseError(f"expected text, got {type(value).__name__}", section=section, field=field)
    return str(value)


def _optional_text(value: Any, *, section: str, field: str) -> str | None:
    text = _text(value, section=section, field=field)
    return text or None


def _image(value: Any, *, section: str, field: str) -> str | None:
    url = _optional_text(value, section=section, field=field)
    if url and url.startswith("//"):
        return "https:" + url
    return url


def _number(value: Any, *, section: str, field: str, default: float | None = None) -> float:
    if value is None and default is not None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ParseError(f"expected a number, got {type(value).__name__}", section=section, field=field)
    try:
        number = float(value)
    except ValueError as exc:
        raise ParseError(f"expected a number, got {value!r}", section=section, field=field) from exc
    if not math.isfinite(number):
        raise ParseError(f"expected a finite number, got {value!r}", section=section, field=field)
    return number


def _integer(value: Any, *, section: str, field: str, default: int | None = None) -> int:
    return int(_number(value, section=section, field=field, default=default))


def _required_text(value: Any, *, section: str, field: str) -> str:
    text = _text(value, section=section, field=field)
    if not text:
        raise ParseError("missing value", section=section, field=field)
    return text


def slug_from_url(url: str) -> str:
    match = _SLUG_RE.search(url)
    return match.group(1) if match else ""


def map_item(row: Any, *, section: str = "item") -> Item:
    return _build(Item, section, **_item_values(row, section=section))


def _item_values(row: Any, *, section: str) -> dict[str, Any]:
    if not isinstance(row, list):
        raise ParseError(f"expected an item row, got {type(row).__name__}", section=section)
    raw = {name: _at(row, index) for index, name in enumerate(_ITEM_FIELDS)}

    url = _text(raw["url"], section=section, field="url")
    values: dict[str, Any] = {
        "id": _required_text(raw["id"], section=section, field="id"),
        "name": _text(raw["name"], section=section, field="name"),
        "title": _text(raw["title"], section=section, field="title"),
        "slug": slug_from_url(url),
        "url": url,
        "author": _build(
            ItemAuthor,
            section,
            name=_text(raw["author"], section=section, field="author.name"),
            domain=_optional_text(raw["author_domain"], section=section, field="author.domain"),
            url=_optional_text(raw["author_url"], section=section, field="author.url"),
        ),
        "users": _text(raw["users"], section=section, field="users"),
        "rating": _build(
            ItemRating,
            section,
            average=_number(raw["rating_average"], section=section, field="rating.average", default=0.0),
            count=_integer(raw["rating_count"], section=section, field="rating.count", default=0),
        ),
        "price": _optional_text(raw["price"], section=section, field="price"),
        "category": _build(
            ItemCategory,
            section,
            name=_text(raw["category_name"], section=section, field="category.name"),
            slug=_text(raw["category_slug"], section=section, field="category.slug"),
        ),
        "images": _build(
            ItemImages,
            section,
            size_26x26=_image(raw["image_26x26"], section=section, field="images.26x26"),
            size_128x128=_image(raw["image_128x128"], section=section, field="images.128x128"),
            size_141x90=_image(raw["image_141x90"], section=section, field="images.141x90"),
            size_220x140=_image(raw["image_220x140"], section=section, field="images.220x140"),
            size_440x280=_image(raw["image_440x280"], section=section, field="images.440x280"),
            size_460x340=_image(raw["image_460x340"], section=section, field="images.460x340"),
        ),
        "status": _optional_text(raw["status"], section=section, field="status"),
    }
    return values


def _item_list(value: Any, *, section: str) -> list[Item]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"expected a list, got {type(value).__name__}", section=section)
    return [map_item(row, section=f"{section}[{index}]") for index, row in enumerate(value)]


def map_detail(text: str, *, listing_id: str, related: bool = False, more: bool = False) -> Detail:
    """Map a `getitemdetailresponse` body to `Detail`.

    `related`/`more` are only parsed when requested; otherwise they are left
    unset on the model.
    """

    entry = _envelope(decode_json(text, section="detail"), tag="getitemdetailresponse", section="detail")
    section = _at(entry, 1)
    if not section:
        raise NotFound("detail", listing_id)
    if not isinstance(section, list):
        raise ParseError(f"expected a list, got {type(section).__name__}", section="detail")

    raw = {name: _at(section, index) for index, name in enumerate(_DETAIL_FIELDS)}
    values = _item_values(raw["item"], section="detail.item")

    languages = raw["languages"] or []
    if not isinstance(languages, list):
        raise ParseError("expected a list", section="detail", field="languages")
    developer = raw["developer"] or []
    if not isinstance(developer, list):
        raise ParseError("expected a list", section="detail", field="developer")

    values.update(
        description=_text(raw["description"], section="detail", field="description"),
        website=_text(raw["website"], section="detail", field="website"),
        support=_text(raw["support"], section="detail", field="support"),
        version=_text(raw["version"], section="detail", field="version"),
        size=_text(raw["size"], section="detail", field="size"),
        published=_text(raw["published"], section="detail", field="published"),
        purchases=None,
        languages=[_text(lang, section="detail", field="languages") for lang in languages],
        developer=_build(
            DetailDeveloper,
            "detail",
            email=_optional_text(_at(developer, 0), section="detail", field="developer.email"),
            address=_optional_text(_at(developer, 1), section="detail", field="developer.address"),
            policy=_optional_text(_at(developer, 2), section="detail", field="developer.policy"),
        ),
        type=_text(raw["type"], section="detail", field="type"),
        manifest=_text(raw["manifest"], section="detail", field="manifest"),
    )
    if related:
        values["related"] = _item_list(_at(entry, 2), section="related")
    if more:
        values["more"] = _item_list(_at(entry, 3), section="more")
    return _build(Detail, "detail", **values)


def map_items(text: str, *, count: int) -> list[Item]:
    entry = _envelope(decode_json(text, section="items"), tag="getitemsresponse", section="items")
    return _item_list(_at(entry, 1), section="items")[:count]


def _annotations(text: str, *, section: str) -> list[dict[str, Any]]:
    payload = decode_json(text, section=section)
    if not isinstance(payload, dict) or not isinstance(payload.get("channel"), dict):
        raise ParseError("missing channel", section=section)
    annotations = payload["channel"].get("annotations")
    if annotations is None:
        return []
    if not isinstance(annotations, list):
        raise ParseError("expected a list", section=section, field="annotations")
    for index, annotation in enumerate(annotations):
        if not isinstance(annotation, dict):
            raise ParseError("expected an object", section=f"{section}[{index}]")
    return annotations


def _author(annotation: dict[str, Any], *, section: str) -> Author:
    entity = annotation.get("entity") or {}
    if not isinstance(entity, dict):
        raise ParseError("expected an object", section=section, field="entity")
    return _build(
        Author,
        section,
        id=_optional_text(entity.get("authorId"), section=section, field="author.id"),
        name=_optional_text(entity.get("author"), section=section, field="author.name"),
        avatar=_image(entity.get("avatarUrl"), section=section, field="author.avatar"),
    )


def _timestamp(value: Any, *, section: str, field: str) -> int:
    if value is None:
        raise ParseError("missing value", section=section, field=field)
    return _integer(value, section=section, field=field)


def map_reviews(text: str) -> list[Review]:
    reviews: list[Review] = []
    for index, annotation in enumerate(_annotations(text, section="reviews")):
        section = f"reviews[{index}]"
        created = _timestamp(annotation.get("timestamp"), section=section, field="created")
        updated = annotation.get("lastUpdated")
        reviews.append(
            _build(
                Review,
                section,
                rating=annotation.get("starRating"),
                message=_text(annotation.get("comment"), section=section, field="message"),
                created=created,
                updated=created if updated is None else _timestamp(updated, section=section, field="updated"),
                author=_author(annotation, section=section),
            )
        )
    return reviews


def map_issues(text: str) -> list[Issue]:
    issues: list[Issue] = []
    for index, annotation in enumerate(_annotations(text, section="issues")):
        section = f"issues[{index}]"
        attributes = annotation.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise ParseError("expected an object", section=section, field="attributes")
        issues.append(
            _build(
                Issue,
                section,
                type=_required_text(annotation.get("issueType"), section=section, field="type"),
                status=_text(annotation.get("issueStatus"), section=section, field="status"),
                title=_text(annotation.get("title"), section=section, field="title"),
                description=_text(annotation.get("comment"), section=section, field="description"),
                browser=_text(attributes.get("sbrowser"), section=section, field="browser"),
                version=_text(attributes.get("sversion"), section=section, field="version"),
                date=_timestamp(annotation.get("timestamp"), section=section, field="date"),
                author=_author(annotation, section=section),
            )
        )
    return issues


def map_version(text: str) -> str:
    match = _VERSION_RE.search(text)
    if not match:
        raise ParseError("no store version found in page", section="version")
    return match.group(1)
