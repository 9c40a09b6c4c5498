"""Result models (Pydantic v2).

These describe *what* the store returns, not *how* it is fetched. Every model
is frozen: one instance is built per response and handed to the caller.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_serializer
from pydantic.config import ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ItemAuthor(_Frozen):
    name: str = Field(..., description="Publisher display name.")
    domain: str | None = Field(
        default=None,
        description="Verified publisher domain, if any.",
    )
    url: str | None = Field(default=None, description="Publisher page URL.")


class ItemRating(_Frozen):
    average: float = Field(..., ge=0.0, le=5.0, description="Average star rating (0..5).")
    count: int = Field(..., ge=0, description="Number of ratings.")


class ItemCategory(_Frozen):
    name: str
    slug: str


class ItemImages(_Frozen):
    """The six fixed-size image variants served by the store.

    Keys are a closed set; use `model_dump(by_alias=True)` to get the
    store's `WxH` names.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    size_26x26: str | None = Field(default=None, alias="26x26")
    size_128x128: str | None = Field(default=None, alias="128x128")
    size_141x90: str | None = Field(default=None, alias="141x90")
    size_220x140: str | None = Field(default=None, alias="220x140")
    size_440x280: str | None = Field(default=None, alias="440x280")
    size_460x340: str | None = Field(default=None, alias="460x340")


class Item(_Frozen):
    """Summary view of a store listing."""

    id: str = Field(..., min_length=1, description="Listing identifier.")
    name: str
    title: str = Field(..., description="Short description shown under the name.")
    slug: str
    url: str
    author: ItemAuthor
    users: str = Field(..., description="User count as displayed (e.g. '10,000+ users').")
    rating: ItemRating
    price: str | None = None
    category: ItemCategory
    images: ItemImages
    status: str | None = None


class DetailDeveloper(_Frozen):
    email: str | None = None
    address: str | None = None
    policy: str | None = Field(default=None, description="Privacy policy URL.")


class Detail(Item):
    """Full view of a store listing.

    `related` and `more` stay `None` unless they were requested, and are then
    left out of `model_dump()`. When requested they are lists (possibly
    empty).
    """

    description: str
    website: str
    support: str
    version: str
    size: str
    published: str
    purchases: None = Field(default=None, description="Always null upstream.")
    languages: list[str] = Field(default_factory=list)
    developer: DetailDeveloper
    type: str
    manifest: str
    related: list[Item] | None = None
    more: list[Item] | None = None

    @model_serializer(mode="wrap")
    def _drop_unrequested(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        for key in ("related", "more"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class Author(_Frozen):
    """Author of a review or an issue (id and name may be hidden)."""

    id: str | None = None
    name: str | None = None
    avatar: str | None = None


class Review(_Frozen):
    rating: Literal[1, 2, 3, 4, 5] = Field(..., description="Star rating.")
    message: str
    created: int = Field(..., description="Creation timestamp (epoch, as sent upstream).")
    updated: int = Field(..., description="Last update timestamp (epoch, as sent upstream).")
    author: Author


class Issue(_Frozen):
    type: str = Field(..., description="problem, question or suggestion.")
    status: str
    title: str
    description: str
    browser: str
    version: str
    date: int
    author: Author
