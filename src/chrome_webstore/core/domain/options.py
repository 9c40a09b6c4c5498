"""Request options accepted by the five operations.

Options are transient: one instance is consumed per call. Enumerated values
are closed enums so invalid input is rejected at the boundary, before any
request is built.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic.config import ConfigDict

from chrome_webstore.core.errors import InvalidOptions


class Feature(str, Enum):
    """Item feature filters."""

    OFFLINE = "offline"
    GOOGLE = "google"
    FREE = "free"
    ANDROID = "android"
    GDRIVE = "gdrive"


class SearchRating(IntEnum):
    """Minimum star rating accepted by the item search.

    The store cannot filter on 1 star, so 1 is not a member.
    """

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5


class SortOrder(str, Enum):
    HELPFUL = "helpful"
    RECENT = "recent"


class IssueType(str, Enum):
    PROBLEM = "problem"
    QUESTION = "question"
    SUGGESTION = "suggestion"


class RequestOptions(BaseModel):
    """Transport settings passed through verbatim to the HTTP layer."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    proxy: str | None = Field(default=None, description="Proxy URL for this call.")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra request headers.")
    timeout: float | None = Field(default=None, gt=0, description="Timeout override (seconds).")


class _ListingOptions(RequestOptions):
    id: str = Field(..., min_length=1, description="Listing identifier.")
    version: str | None = Field(default=None, min_length=1, description="Store API version.")


class DetailOptions(_ListingOptions):
    related: bool = Field(default=False, description="Include related listings.")
    more: bool = Field(default=False, description="Include more listings from the same developer.")
    locale: str | None = Field(default=None, min_length=2)


class ItemsOptions(RequestOptions):
    search: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    rating: SearchRating | None = None
    features: frozenset[Feature] = Field(default_factory=frozenset)
    count: int = Field(default=5, ge=0)
    offset: int | None = Field(default=None, ge=0, description="Requires `category`.")
    locale: str | None = Field(default=None, min_length=2)
    version: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _offset_needs_category(self) -> "ItemsOptions":
        if self.offset is not None and self.category is None:
            raise ValueError("offset requires category")
        return self


class ReviewsOptions(_ListingOptions):
    count: int = Field(default=5, ge=0)
    offset: int = Field(default=0, ge=0)
    locale: str | None = Field(default=None, min_length=2, description="Restrict to one locale.")
    sort: SortOrder = SortOrder.HELPFUL


class IssuesOptions(_ListingOptions):
    type: IssueType | None = None
    count: int = Field(default=5, ge=0)
    page: int = Field(default=0, ge=0, description="Issues start at page * count.")


OptionsT = TypeVar("OptionsT", bound=RequestOptions)


def coerce_options(
    model: type[OptionsT],
    options: OptionsT | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> OptionsT:
    """Build `model` from an instance, a mapping and/or keyword overrides.

    Any validation failure becomes `InvalidOptions`.
    """

    if isinstance(options, model) and not overrides:
        return options

    if options is None:
        values: dict[str, Any] = {}
    elif isinstance(options, BaseModel):
        values = options.model_dump(exclude_unset=True)
    elif isinstance(options, Mapping):
        values = dict(options)
    else:
        raise InvalidOptions(f"expected {model.__name__} or a mapping, got {type(options).__name__}")
    values.update(overrides)

    try:
        return model.model_validate(values)
    except ValidationError as exc:
        errors = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ())) or "options"
            errors.append(f"{loc}: {err.get('msg')}")
        raise InvalidOptions(f"invalid {model.__name__}", errors=errors) from exc
