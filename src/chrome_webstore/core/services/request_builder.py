"""Request construction.

Turns validated options into a `StoreRequest` aimed at one of the store's
internal endpoints. Pure functions: no I/O, no logging.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.options import (
    DetailOptions,
    Feature,
    IssuesOptions,
    ItemsOptions,
    RequestOptions,
    ReviewsOptions,
    SortOrder,
)

DEFAULT_API_VERSION = "20210820"

DETAIL_PATH = "/webstore/ajax/detail"
ITEMS_PATH = "/webstore/ajax/item"
COMPONENTS_PATH = "/reviews/components"
VERSION_PATH = "/webstore/category/extensions"

# Sections the store renders in ajax responses.
_MCE = "atf,pii,rtr,rlb,gtc,hcn,svp,wtd,c3d,ncr,ctm,ac,hot,euf,mac,fcf,rma,pot,evt"

_REVIEWS_APP_ID = 94
_REVIEWS_CLIENT_VERSION = "150922"

_FEATURE_TOKENS: dict[Feature, str] = {
    Feature.OFFLINE: "_feature_offline",
    Feature.GOOGLE: "_feature_by_google",
    Feature.FREE: "_feature_free",
    Feature.ANDROID: "_feature_android",
    Feature.GDRIVE: "_feature_drive",
}

_SORT_TOKENS: dict[SortOrder, str] = {
    SortOrder.HELPFUL: "cws_qscore",
    SortOrder.RECENT: "date",
}

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded;charset=utf-8"}


@dataclass(frozen=True)
class StoreRequest:
    """Opaque request descriptor handed to the transport."""

    method: str
    url: str
    resource: str
    params: dict[str, str] = field(default_factory=dict)
    data: dict[str, str] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    options: RequestOptions = field(default_factory=RequestOptions)
    listing_id: str | None = None


def resolve_version(version: str | None, settings: AppSettings) -> str:
    return version or settings.api_version or DEFAULT_API_VERSION


def _url(settings: AppSettings, path: str) -> str:
    return settings.base_url.rstrip("/") + path


def _transport_options(options: RequestOptions) -> RequestOptions:
    return RequestOptions(proxy=options.proxy, headers=dict(options.headers), timeout=options.timeout)


def _ajax_params(locale: str | None, version: str | None, settings: AppSettings) -> dict[str, str]:
    return {
        "hl": locale or settings.default_locale,
        "gl": settings.default_country,
        "pv": resolve_version(version, settings),
        "mce": _MCE,
    }


def _permalink(listing_id: str) -> str:
    return f"http://chrome.google.com/extensions/permalink?id={listing_id}"


def _components_form(hl: str, spec: dict[str, Any]) -> dict[str, str]:
    envelope = {
        "appId": _REVIEWS_APP_ID,
        "version": _REVIEWS_CLIENT_VERSION,
        "hl": hl,
        "specs": [spec],
        "internedKeys": [],
        "internedValues": [],
    }
    return {"req": json.dumps(envelope, separators=(",", ":"))}


def build_detail_request(options: DetailOptions, settings: AppSettings) -> StoreRequest:
    params = _ajax_params(options.locale, options.version, settings)
    params.update({"id": options.id, "container": "CHROME", "rt": "j"})
    return StoreRequest(
        method="POST",
        url=_url(settings, DETAIL_PATH),
        resource="detail",
        params=params,
        headers=dict(_FORM_HEADERS),
        options=_transport_options(options),
        listing_id=options.id,
    )


def encode_features(options: ItemsOptions) -> str | None:
    """Comma-joined feature tokens; sorted because the filter is a set."""

    tokens = [_FEATURE_TOKENS[feature] for feature in options.features]
    if options.rating is not None:
        tokens.append(f"_rating_{int(options.rating)}")
    if not tokens:
        return None
    return ",".join(sorted(tokens))


def build_items_request(options: ItemsOptions, settings: AppSettings) -> StoreRequest:
    offset = options.offset or 0
    params = _ajax_params(options.locale, options.version, settings)
    params.update(
        {
            "count": str(options.count),
            "token": f"{offset}@{offset}",
            "sortBy": "0",
            "container": "CHROME",
            "rt": "j",
        }
    )
    if options.category:
        params["category"] = options.category
    if options.search:
        params["searchTerm"] = options.search
    features = encode_features(options)
    if features:
        params["features"] = features

    return StoreRequest(
        method="POST",
        url=_url(settings, ITEMS_PATH),
        resource="items",
        params=params,
        headers=dict(_FORM_HEADERS),
        options=_transport_options(options),
    )


def build_reviews_request(options: ReviewsOptions, settings: AppSettings) -> StoreRequest:
    groups = f"chrome_webstore.{options.locale}" if options.locale else "chrome_webstore"
    spec = {
        "type": "CommentThread",
        "url": _permalink(options.id),
        "groups": groups,
        "sortby": _SORT_TOKENS[options.sort],
        "startindex": str(options.offset),
        "numresults": str(options.count),
        "id": "428",
    }
    hl = options.locale or settings.default_locale
    return StoreRequest(
        method="POST",
        url=_url(settings, COMPONENTS_PATH),
        resource="reviews",
        params={"pv": resolve_version(options.version, settings)},
        data=_components_form(hl, spec),
        headers=dict(_FORM_HEADERS),
        options=_transport_options(options),
        listing_id=options.id,
    )


def build_issues_request(options: IssuesOptions, settings: AppSettings) -> StoreRequest:
    spec: dict[str, Any] = {
        "type": "Issues",
        "url": _permalink(options.id),
        "groups": "chrome_webstore_support",
        "startindex": str(options.page * options.count),
        "numresults": str(options.count),
        "id": "379",
    }
    if options.type is not None:
        spec["issuetype"] = options.type.value
    return StoreRequest(
        method="POST",
        url=_url(settings, COMPONENTS_PATH),
        resource="issues",
        params={"pv": resolve_version(options.version, settings)},
        data=_components_form(settings.default_locale, spec),
        headers=dict(_FORM_HEADERS),
        options=_transport_options(options),
        listing_id=options.id,
    )


def build_version_request(options: RequestOptions, settings: AppSettings) -> StoreRequest:
    return StoreRequest(
        method="GET",
        url=_url(settings, VERSION_PATH),
        resource="version",
        params={"hl": settings.default_locale},
        options=_transport_options(options),
    )
