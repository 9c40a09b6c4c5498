import json

import pytest

from chrome_webstore.core.config import AppSettings
from chrome_webstore.core.domain.options import (
    DetailOptions,
    IssuesOptions,
    ItemsOptions,
    RequestOptions,
    ReviewsOptions,
    coerce_options,
)
from chrome_webstore.core.services.request_builder import (
    DEFAULT_API_VERSION,
    build_detail_request,
    build_issues_request,
    build_items_request,
    build_reviews_request,
    build_version_request,
    encode_features,
    resolve_version,
)


def _spec(request) -> dict:
    envelope = json.loads(request.data["req"])
    assert envelope["appId"] == 94
    assert len(envelope["specs"]) == 1
    return envelope["specs"][0]


def test_detail_request_targets_detail_endpoint(settings: AppSettings) -> None:
    request = build_detail_request(DetailOptions(id="abc"), settings)

    assert request.method == "POST"
    assert request.url == "https://chrome.google.com/webstore/ajax/detail"
    assert request.resource == "detail"
    assert request.listing_id == "abc"
    assert request.params["id"] == "abc"
    assert request.params["hl"] == "en"
    assert request.params["gl"] == "US"
    assert request.params["pv"] == DEFAULT_API_VERSION
    assert request.params["container"] == "CHROME"
    assert request.data is None


def test_detail_request_uses_explicit_locale_and_version(settings: AppSettings) -> None:
    request = build_detail_request(DetailOptions(id="abc", locale="de", version="20240101"), settings)

    assert request.params["hl"] == "de"
    assert request.params["pv"] == "20240101"


def test_version_resolution_order() -> None:
    pinned = AppSettings(_env_file=None, api_version="20230505")
    unpinned = AppSettings(_env_file=None, api_version=None)

    assert resolve_version("20240101", pinned) == "20240101"
    assert resolve_version(None, pinned) == "20230505"
    assert resolve_version(None, unpinned) == DEFAULT_API_VERSION


def test_base_url_is_configurable() -> None:
    settings = AppSettings(_env_file=None, base_url="http://localhost:8080/")

    request = build_version_request(RequestOptions(), settings)

    assert request.url == "http://localhost:8080/webstore/category/extensions"
    assert request.method == "GET"


def test_items_request_encodes_filters(settings: AppSettings) -> None:
    options = coerce_options(
        ItemsOptions,
        search="tabs",
        category="extensions",
        rating=4,
        features=["offline", "free"],
        count=20,
        offset=40,
    )

    request = build_items_request(options, settings)

    assert request.url == "https://chrome.google.com/webstore/ajax/item"
    assert request.params["searchTerm"] == "tabs"
    assert request.params["category"] == "extensions"
    assert request.params["count"] == "20"
    assert request.params["token"] == "40@40"
    assert request.params["features"] == "_feature_free,_feature_offline,_rating_4"


def test_items_request_omits_unset_filters(settings: AppSettings) -> None:
    request = build_items_request(ItemsOptions(), settings)

    assert request.params["count"] == "5"
    assert request.params["token"] == "0@0"
    for key in ("searchTerm", "category", "features"):
        assert key not in request.params


def test_feature_encoding_ignores_input_order() -> None:
    first = coerce_options(ItemsOptions, features=["gdrive", "android", "google"])
    second = coerce_options(ItemsOptions, features=["google", "gdrive", "android"])

    assert encode_features(first) == encode_features(second)
    assert encode_features(ItemsOptions()) is None


@pytest.mark.parametrize("sort,token", [("helpful", "cws_qscore"), ("recent", "date")])
def test_reviews_request_maps_sort_order(settings: AppSettings, sort: str, token: str) -> None:
    options = coerce_options(ReviewsOptions, id="abc", sort=sort, count=10, offset=20)

    request = build_reviews_request(options, settings)
    spec = _spec(request)

    assert request.url == "https://chrome.google.com/reviews/components"
    assert spec["type"] == "CommentThread"
    assert spec["sortby"] == token
    assert spec["startindex"] == "20"
    assert spec["numresults"] == "10"
    assert spec["url"].endswith("permalink?id=abc")


def test_reviews_request_locale_restricts_group(settings: AppSettings) -> None:
    all_locales = _spec(build_reviews_request(ReviewsOptions(id="abc"), settings))
    french = _spec(build_reviews_request(ReviewsOptions(id="abc", locale="fr"), settings))

    assert all_locales["groups"] == "chrome_webstore"
    assert french["groups"] == "chrome_webstore.fr"


def test_issues_request_pages_by_count(settings: AppSettings) -> None:
    options = coerce_options(IssuesOptions, id="abc", type="problem", count=10, page=3)

    spec = _spec(build_issues_request(options, settings))

    assert spec["type"] == "Issues"
    assert spec["groups"] == "chrome_webstore_support"
    assert spec["startindex"] == "30"
    assert spec["numresults"] == "10"
    assert spec["issuetype"] == "problem"


def test_issues_request_without_type_asks_for_all(settings: AppSettings) -> None:
    spec = _spec(build_issues_request(IssuesOptions(id="abc"), settings))

    assert "issuetype" not in spec


def test_transport_options_are_passed_through(settings: AppSettings) -> None:
    options = coerce_options(
        DetailOptions,
        id="abc",
        related=True,
        proxy="http://proxy:3128",
        headers={"X-Trace": "1"},
        timeout=2.5,
    )

    request = build_detail_request(options, settings)

    assert type(request.options) is RequestOptions
    assert request.options.proxy == "http://proxy:3128"
    assert request.options.headers == {"X-Trace": "1"}
    assert request.options.timeout == 2.5
