import pytest

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
    coerce_options,
)
from chrome_webstore.core.errors import InvalidOptions


def test_defaults_follow_documented_values() -> None:
    items = coerce_options(ItemsOptions)
    reviews = coerce_options(ReviewsOptions, id="abc")
    issues = coerce_options(IssuesOptions, id="abc")

    assert items.count == 5
    assert items.features == frozenset()
    assert reviews.count == 5
    assert reviews.sort is SortOrder.HELPFUL
    assert reviews.locale is None
    assert issues.count == 5
    assert issues.page == 0
    assert issues.type is None


@pytest.mark.parametrize("model", [DetailOptions, ReviewsOptions, IssuesOptions])
def test_missing_id_is_rejected(model: type) -> None:
    with pytest.raises(InvalidOptions) as excinfo:
        coerce_options(model)

    assert any(err.startswith("id:") for err in excinfo.value.errors)


def test_blank_id_is_rejected() -> None:
    with pytest.raises(InvalidOptions):
        coerce_options(DetailOptions, id="   ")


def test_short_ids_are_accepted() -> None:
    assert coerce_options(ReviewsOptions, id="abc").id == "abc"


@pytest.mark.parametrize("rating", [2, 3, 4, 5])
def test_search_rating_accepts_two_to_five(rating: int) -> None:
    assert coerce_options(ItemsOptions, rating=rating).rating == SearchRating(rating)


@pytest.mark.parametrize("rating", [0, 1, 6, -3, "five"])
def test_search_rating_rejects_values_outside_the_set(rating: object) -> None:
    with pytest.raises(InvalidOptions) as excinfo:
        coerce_options(ItemsOptions, rating=rating)

    assert any(err.startswith("rating:") for err in excinfo.value.errors)


@pytest.mark.parametrize(
    "model,field",
    [
        (ItemsOptions, "count"),
        (ItemsOptions, "offset"),
        (ReviewsOptions, "count"),
        (ReviewsOptions, "offset"),
        (IssuesOptions, "count"),
        (IssuesOptions, "page"),
    ],
)
def test_negative_counters_are_rejected(model: type, field: str) -> None:
    extra = {"id": "abc"} if model is not ItemsOptions else {"category": "extensions"}
    with pytest.raises(InvalidOptions):
        coerce_options(model, **extra, **{field: -1})


def test_items_offset_requires_category() -> None:
    with pytest.raises(InvalidOptions, match="offset requires category"):
        coerce_options(ItemsOptions, offset=10)

    assert coerce_options(ItemsOptions, offset=10, category="extensions").offset == 10


def test_features_are_an_unordered_set() -> None:
    first = coerce_options(ItemsOptions, features=["free", "offline", "free"])
    second = coerce_options(ItemsOptions, features=[Feature.OFFLINE, Feature.FREE])

    assert first.features == second.features == frozenset({Feature.FREE, Feature.OFFLINE})


def test_unknown_feature_is_rejected() -> None:
    with pytest.raises(InvalidOptions):
        coerce_options(ItemsOptions, features=["premium"])


def test_closed_enums_reject_free_form_strings() -> None:
    with pytest.raises(InvalidOptions):
        coerce_options(ReviewsOptions, id="abc", sort="oldest")
    with pytest.raises(InvalidOptions):
        coerce_options(IssuesOptions, id="abc", type="bug")

    assert coerce_options(IssuesOptions, id="abc", type="problem").type is IssueType.PROBLEM


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(InvalidOptions, match="sortBy"):
        coerce_options(ReviewsOptions, id="abc", sortBy="recent")


def test_keyword_overrides_win_over_mapping_and_model() -> None:
    base = DetailOptions(id="abc", related=True)

    from_model = coerce_options(DetailOptions, base, id="xyz")
    from_mapping = coerce_options(DetailOptions, {"id": "abc", "more": True}, more=False)

    assert from_model.id == "xyz"
    assert from_model.related is True
    assert from_mapping.more is False


def test_model_instance_is_returned_as_is() -> None:
    options = DetailOptions(id="abc")

    assert coerce_options(DetailOptions, options) is options


def test_request_options_carry_transport_settings() -> None:
    options = coerce_options(
        ReviewsOptions,
        id="abc",
        proxy="http://proxy:8080",
        headers={"X-Trace": "1"},
        timeout=3,
    )

    assert isinstance(options, RequestOptions)
    assert options.proxy == "http://proxy:8080"
    assert options.headers == {"X-Trace": "1"}
    assert options.timeout == 3


def test_invalid_options_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        coerce_options(DetailOptions, id="")


def test_non_mapping_options_are_rejected() -> None:
    with pytest.raises(InvalidOptions):
        coerce_options(DetailOptions, ["abc"])  # type: ignore[arg-type]
