from __future__ import annotations

import pytest

from jikanio.core.validators import (
    MIN_QUERY_LENGTH,
    assert_param,
    optional_number,
    require_id,
    require_number,
    require_search_query,
    require_string,
)
from jikanio.utils.exceptions import ErrorCategory, SearchQueryError, ValidationError


@pytest.mark.parametrize("value", [1, 20507, 2.5])
def test_assert_param_number_accepts_positive(value) -> None:
    assert assert_param("number", value) is True


@pytest.mark.parametrize("value", [0, -1, "1", None, True, [1]])
def test_assert_param_number_rejects(value) -> None:
    assert assert_param("number", value) is False


def test_assert_param_string() -> None:
    assert assert_param("string", "anime") is True
    assert assert_param("string", "") is False
    assert assert_param("string", 3) is False
    assert assert_param("string", None) is False


def test_assert_param_unknown_kind() -> None:
    with pytest.raises(ValueError):
        assert_param("table", {})


def test_require_number_raises_validation_error() -> None:
    with pytest.raises(ValidationError) as exc_info:
        require_number("page", 0)
    assert exc_info.value.field_name == "page"
    assert exc_info.value.category is ErrorCategory.USER_ERROR


@pytest.mark.parametrize("value", [0, -5, 1.0, "20507", None, False])
def test_require_id_rejects(value) -> None:
    with pytest.raises(ValidationError):
        require_id("id", value)


def test_require_string_and_optional() -> None:
    assert require_string("season", "summer") == "summer"
    with pytest.raises(ValidationError):
        require_string("season", "")
    assert optional_number("page", None) is None
    with pytest.raises(ValidationError):
        optional_number("page", -1)


def test_search_query_minimum_length() -> None:
    with pytest.raises(SearchQueryError) as exc_info:
        require_search_query({"q": "ab"})
    assert exc_info.value.min_length == MIN_QUERY_LENGTH
    assert isinstance(exc_info.value, ValidationError)

    require_search_query({"q": "abc"})
    require_search_query({"genre": 1})
