"""Tests for listing query options and parameter coercion."""

from decimal import Decimal

import pytest

from product_service.catalog.query import (
    FilterOptions,
    PaginationRequest,
    SortDirection,
    SortField,
    SortOptions,
    parse_bool,
    parse_positive_int,
    parse_price,
    split_tokens,
)


class TestParsePositiveInt:
    """Tests for page/limit coercion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("3", 3),
            (7, 7),
            ("2.0", 2),
            (None, 10),
            ("abc", 10),
            ("", 10),
            ("0", 10),
            ("-4", 10),
            ("nan", 10),
            (True, 10),
        ],
    )
    def test_coercion(self, value: object, expected: int) -> None:
        """Unusable values fall back to the default."""
        assert parse_positive_int(value, 10) == expected


class TestParsePrice:
    """Tests for price bound coercion."""

    def test_numeric_string(self) -> None:
        """Numeric strings become decimals."""
        assert parse_price("499.99") == Decimal("499.99")

    def test_number(self) -> None:
        """Numbers become decimals."""
        assert parse_price(500) == Decimal("500")

    @pytest.mark.parametrize("value", [None, "", "  ", "cheap", "inf", True])
    def test_unusable_values_are_dropped(self, value: object) -> None:
        """Anything non-numeric means no bound."""
        assert parse_price(value) is None


class TestParseBool:
    """Tests for tri-state flags."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", True])
    def test_true(self, value: object) -> None:
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "False", "0", "no", False])
    def test_false(self, value: object) -> None:
        assert parse_bool(value) is False

    @pytest.mark.parametrize("value", [None, "", "maybe"])
    def test_absent(self, value: object) -> None:
        """Unknown literals mean the flag was not requested."""
        assert parse_bool(value) is None


class TestSplitTokens:
    """Tests for comma-separated token splitting."""

    def test_trims_and_drops_empty_segments(self) -> None:
        assert split_tokens(" a, ,b ,,c ") == ["a", "b", "c"]

    def test_accepts_lists(self) -> None:
        assert split_tokens(["a,b", " c "]) == ["a", "b", "c"]

    def test_none(self) -> None:
        assert split_tokens(None) == []


class TestFilterOptions:
    """Tests for FilterOptions.from_params."""

    def test_category_ids_take_precedence(self) -> None:
        """categoryIds wins over categoryId."""
        filters = FilterOptions.from_params(category_id="books", category_ids="toys,electronics")
        assert filters.category == "toys,electronics"

    def test_falls_back_to_category_id(self) -> None:
        filters = FilterOptions.from_params(category_id=" books ")
        assert filters.category == "books"

    def test_blank_values_are_absent(self) -> None:
        filters = FilterOptions.from_params(search="   ", category_id="", tag_ids="")
        assert filters.search is None
        assert filters.category is None
        assert filters.tag_ids == ()

    def test_full_params(self) -> None:
        filters = FilterOptions.from_params(
            search=" lamp ",
            min_price="500",
            max_price="1500",
            tag_ids="sale,new",
            is_featured="true",
            is_published="false",
        )
        assert filters.search == "lamp"
        assert filters.min_price == Decimal("500")
        assert filters.max_price == Decimal("1500")
        assert filters.tag_ids == ("sale", "new")
        assert filters.is_featured is True
        assert filters.is_published is False


class TestSortOptions:
    """Tests for SortOptions.from_params."""

    def test_defaults(self) -> None:
        sort = SortOptions.from_params()
        assert sort.field == SortField.CREATED_AT
        assert sort.direction == SortDirection.DESC

    def test_known_values(self) -> None:
        sort = SortOptions.from_params("price", "asc")
        assert sort.field == SortField.PRICE
        assert sort.direction == SortDirection.ASC

    def test_unknown_field_falls_back(self) -> None:
        sort = SortOptions.from_params("stock; DROP TABLE products", "ASC")
        assert sort.field == SortField.CREATED_AT
        assert sort.direction == SortDirection.ASC


class TestPaginationRequest:
    """Tests for PaginationRequest."""

    def test_offset(self) -> None:
        assert PaginationRequest(page=3, limit=10).offset == 20

    def test_from_params_defaults(self) -> None:
        pagination = PaginationRequest.from_params("x", None)
        assert pagination.page == 1
        assert pagination.limit == 10

    def test_from_params_custom_defaults(self) -> None:
        pagination = PaginationRequest.from_params(None, "bad", default_limit=25)
        assert pagination.limit == 25
