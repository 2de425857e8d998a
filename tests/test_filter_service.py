import pytest

from models.filters import ExpenseFilters
from services.filter_service import InvalidDateBoundError, filter_expenses, sort_expenses


def test_no_filters_returns_everything(scenario):
    assert filter_expenses(scenario, ExpenseFilters()) == scenario


def test_filter_by_category(scenario):
    result = filter_expenses(scenario, ExpenseFilters(category="Bills"))
    assert result == [scenario[2]]


def test_all_sentinel_and_blank_category_do_not_filter(scenario):
    assert filter_expenses(scenario, ExpenseFilters(category="All")) == scenario
    assert filter_expenses(scenario, ExpenseFilters(category="")) == scenario


def test_search_matches_amount(scenario):
    result = filter_expenses(scenario, ExpenseFilters(search_term="20"))
    assert result == [scenario[1]]


def test_search_is_case_insensitive_on_description_and_category(scenario):
    assert filter_expenses(scenario, ExpenseFilters(search_term="DINNER")) == [scenario[1]]
    assert filter_expenses(scenario, ExpenseFilters(search_term="bill")) == [scenario[2]]


def test_search_ignores_surrounding_whitespace(scenario):
    assert filter_expenses(scenario, ExpenseFilters(search_term=" food")) == scenario[:2]
    assert filter_expenses(scenario, ExpenseFilters(search_term="out  ")) == [scenario[1]]


def test_search_fractional_amount(make_expense):
    expenses = [make_expense(12.5, description="Cinema"), make_expense(125, description="Shoes")]
    result = filter_expenses(expenses, ExpenseFilters(search_term="12.5"))
    assert result == [expenses[0]]


def test_date_range_is_inclusive(scenario):
    result = filter_expenses(
        scenario, ExpenseFilters(start_date="2024-01-05", end_date="2024-02-10")
    )
    assert result == scenario[:2]


def test_open_ended_date_bounds(scenario):
    assert filter_expenses(scenario, ExpenseFilters(start_date="2024-02-11")) == [scenario[2]]
    assert filter_expenses(scenario, ExpenseFilters(end_date="2024-01-31")) == [scenario[0]]
    assert filter_expenses(scenario, ExpenseFilters(start_date="", end_date="  ")) == scenario


def test_criteria_combine(scenario):
    filters = ExpenseFilters(category="Food", start_date="2024-02-01", search_term="out")
    assert filter_expenses(scenario, filters) == [scenario[1]]


@pytest.mark.parametrize("field", ["start_date", "end_date"])
def test_unparsable_bound_raises(scenario, field):
    with pytest.raises(InvalidDateBoundError) as exc:
        filter_expenses(scenario, ExpenseFilters(**{field: "31/31/2024"}))
    assert exc.value.field == field


def test_unparsable_bound_raises_even_without_expenses():
    with pytest.raises(ValueError):
        filter_expenses([], ExpenseFilters(start_date="yesterday"))


def test_filtering_is_idempotent(scenario):
    filters = ExpenseFilters(category="Food", search_term="d")
    once = filter_expenses(scenario, filters)
    assert filter_expenses(once, filters) == once


def test_filter_does_not_mutate_input(scenario):
    before = list(scenario)
    filter_expenses(scenario, ExpenseFilters(category="Bills"))
    assert scenario == before


def test_filters_is_active():
    assert not ExpenseFilters().is_active
    assert not ExpenseFilters(search_term="   ").is_active
    assert ExpenseFilters(category="Food").is_active
    assert ExpenseFilters(end_date="2024-01-01").is_active


class TestSort:
    def test_amount_ascending(self, scenario):
        assert [e.amount for e in sort_expenses(scenario, "amount", "asc")] == [5, 10, 20]

    def test_date_descending_is_default(self, scenario):
        assert sort_expenses(scenario) == list(reversed(scenario))

    @pytest.mark.parametrize("key", ["date", "amount"])
    def test_direction_flip_reverses(self, scenario, key):
        asc = sort_expenses(scenario, key, "asc")
        desc = sort_expenses(scenario, key, "desc")
        assert asc == list(reversed(desc))

    def test_equal_keys_keep_input_order(self, make_expense):
        a = make_expense(10, description="first")
        b = make_expense(10, description="second")
        c = make_expense(3, description="third")
        assert sort_expenses([a, b, c], "amount", "asc") == [c, a, b]
        assert sort_expenses([a, b, c], "amount", "desc") == [a, b, c]
        assert sort_expenses([a, b], "date", "desc") == [a, b]

    def test_returns_new_list(self, scenario):
        before = list(scenario)
        result = sort_expenses(scenario, "amount", "desc")
        assert result is not scenario
        assert scenario == before

    def test_rejects_unknown_key_or_order(self, scenario):
        with pytest.raises(ValueError):
            sort_expenses(scenario, "category", "asc")
        with pytest.raises(ValueError):
            sort_expenses(scenario, "date", "up")
