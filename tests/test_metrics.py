"""Unit tests for period metric recalculation."""

from __future__ import annotations

import copy
import math

import pytest

from analytics.metrics import DEFAULT_CATEGORY, recalculate_analysis, recalculate_period_metrics


@pytest.mark.parametrize(
    "period_data",
    [
        None,
        "not a period",
        {},
        {"transactions": None},
        {"transactions": "-10 Food"},
        {"transactions": {"amount": -10}},
        {"currency": "$", "possibleSubscriptions": []},
    ],
)
def test_malformed_period_returns_none(period_data):
    assert recalculate_period_metrics(period_data) is None


def test_documented_example_totals():
    result = recalculate_period_metrics(
        {
            "currency": "$",
            "transactions": [
                {"amount": -10, "category": "Food"},
                {"amount": -5, "category": "Food"},
                {"amount": 20, "category": "Salary"},
            ],
        }
    )

    assert result is not None
    assert result["totalSpend"] == pytest.approx(15.0)
    assert result["formattedTotal"] == "$15.00"
    assert result["categoryBreakdown"] == [
        {"name": "Food", "amount": 15.0, "percentage": 100.0, "emoji": ""}
    ]
    assert result["subscriptions"] == {"count": 0, "total": 0.0, "list": []}


def test_empty_transactions_have_zero_spend():
    result = recalculate_period_metrics({"currency": "€", "transactions": []})

    assert result is not None
    assert result["totalSpend"] == 0.0
    assert result["formattedTotal"] == "€0.00"
    assert result["categoryBreakdown"] == []


def test_income_only_period_does_not_divide_by_zero():
    result = recalculate_period_metrics(
        {"currency": "$", "transactions": [{"amount": 100.0, "category": "Salary", "emoji": "💰"}]}
    )

    assert result is not None
    assert result["totalSpend"] == 0.0
    assert result["categoryBreakdown"] == []


def test_income_is_excluded_from_breakdown(sample_period):
    result = recalculate_period_metrics(sample_period)

    names = [row["name"] for row in result["categoryBreakdown"]]
    assert "Income" not in names
    assert result["totalSpend"] == pytest.approx(42.5 + 15.99 + 17.5 + 24.0)


def test_breakdown_is_sorted_and_groups_first_seen(sample_period):
    result = recalculate_period_metrics(sample_period)

    breakdown = result["categoryBreakdown"]
    assert [row["name"] for row in breakdown] == ["Groceries", "Transport", "Entertainment"]
    assert breakdown[0]["amount"] == pytest.approx(60.0)
    assert breakdown[0]["emoji"] == "🛒"
    assert all(a["amount"] >= b["amount"] for a, b in zip(breakdown, breakdown[1:]))


def test_breakdown_ties_keep_input_order():
    result = recalculate_period_metrics(
        {
            "currency": "$",
            "transactions": [
                {"amount": -5, "category": "Alpha", "emoji": "a"},
                {"amount": -10, "category": "Beta", "emoji": "b"},
                {"amount": -5, "category": "Gamma", "emoji": "c"},
            ],
        }
    )

    assert [row["name"] for row in result["categoryBreakdown"]] == ["Beta", "Alpha", "Gamma"]


def test_breakdown_amounts_and_percentages_add_up(sample_period):
    result = recalculate_period_metrics(sample_period)
    breakdown = result["categoryBreakdown"]

    tolerance = 0.01 * len(breakdown)
    assert sum(row["amount"] for row in breakdown) == pytest.approx(result["totalSpend"], abs=tolerance)
    assert sum(row["percentage"] for row in breakdown) == pytest.approx(100.0, abs=tolerance)
    assert all(0.0 <= row["percentage"] <= 100.0 for row in breakdown)


def test_percentages_are_rounded_to_two_decimals():
    result = recalculate_period_metrics(
        {
            "currency": "$",
            "transactions": [
                {"amount": -1, "category": "X"},
                {"amount": -1, "category": "Y"},
                {"amount": -1, "category": "Z"},
            ],
        }
    )

    assert [row["percentage"] for row in result["categoryBreakdown"]] == [33.33, 33.33, 33.33]


def test_category_amounts_are_rounded_to_cents():
    result = recalculate_period_metrics(
        {
            "currency": "$",
            "transactions": [
                {"amount": -0.1, "category": "Snacks"},
                {"amount": -0.2, "category": "Snacks"},
            ],
        }
    )

    assert result["categoryBreakdown"][0]["amount"] == 0.3
    assert result["formattedTotal"] == "$0.30"


def test_subscriptions_summary_passes_candidates_through():
    candidates = [
        {"name": "Netflix", "amount": -15.5, "emoji": "🎬"},
        {"name": "Spotify", "amount": -9.99, "emoji": "🎵"},
    ]
    result = recalculate_period_metrics(
        {"currency": "$", "transactions": [], "possibleSubscriptions": candidates}
    )

    subscriptions = result["subscriptions"]
    assert subscriptions["count"] == 2
    assert subscriptions["total"] == pytest.approx(25.49)
    assert subscriptions["list"] == candidates
    assert subscriptions["total"] == pytest.approx(sum(abs(item["amount"]) for item in subscriptions["list"]))
    assert "possibleSubscriptions" not in result


def test_input_is_not_mutated(sample_period):
    original = copy.deepcopy(sample_period)

    result = recalculate_period_metrics(sample_period)
    result["transactions"][0]["amount"] = 0
    result["subscriptions"]["list"].clear()

    assert sample_period == original
    assert result["transactions"] is not sample_period["transactions"]


def test_recalculation_is_idempotent(sample_period):
    assert recalculate_period_metrics(sample_period) == recalculate_period_metrics(sample_period)


def test_model_totals_are_replaced_and_extra_keys_kept(sample_period):
    sample_period = {**sample_period, "totalSpend": 999.0, "formattedTotal": "£999.00", "notes": "kept"}

    result = recalculate_period_metrics(sample_period)

    assert result["totalSpend"] == pytest.approx(99.99)
    assert result["formattedTotal"] == "£99.99"
    assert result["notes"] == "kept"
    assert result["period"] == "2024-01-01 to 2024-01-31"


def test_malformed_transaction_fields_are_tolerated():
    result = recalculate_period_metrics(
        {
            "currency": "$",
            "transactions": [
                {"amount": "abc", "category": "Broken"},
                {"amount": float("nan"), "category": "Broken"},
                {"amount": "-4.5", "category": None, "emoji": None},
                {"amount": None},
                "not a transaction",
            ],
        }
    )

    assert result["totalSpend"] == pytest.approx(4.5)
    assert result["categoryBreakdown"] == [
        {"name": DEFAULT_CATEGORY, "amount": 4.5, "percentage": 100.0, "emoji": ""}
    ]
    assert len(result["transactions"]) == 5
    assert not any(math.isnan(row["percentage"]) for row in result["categoryBreakdown"])


def test_oversized_and_boolean_amounts_count_as_zero():
    result = recalculate_period_metrics(
        {
            "currency": "$",
            "transactions": [
                {"amount": 10**400, "category": "X"},
                {"amount": -(10**400), "category": "X"},
                {"amount": True, "category": "X"},
                {"amount": -2, "category": "Y"},
            ],
            "possibleSubscriptions": [
                {"name": "Huge", "amount": 10**400},
                {"name": "Gym", "amount": -20},
            ],
        }
    )

    assert result["totalSpend"] == pytest.approx(2.0)
    assert result["categoryBreakdown"] == [{"name": "Y", "amount": 2.0, "percentage": 100.0, "emoji": ""}]
    assert result["subscriptions"]["count"] == 2
    assert result["subscriptions"]["total"] == pytest.approx(20.0)


def test_tuple_transactions_are_accepted():
    result = recalculate_period_metrics(
        {"currency": "$", "transactions": ({"amount": -3, "category": "Coffee", "emoji": "☕"},)}
    )

    assert result["transactions"] == [{"amount": -3, "category": "Coffee", "emoji": "☕"}]
    assert result["formattedTotal"] == "$3.00"


def test_missing_currency_formats_bare_amount():
    result = recalculate_period_metrics({"transactions": [{"amount": -2.5, "category": "Misc"}]})

    assert result["currency"] == ""
    assert result["formattedTotal"] == "2.50"


def test_recalculate_analysis_replaces_malformed_period(model_output):
    model_output["weekly"] = {"period": "last week", "currency": "£", "transactions": None}
    model_output["yearly"] = None

    periods = recalculate_analysis(model_output)

    assert set(periods) == {"weekly", "monthly", "yearly"}
    assert periods["weekly"]["period"] == "last week"
    assert periods["weekly"]["formattedTotal"] == "£0.00"
    assert periods["weekly"]["categoryBreakdown"] == []
    assert periods["yearly"]["totalSpend"] == 0.0
    assert periods["yearly"]["subscriptions"] == {"count": 0, "total": 0.0, "list": []}
    assert periods["monthly"]["totalSpend"] == pytest.approx(99.99)
