"""Recalculation of period metrics from model-extracted transactions.

The model's own totals are never trusted: every figure in a
:class:`~core.models.PeriodSummary` is derived here from the transaction list.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any, Optional

import numpy as np
import pandas as pd

from core.formatting import coerce_amount, format_currency, round_money
from core.logging_setup import get_logger
from core.models import PERIOD_KEYS, CategoryAggregate, PeriodSummary, SubscriptionsSummary

__all__ = [
    "DEFAULT_CATEGORY",
    "build_category_breakdown",
    "summarise_subscriptions",
    "recalculate_period_metrics",
    "recalculate_analysis",
]

DEFAULT_CATEGORY = "Uncategorized"

_logger = get_logger("spendlens.metrics")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _spend_frame(transactions: Sequence[Any]) -> pd.DataFrame:
    """Return one row per spend transaction with ``category``, ``emoji`` and ``spend``."""

    # Amounts go through coerce_amount so that huge ints, bools and junk count as 0.
    records = [
        {
            "amount": coerce_amount(item.get("amount")),
            "category": item.get("category"),
            "emoji": item.get("emoji"),
        }
        for item in transactions
        if isinstance(item, Mapping)
    ]
    if not records:
        return pd.DataFrame(columns=["category", "emoji", "spend"])

    frame = pd.DataFrame.from_records(records)
    amounts = frame["amount"].to_numpy(dtype=np.float64)

    categories = frame["category"].where(frame["category"].notna(), DEFAULT_CATEGORY).astype(str)
    categories = categories.where(categories.str.strip() != "", DEFAULT_CATEGORY)
    emojis = frame["emoji"].where(frame["emoji"].notna(), "").astype(str)

    spend_mask = amounts < 0
    return pd.DataFrame(
        {
            "category": categories[spend_mask].to_numpy(),
            "emoji": emojis[spend_mask].to_numpy(),
            "spend": np.negative(amounts[spend_mask]),
        }
    )


def build_category_breakdown(spend: pd.DataFrame, total_spend: float) -> list[CategoryAggregate]:
    """Group spend by category, largest first.

    Groups keep first-seen order so that the stable sort leaves equal amounts
    in input order; the first transaction of a category supplies its emoji.
    """

    if spend.empty:
        return []

    grouped = spend.groupby("category", sort=False).agg(
        amount=("spend", "sum"),
        emoji=("emoji", "first"),
    )

    rows: list[CategoryAggregate] = []
    for name, record in grouped.iterrows():
        amount = float(record["amount"])
        percentage = round_money(amount / total_spend * 100) if total_spend > 0 else 0.0
        rows.append(
            {
                "name": str(name),
                "amount": round_money(amount),
                "percentage": percentage,
                "emoji": str(record["emoji"]),
            }
        )

    # ``sorted`` is stable.
    return sorted(rows, key=lambda row: row["amount"], reverse=True)


def summarise_subscriptions(candidates: Sequence[Any]) -> SubscriptionsSummary:
    total = sum(
        abs(coerce_amount(item.get("amount"))) for item in candidates if isinstance(item, Mapping)
    )
    return {
        "count": len(candidates),
        "total": round_money(total),
        "list": list(candidates),
    }


def recalculate_period_metrics(period_data: Any) -> Optional[PeriodSummary]:
    """Return a recomputed copy of one period of model output.

    Returns ``None`` when ``period_data`` is not a mapping or its
    ``transactions`` entry is missing or not a list. The caller's object is
    never modified.
    """

    if not isinstance(period_data, Mapping):
        return None
    if not _is_sequence(period_data.get("transactions")):
        return None

    summary: dict[str, Any] = copy.deepcopy(dict(period_data))
    candidates = summary.pop("possibleSubscriptions", None)
    if not _is_sequence(candidates):
        candidates = []

    transactions = list(summary["transactions"])
    currency = summary.get("currency")
    currency = "" if currency is None else str(currency)

    spend = _spend_frame(transactions)
    total_spend = float(spend["spend"].sum()) if not spend.empty else 0.0

    summary.setdefault("period", "")
    summary.update(
        {
            "currency": currency,
            "transactions": transactions,
            "totalSpend": total_spend,
            "formattedTotal": format_currency(currency, total_spend),
            "categoryBreakdown": build_category_breakdown(spend, total_spend),
            "subscriptions": summarise_subscriptions(list(candidates)),
        }
    )
    return summary  # type: ignore[return-value]


def _placeholder_period(raw: Any) -> PeriodSummary:
    period = ""
    currency = ""
    if isinstance(raw, Mapping):
        period = str(raw.get("period") or "")
        currency = str(raw.get("currency") or "")
    return {
        "period": period,
        "currency": currency,
        "transactions": [],
        "totalSpend": 0.0,
        "formattedTotal": format_currency(currency, 0.0),
        "categoryBreakdown": [],
        "subscriptions": summarise_subscriptions([]),
    }


def recalculate_analysis(result: Mapping[str, Any]) -> dict[str, PeriodSummary]:
    """Recalculate the weekly, monthly and yearly periods independently.

    A malformed period is replaced by an empty summary so the other periods
    are still returned.
    """

    periods: dict[str, PeriodSummary] = {}
    for key in PERIOD_KEYS:
        raw = result.get(key)
        summary = recalculate_period_metrics(raw)
        if summary is None:
            _logger.warning("recalculate:malformed_period period=%s type=%s", key, type(raw).__name__)
            summary = _placeholder_period(raw)
        else:
            _logger.debug(
                "recalculate:period_done period=%s transactions=%d categories=%d",
                key,
                len(summary["transactions"]),
                len(summary["categoryBreakdown"]),
            )
        periods[key] = summary
    return periods
