"""Shared data model definitions for Spendlens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypedDict

DEFAULT_MIME_TYPE = "application/pdf"
PERIOD_KEYS: tuple[str, ...] = ("weekly", "monthly", "yearly")


class Transaction(TypedDict):
    date: str
    description: str
    amount: float
    category: str
    emoji: str


class SubscriptionCandidate(TypedDict):
    name: str
    amount: float
    emoji: str


class CategoryAggregate(TypedDict):
    name: str
    amount: float
    percentage: float
    emoji: str


# ``list`` is a key of the payload, so the functional form is required here.
SubscriptionsSummary = TypedDict(
    "SubscriptionsSummary",
    {"count": int, "total": float, "list": list[SubscriptionCandidate]},
)


class PeriodData(TypedDict, total=False):
    """One period of the model output before recalculation."""

    period: str
    currency: str
    transactions: list[Transaction]
    possibleSubscriptions: list[SubscriptionCandidate]


class PeriodSummary(TypedDict):
    period: str
    totalSpend: float
    formattedTotal: str
    currency: str
    transactions: list[Transaction]
    categoryBreakdown: list[CategoryAggregate]
    subscriptions: SubscriptionsSummary


@dataclass(frozen=True, slots=True)
class StatementFile:
    """An uploaded statement, already read from the HTTP request."""

    filename: str
    content: bytes
    mime_type: str = DEFAULT_MIME_TYPE


@dataclass(frozen=True, slots=True)
class SavingsGoal:
    name: str
    current: float
    target: float


@dataclass(frozen=True, slots=True)
class PurchaseContext:
    """A purchase the user is considering, used to build reflection prompts."""

    name: str
    price: float
    category: str
    reason: str
    need_score: float
    hourly_wage: Optional[float] = None
    savings_goal: Optional[SavingsGoal] = None


__all__ = [
    "DEFAULT_MIME_TYPE",
    "PERIOD_KEYS",
    "Transaction",
    "SubscriptionCandidate",
    "CategoryAggregate",
    "SubscriptionsSummary",
    "PeriodData",
    "PeriodSummary",
    "StatementFile",
    "SavingsGoal",
    "PurchaseContext",
]
