"""Core domain package for the Spendlens service.

The AI orchestration lives in :mod:`core.ai` and is imported explicitly.
"""

from .errors import (
    FileProcessingError,
    FileProcessingTimeout,
    ReflectionError,
    SpendlensError,
    StatementAnalysisError,
)
from .models import (
    CategoryAggregate,
    PeriodData,
    PeriodSummary,
    PurchaseContext,
    SavingsGoal,
    StatementFile,
    SubscriptionCandidate,
    SubscriptionsSummary,
    Transaction,
)

__all__ = [
    "CategoryAggregate",
    "PeriodData",
    "PeriodSummary",
    "PurchaseContext",
    "SavingsGoal",
    "StatementFile",
    "SubscriptionCandidate",
    "SubscriptionsSummary",
    "Transaction",
    "FileProcessingError",
    "FileProcessingTimeout",
    "ReflectionError",
    "SpendlensError",
    "StatementAnalysisError",
]
