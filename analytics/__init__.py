"""Analytics helpers shared across Spendlens services."""

from analytics.metrics import (
    DEFAULT_CATEGORY,
    build_category_breakdown,
    recalculate_analysis,
    recalculate_period_metrics,
    summarise_subscriptions,
)

__all__ = [
    "DEFAULT_CATEGORY",
    "build_category_breakdown",
    "recalculate_analysis",
    "recalculate_period_metrics",
    "summarise_subscriptions",
]
