"""Strict JSON schemas requested from the OpenAI Responses API."""

from __future__ import annotations

import copy
from typing import Any

__all__ = [
    "ANALYSIS_SCHEMA_NAME",
    "REFLECTIONS_SCHEMA_NAME",
    "PERIOD_SCHEMA",
    "build_analysis_response_format",
    "build_reflections_response_format",
]

ANALYSIS_SCHEMA_NAME = "statement_analysis"
REFLECTIONS_SCHEMA_NAME = "purchase_reflections"

_PERIOD_DESCRIPTIONS = {
    "weekly": "Finance data analysis for the most recent week only (last 7 days).",
    "monthly": "Finance data analysis for the most recent month only (last 30 days).",
    "yearly": "Finance data analysis for the entire period covered by the statements.",
}

_TRANSACTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "date": {"type": "string", "description": "Date of the transaction (YYYY-MM-DD)."},
        "description": {
            "type": "string",
            "description": "The description of the transaction from the statement.",
        },
        "amount": {
            "type": "number",
            "description": "Signed amount: negative for debits, positive for credits.",
        },
        "category": {"type": "string", "description": "Inferred spending category."},
        "emoji": {"type": "string", "description": "A representative emoji for the category."},
    },
    "required": ["date", "description", "amount", "category", "emoji"],
    "additionalProperties": False,
}

_SUBSCRIPTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Name of the subscription service."},
        "amount": {"type": "number", "description": "Signed amount of one payment."},
        "emoji": {"type": "string", "description": "A representative emoji for the service."},
    },
    "required": ["name", "amount", "emoji"],
    "additionalProperties": False,
}

PERIOD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "period": {"type": "string", "description": "The date range covered by the analysis."},
        "currency": {
            "type": "string",
            "description": "The currency symbol or code identified in the statement.",
        },
        "transactions": {
            "type": "array",
            "description": "Individual transactions identified in the statements.",
            "items": _TRANSACTION_SCHEMA,
        },
        "possibleSubscriptions": {
            "type": "array",
            "description": "Payments that look like recurring subscriptions.",
            "items": _SUBSCRIPTION_SCHEMA,
        },
    },
    "required": ["period", "currency", "transactions", "possibleSubscriptions"],
    "additionalProperties": False,
}


def build_analysis_response_format() -> dict[str, Any]:
    """Return the ``text.format`` object for the combined weekly/monthly/yearly call."""

    properties: dict[str, Any] = {}
    for key, description in _PERIOD_DESCRIPTIONS.items():
        period = copy.deepcopy(PERIOD_SCHEMA)
        period["description"] = description
        properties[key] = period

    return {
        "type": "json_schema",
        "name": ANALYSIS_SCHEMA_NAME,
        "description": "Combined finance data analysis for weekly, monthly, and yearly periods.",
        "schema": {
            "type": "object",
            "properties": properties,
            "required": list(_PERIOD_DESCRIPTIONS),
            "additionalProperties": False,
        },
        "strict": True,
    }


def build_reflections_response_format() -> dict[str, Any]:
    return {
        "type": "json_schema",
        "name": REFLECTIONS_SCHEMA_NAME,
        "schema": {
            "type": "object",
            "properties": {
                "prompts": {
                    "type": "array",
                    "description": "Concise and thoughtful reflection prompts.",
                    "items": {"type": "string"},
                }
            },
            "required": ["prompts"],
            "additionalProperties": False,
        },
        "strict": True,
    }
