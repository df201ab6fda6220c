"""Reflection prompts for a purchase the user is considering."""

from __future__ import annotations

import json
from typing import Any, Optional

from openai import APIError

from config import Settings
from core.ai.client import ClientFactory, extract_output_text, resolve_openai_client
from core.ai.schema import build_reflections_response_format
from core.errors import ReflectionError
from core.logging_setup import get_logger
from core.models import PurchaseContext
from prompts import PROMPT_REFLECTIONS, render_prompt

__all__ = ["describe_purchase", "build_reflection_prompt", "parse_reflections", "generate_reflections"]

_logger = get_logger("spendlens.reflections")


def describe_purchase(purchase: PurchaseContext) -> str:
    lines = [
        f"*   **Item:** {purchase.name}",
        f"*   **Price:** ${purchase.price:.2f}",
        f"*   **Category:** {purchase.category}",
        f'*   **Reason given:** "{purchase.reason}"',
        f"*   **Self-rated need score:** {purchase.need_score:g} out of 10 (10 = highest need)",
    ]

    if purchase.hourly_wage is not None and purchase.hourly_wage > 0:
        hours = purchase.price / purchase.hourly_wage
        lines.append(
            f"*   **User's hourly wage:** ${purchase.hourly_wage:.2f} "
            f"(This purchase costs approx. {hours:.1f} hours of work)"
        )

    goal = purchase.savings_goal
    if goal is not None:
        lines.append(
            f'*   **Relevant Savings Goal:** "{goal.name}" '
            f"(Current: ${goal.current:.2f}, Target: ${goal.target:.2f})"
        )

    return "\n".join(lines)


def build_reflection_prompt(purchase: PurchaseContext) -> str:
    return render_prompt(PROMPT_REFLECTIONS, purchase_details=describe_purchase(purchase))


def parse_reflections(text: str) -> list[str]:
    try:
        decoded: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReflectionError(f"OpenAI response was not valid JSON: {exc}") from exc

    # A bare JSON array is accepted as well.
    items = decoded.get("prompts") if isinstance(decoded, dict) else decoded
    if not isinstance(items, list):
        raise ReflectionError("OpenAI response did not contain a list of prompts")

    prompts = [item.strip() for item in items if isinstance(item, str) and item.strip()]
    if not prompts:
        raise ReflectionError("OpenAI response was empty")
    return prompts


def generate_reflections(
    purchase: PurchaseContext,
    *,
    settings: Settings,
    client_factory: Optional[ClientFactory] = None,
) -> list[str]:
    client = client_factory() if client_factory else resolve_openai_client(settings, ReflectionError)

    try:
        response = client.responses.create(
            model=settings.openai_model,
            input=build_reflection_prompt(purchase),
            temperature=settings.reflection_temperature,
            text={"format": build_reflections_response_format()},
        )
    except APIError as exc:
        raise ReflectionError(f"OpenAI API error: {exc}") from exc

    prompts = parse_reflections(extract_output_text(response))
    _logger.info("reflections:generated item=%s count=%d", purchase.name, len(prompts))
    return prompts
