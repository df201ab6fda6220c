"""Prompt templates and loaders for Spendlens."""

from .base import PromptTemplate, get_prompt_text, load_prompt, render_prompt

PROMPT_STATEMENTS_SYSTEM = "statements_system"
PROMPT_STATEMENTS_USER = "statements_user"
PROMPT_REFLECTIONS = "reflections"

__all__ = [
    "PROMPT_REFLECTIONS",
    "PROMPT_STATEMENTS_SYSTEM",
    "PROMPT_STATEMENTS_USER",
    "PromptTemplate",
    "get_prompt_text",
    "load_prompt",
    "render_prompt",
]
