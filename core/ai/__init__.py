"""AI-focused helpers for Spendlens."""

from .reflections import build_reflection_prompt, generate_reflections
from .statements import analyse_statements

__all__ = [
    "analyse_statements",
    "build_reflection_prompt",
    "generate_reflections",
]
