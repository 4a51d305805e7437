"""Prompt templates for the recipe assistant."""

from nomnom.core.prompts.recipe_prompt import (
    EMPTY_CONTEXT_MARKER,
    RECIPE_PROMPT,
    REFUSAL_MESSAGE,
    SYSTEM_TEMPLATE,
    compose,
)

__all__ = [
    "EMPTY_CONTEXT_MARKER",
    "RECIPE_PROMPT",
    "REFUSAL_MESSAGE",
    "SYSTEM_TEMPLATE",
    "compose",
]
