"""Prompt templates for recipe idea generation and detail expansion.

Both templates are deterministic: the same inputs always produce the same
prompt text. Caller data (the user's request, previously seen ideas, the
selected idea) is embedded verbatim, ideas as pretty-printed JSON.
"""

import json
from typing import Sequence

from recipegen.models.models import IDEA_COUNT, MIN_STEPS, RecipeIdea


def _ideas_as_json(ideas: Sequence[RecipeIdea]) -> str:
    return json.dumps([idea.model_dump(by_alias=True) for idea in ideas], indent=2)


def _get_previous_ideas_section(previous_ideas: Sequence[RecipeIdea]) -> str:
    """Generate the block listing ideas the model must not repeat.

    Returns an empty string when there is nothing to avoid so the first
    request stays short.
    """
    if not previous_ideas:
        return ""
    return f"""Previously generated ideas to avoid repeating:
{_ideas_as_json(previous_ideas)}

"""


def get_ideas_prompt(prompt: str, previous_ideas: Sequence[RecipeIdea] = ()) -> str:
    """Build the idea generation prompt.

    Args:
        prompt: The user's free-text cooking request (already trimmed).
        previous_ideas: Ideas already shown for this request. When present the
            model is told to avoid the same titles, proteins, cuisines and
            flavor profiles.

    Returns:
        str: Prompt asking for exactly IDEA_COUNT ideas as a strict JSON array.
    """
    return f"""Generate {IDEA_COUNT} distinct recipe ideas based on this request: "{prompt}".
{_get_previous_ideas_section(previous_ideas)}Return only strict JSON in this exact format:
[
  {{
    "id": "short-kebab-case-id",
    "title": "Recipe title",
    "description": "1-2 sentence summary",
    "prepTime": "e.g. 15 min",
    "cookTime": "e.g. 30 min",
    "difficulty": "Easy/Medium/Hard"
  }}
]
Requirements:
- Exactly {IDEA_COUNT} recipes
- Practical for home cooking
- If previously generated ideas are provided, produce clearly different recipes with different primary proteins/vegetables/flavor profiles/cuisines and avoid repeating titles or close variants"""


def get_details_prompt(prompt: str, idea: RecipeIdea) -> str:
    """Build the detail expansion prompt for one selected idea."""
    return f"""You are expanding one selected recipe idea into a full home-cooking recipe.
Original user request: "{prompt}"
Selected recipe idea:
{json.dumps(idea.model_dump(by_alias=True), indent=2)}

Return only strict JSON in this exact format:
{{
  "servings": "e.g. 4",
  "ingredients": ["..."],
  "steps": ["...", "...", "...", "..."]
}}
Requirements:
- At least {MIN_STEPS} steps
- Ingredients and steps must match the selected idea
- Keep the recipe practical for home cooking"""
