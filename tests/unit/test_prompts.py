"""Unit tests for prompt templates."""

import json

from recipegen.models.models import RecipeIdea
from recipegen.prompts.prompts import get_details_prompt, get_ideas_prompt


IDEA = RecipeIdea(
    id="lentil-soup",
    title="Lentil Soup",
    description="A hearty red lentil soup.",
    prep_time="10 min",
    cook_time="30 min",
    difficulty="Easy",
)


class TestIdeasPrompt:
    """Tests for get_ideas_prompt."""

    def test_prompt_embeds_request_and_count(self):
        prompt = get_ideas_prompt("vegetarian soup")

        assert 'based on this request: "vegetarian soup"' in prompt
        assert "Generate 4 distinct recipe ideas" in prompt
        assert "Exactly 4 recipes" in prompt
        assert '"prepTime"' in prompt

    def test_prompt_without_previous_ideas_has_no_avoid_block(self):
        assert "Previously generated ideas" not in get_ideas_prompt("soup")

    def test_prompt_lists_previous_ideas_as_json(self):
        prompt = get_ideas_prompt("soup", [IDEA])

        assert "Previously generated ideas to avoid repeating:" in prompt
        assert json.dumps([IDEA.model_dump(by_alias=True)], indent=2) in prompt

    def test_prompt_is_deterministic(self):
        assert get_ideas_prompt("soup", [IDEA]) == get_ideas_prompt("soup", [IDEA])


class TestDetailsPrompt:
    """Tests for get_details_prompt."""

    def test_prompt_embeds_request_and_idea(self):
        prompt = get_details_prompt("vegetarian soup", IDEA)

        assert 'Original user request: "vegetarian soup"' in prompt
        assert json.dumps(IDEA.model_dump(by_alias=True), indent=2) in prompt
        assert "At least 4 steps" in prompt
        assert '"servings"' in prompt
