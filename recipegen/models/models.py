"""Data models and schemas for RecipeGen.

Defines Pydantic models for the recipe domain (ideas, details, full recipes)
and for the proxy's request/response bodies.
All models use Pydantic v2. Domain models are strict: the AI reply must carry
the right JSON types, nothing is coerced.
"""

from typing import Annotated, List, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


Difficulty = Literal["Easy", "Medium", "Hard"]
DIFFICULTY_LEVELS = get_args(Difficulty)

IDEA_COUNT = 4
MIN_STEPS = 4


class RecipeIdea(BaseModel):
    """A short recipe proposal without instructions.

    Produced only by idea generation and identified by `id` for caching.
    Serialized with camelCase keys (prepTime, cookTime) to match the JSON the
    model is asked to produce.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    id: Annotated[str, Field(min_length=1, description="Short kebab-case slug, unique within one idea list")]
    title: Annotated[str, Field(description="Recipe title")]
    description: Annotated[str, Field(description="1-2 sentence summary")]
    prep_time: Annotated[str, Field(alias="prepTime", description="e.g. 15 min")]
    cook_time: Annotated[str, Field(alias="cookTime", description="e.g. 30 min")]
    difficulty: Difficulty


class RecipeDetails(BaseModel):
    """Servings, ingredients and steps for exactly one RecipeIdea."""

    model_config = ConfigDict(frozen=True, strict=True)

    servings: Annotated[str, Field(description="e.g. 4")]
    ingredients: List[str]
    steps: Annotated[List[str], Field(min_length=MIN_STEPS, description=f"At least {MIN_STEPS} steps")]


class FullRecipe(RecipeIdea, RecipeDetails):
    """RecipeIdea merged with its RecipeDetails."""

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    @classmethod
    def merge(cls, idea: RecipeIdea, details: RecipeDetails) -> "FullRecipe":
        return cls(**idea.model_dump(), **details.model_dump())


IDEA_LIST_ADAPTER = TypeAdapter(List[RecipeIdea])


class GenerateRequest(BaseModel):
    """Body of POST /api/generate."""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    prompt_text: Annotated[str, Field(alias="promptText", description="Prompt forwarded to Gemini")]


class GenerateResponse(BaseModel):
    """Successful proxy reply: the raw text produced by the model."""

    text: str


class ErrorResponse(BaseModel):
    """Error envelope used for every non-200 proxy reply."""

    error: str
