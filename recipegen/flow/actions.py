"""Closed set of actions accepted by the flow reducer.

Result actions (success/failure) carry the generation their request was
issued under; the reducer drops them when it no longer matches.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from recipegen.flow.state import CacheKey, PendingRequest
from recipegen.models.models import FullRecipe, RecipeIdea


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetPrompt(Action):
    text: str


class GenerateIdeasStart(Action):
    prompt: str
    keep_current_ideas: bool = False


class GenerateIdeasSuccess(Action):
    generation: int
    prompt: str
    ideas: Tuple[RecipeIdea, ...]


class GenerateIdeasFailure(Action):
    generation: int
    message: str


class StartCooking(Action):
    idea: RecipeIdea


class UseCachedRecipe(Action):
    recipe: FullRecipe


class LoadRecipeStart(Action):
    pass


class LoadRecipeSuccess(Action):
    generation: int
    key: CacheKey
    recipe: FullRecipe


class LoadRecipeFailure(Action):
    generation: int
    message: str


class GoBackToIdeas(Action):
    pass


class EditPrompt(Action):
    pass


class NextStep(Action):
    pass


class PrevStep(Action):
    pass


class StepTo(Action):
    index: int


class RequireLogin(Action):
    message: str
    pending_request: Optional[PendingRequest] = None


class LoginSubmitted(Action):
    pass
