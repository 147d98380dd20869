"""Flow state record for the recipe UI.

FlowState is frozen: it only changes by the reducer returning a new copy, so
every transition is a named action that can be tested without a view.
"""

from typing import Annotated, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from recipegen.models.models import FullRecipe, RecipeIdea


Screen = Literal["login", "home", "ideas", "cooking"]
PendingRequest = Literal["ideas", "details"]
CacheKey = Tuple[str, str]


def recipe_cache_key(prompt: str, idea_id: str) -> CacheKey:
    """Cache key for the full recipe of `idea_id` generated under `prompt`."""
    return (prompt, idea_id)


class FlowState(BaseModel):
    """Everything the views render, plus request bookkeeping.

    `ideas_generation` / `details_generation` count requests per loading
    context. A result is applied only if it carries the current value.
    """

    model_config = ConfigDict(frozen=True)

    screen: Screen = "home"
    prompt: str = ""
    submitted_prompt: str = ""

    # Idea generation
    ideas: Tuple[RecipeIdea, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    ideas_generation: int = 0

    # Detail generation
    selected_idea: Optional[RecipeIdea] = None
    active_recipe: Optional[FullRecipe] = None
    details_loading: bool = False
    details_error: Optional[str] = None
    details_generation: int = 0
    recipe_cache: Annotated[Dict[CacheKey, FullRecipe], Field(default_factory=dict)]

    current_step: int = 0

    # Login screen
    resume_screen: Optional[Screen] = None
    pending_request: Optional[PendingRequest] = None
    auth_error: Optional[str] = None

    @property
    def total_steps(self) -> int:
        return len(self.active_recipe.steps) if self.active_recipe else 0

    @property
    def progress(self) -> float:
        """Percentage of steps reached, counting the current one."""
        if not self.total_steps:
            return 0.0
        return (self.current_step + 1) / self.total_steps * 100

    @property
    def current_step_text(self) -> Optional[str]:
        if not self.active_recipe:
            return None
        return self.active_recipe.steps[self.current_step]
