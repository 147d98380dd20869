"""Recipe flow controller.

Owns the FlowState, runs the asynchronous recipe requests and dispatches
their results through the reducer. Views read `state` and call the public
operations; they never touch state fields directly.
"""

from typing import Optional, Sequence

from recipegen.flow import actions as a
from recipegen.flow.reducer import reduce
from recipegen.flow.state import FlowState, recipe_cache_key
from recipegen.gateway.credentials import CredentialStore
from recipegen.models.models import FullRecipe, RecipeIdea
from recipegen.services.recipe_service import RecipeService
from recipegen.utils.exceptions import AuthError, RecipeGenError
from recipegen.utils.logger import logger


IDEAS_FALLBACK_MESSAGE = "Failed to generate recipe ideas."
DETAILS_FALLBACK_MESSAGE = "Failed to load recipe details."


class RecipeFlow:
    """State machine driving prompt -> ideas -> cooking."""

    def __init__(self, service: RecipeService, credentials: Optional[CredentialStore] = None) -> None:
        """Initialize the flow.

        Args:
            service: Recipe service used for both requests.
            credentials: Credential store behind the service's proxy client.
                When given and empty, the flow starts on the login screen.
        """
        self.service = service
        self.credentials = credentials
        self._state = FlowState()
        if credentials is not None and not credentials.has_credentials():
            self._state = FlowState(screen="login", resume_screen="home")

    @property
    def state(self) -> FlowState:
        return self._state

    def dispatch(self, action: a.Action) -> FlowState:
        self._state = reduce(self._state, action)
        return self._state

    # ---- Idea generation ----------------------------------------------------

    def set_prompt(self, text: str) -> None:
        self.dispatch(a.SetPrompt(text=text))

    async def submit(self, prompt: Optional[str] = None) -> None:
        """Generate ideas for `prompt` (default: the prompt being edited)."""
        if self._state.screen != "home":
            return
        await self._generate_ideas(self._state.prompt if prompt is None else prompt)

    async def regenerate(self) -> None:
        """Ask for a fresh set of ideas, avoiding the ones on screen."""
        if self._state.screen != "ideas":
            return
        await self._generate_ideas(self._state.submitted_prompt, self._state.ideas)

    async def _generate_ideas(self, base_prompt: str, previous_ideas: Sequence[RecipeIdea] = ()) -> None:
        cleaned_prompt = base_prompt.strip()
        if not cleaned_prompt:
            return

        before = self._state.ideas_generation
        self.dispatch(a.GenerateIdeasStart(prompt=cleaned_prompt, keep_current_ideas=bool(previous_ideas)))
        generation = self._state.ideas_generation
        if generation == before:
            return

        logger.info(f"Generating ideas for '{cleaned_prompt}'", extra={"generation": generation})
        try:
            ideas = await self.service.generate_ideas(cleaned_prompt, previous_ideas)
        except AuthError as e:
            self.dispatch(a.GenerateIdeasFailure(generation=generation, message=str(e)))
            if generation == self._state.ideas_generation:
                self.dispatch(a.RequireLogin(message=str(e), pending_request="ideas"))
            return
        except RecipeGenError as e:
            self.dispatch(a.GenerateIdeasFailure(generation=generation, message=str(e)))
            return
        except Exception:
            logger.exception("Idea generation crashed", extra={"generation": generation})
            self.dispatch(a.GenerateIdeasFailure(generation=generation, message=IDEAS_FALLBACK_MESSAGE))
            return

        self.dispatch(a.GenerateIdeasSuccess(generation=generation, prompt=cleaned_prompt, ideas=tuple(ideas)))

    # ---- Detail generation --------------------------------------------------

    async def select_idea(self, idea: RecipeIdea) -> None:
        """Open `idea` for cooking, from cache when it was expanded before."""
        before = self._state.details_generation
        self.dispatch(a.StartCooking(idea=idea))
        if self._state.details_generation == before:
            return

        prompt = self._state.submitted_prompt
        key = recipe_cache_key(prompt, idea.id)
        cached = self._state.recipe_cache.get(key)
        if cached is not None:
            logger.debug(f"Recipe cache hit for '{idea.id}'")
            self.dispatch(a.UseCachedRecipe(recipe=cached))
            return

        self.dispatch(a.LoadRecipeStart())
        generation = self._state.details_generation
        logger.info(f"Expanding idea '{idea.id}'", extra={"generation": generation})
        try:
            details = await self.service.generate_details(prompt, idea)
        except AuthError as e:
            self.dispatch(a.LoadRecipeFailure(generation=generation, message=str(e)))
            if generation == self._state.details_generation:
                self.dispatch(a.RequireLogin(message=str(e), pending_request="details"))
            return
        except RecipeGenError as e:
            self.dispatch(a.LoadRecipeFailure(generation=generation, message=str(e)))
            return
        except Exception:
            logger.exception("Detail generation crashed", extra={"generation": generation})
            self.dispatch(a.LoadRecipeFailure(generation=generation, message=DETAILS_FALLBACK_MESSAGE))
            return

        recipe = FullRecipe.merge(idea, details)
        self.dispatch(a.LoadRecipeSuccess(generation=generation, key=key, recipe=recipe))

    async def retry_details(self) -> None:
        """Re-run detail generation for the selected idea."""
        if self._state.screen != "cooking" or self._state.selected_idea is None:
            return
        await self.select_idea(self._state.selected_idea)

    # ---- Navigation ---------------------------------------------------------

    def go_back(self) -> None:
        self.dispatch(a.GoBackToIdeas())

    def edit_prompt(self) -> None:
        self.dispatch(a.EditPrompt())

    def next_step(self) -> None:
        self.dispatch(a.NextStep())

    def prev_step(self) -> None:
        self.dispatch(a.PrevStep())

    def step_to(self, index: int) -> None:
        """Jump to step `index`, clamped to the recipe's step range."""
        self.dispatch(a.StepTo(index=index))

    # ---- Login --------------------------------------------------------------

    async def login(self, password: str) -> None:
        """Store the shared password and resume whatever needed it.

        An empty password keeps the flow on the login screen with an error.
        """
        if self._state.screen != "login":
            return
        if self.credentials is None:
            raise RuntimeError("This flow has no credential store to log in with")

        try:
            self.credentials.save_password(password)
        except ValueError as e:
            self.dispatch(a.RequireLogin(message=str(e), pending_request=self._state.pending_request))
            return

        pending = self._state.pending_request
        self.dispatch(a.LoginSubmitted())

        if pending == "ideas":
            await self._generate_ideas(self._state.submitted_prompt, self._state.ideas)
        elif pending == "details":
            await self.retry_details()
