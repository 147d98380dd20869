"""Pure reducer for the recipe flow.

`reduce(state, action)` returns the next FlowState. Actions that do not apply
to the current screen, and results from superseded requests, return the state
unchanged. Screen moves:

    login <-> any      (auth failure / password entered)
    home -> ideas      (submit)
    ideas -> ideas     (regenerate)
    ideas -> cooking   (select idea)
    cooking -> cooking (retry details)
    cooking -> ideas   (back)
    ideas -> home      (edit prompt)
"""

from typing import Callable, Dict, Type

from recipegen.flow import actions as a
from recipegen.flow.state import FlowState
from recipegen.utils.logger import logger


def _clamp_step(state: FlowState, index: int) -> int:
    return max(0, min(index, state.total_steps - 1))


def _set_prompt(state: FlowState, action: a.SetPrompt) -> FlowState:
    return state.model_copy(update={"prompt": action.text})


def _generate_ideas_start(state: FlowState, action: a.GenerateIdeasStart) -> FlowState:
    if state.screen not in ("home", "ideas"):
        return state
    return state.model_copy(update={
        "screen": "ideas",
        "loading": True,
        "error": None,
        "submitted_prompt": action.prompt,
        "ideas": state.ideas if action.keep_current_ideas else (),
        "ideas_generation": state.ideas_generation + 1,
    })


def _generate_ideas_success(state: FlowState, action: a.GenerateIdeasSuccess) -> FlowState:
    if action.generation != state.ideas_generation:
        logger.debug("Dropping stale idea list", extra={"generation": action.generation})
        return state
    return state.model_copy(update={
        "screen": "ideas",
        "loading": False,
        "error": None,
        "submitted_prompt": action.prompt,
        "ideas": action.ideas,
        "selected_idea": None,
        "active_recipe": None,
        "details_loading": False,
        "details_error": None,
        "details_generation": state.details_generation + 1,
    })


def _generate_ideas_failure(state: FlowState, action: a.GenerateIdeasFailure) -> FlowState:
    if action.generation != state.ideas_generation:
        logger.debug("Dropping stale idea failure", extra={"generation": action.generation})
        return state
    return state.model_copy(update={
        "loading": False,
        "error": action.message,
        "selected_idea": None,
        "active_recipe": None,
    })


def _start_cooking(state: FlowState, action: a.StartCooking) -> FlowState:
    if state.screen not in ("ideas", "cooking"):
        return state
    return state.model_copy(update={
        "screen": "cooking",
        "selected_idea": action.idea,
        "active_recipe": None,
        "current_step": 0,
        "details_loading": False,
        "details_error": None,
        "details_generation": state.details_generation + 1,
    })


def _use_cached_recipe(state: FlowState, action: a.UseCachedRecipe) -> FlowState:
    return state.model_copy(update={"active_recipe": action.recipe, "details_loading": False})


def _load_recipe_start(state: FlowState, action: a.LoadRecipeStart) -> FlowState:
    return state.model_copy(update={"active_recipe": None, "details_loading": True})


def _load_recipe_success(state: FlowState, action: a.LoadRecipeSuccess) -> FlowState:
    cache = {**state.recipe_cache, action.key: action.recipe}
    if action.generation != state.details_generation:
        # Cached under its own key, never shown
        logger.debug("Caching stale recipe without activating it", extra={"generation": action.generation})
        return state.model_copy(update={"recipe_cache": cache})
    return state.model_copy(update={
        "details_loading": False,
        "active_recipe": action.recipe,
        "recipe_cache": cache,
    })


def _load_recipe_failure(state: FlowState, action: a.LoadRecipeFailure) -> FlowState:
    if action.generation != state.details_generation:
        logger.debug("Dropping stale detail failure", extra={"generation": action.generation})
        return state
    return state.model_copy(update={"details_loading": False, "details_error": action.message})


def _go_back_to_ideas(state: FlowState, action: a.GoBackToIdeas) -> FlowState:
    if state.screen != "cooking":
        return state
    return state.model_copy(update={
        "screen": "ideas",
        "active_recipe": None,
        "selected_idea": None,
        "details_error": None,
        "details_loading": False,
        "current_step": 0,
        "details_generation": state.details_generation + 1,
    })


def _edit_prompt(state: FlowState, action: a.EditPrompt) -> FlowState:
    if state.screen != "ideas":
        return state
    return state.model_copy(update={
        "screen": "home",
        "prompt": state.submitted_prompt,
        "loading": False,
        "ideas_generation": state.ideas_generation + 1,
    })


def _next_step(state: FlowState, action: a.NextStep) -> FlowState:
    if not state.active_recipe:
        return state
    return state.model_copy(update={"current_step": _clamp_step(state, state.current_step + 1)})


def _prev_step(state: FlowState, action: a.PrevStep) -> FlowState:
    if not state.active_recipe:
        return state
    return state.model_copy(update={"current_step": _clamp_step(state, state.current_step - 1)})


def _step_to(state: FlowState, action: a.StepTo) -> FlowState:
    if not state.active_recipe:
        return state
    return state.model_copy(update={"current_step": _clamp_step(state, action.index)})


def _require_login(state: FlowState, action: a.RequireLogin) -> FlowState:
    return state.model_copy(update={
        "screen": "login",
        "resume_screen": state.resume_screen if state.screen == "login" else state.screen,
        "pending_request": action.pending_request,
        "auth_error": action.message,
    })


def _login_submitted(state: FlowState, action: a.LoginSubmitted) -> FlowState:
    if state.screen != "login":
        return state
    return state.model_copy(update={
        "screen": state.resume_screen or "home",
        "resume_screen": None,
        "pending_request": None,
        "auth_error": None,
    })


REDUCERS: Dict[Type[a.Action], Callable[[FlowState, a.Action], FlowState]] = {
    a.SetPrompt: _set_prompt,
    a.GenerateIdeasStart: _generate_ideas_start,
    a.GenerateIdeasSuccess: _generate_ideas_success,
    a.GenerateIdeasFailure: _generate_ideas_failure,
    a.StartCooking: _start_cooking,
    a.UseCachedRecipe: _use_cached_recipe,
    a.LoadRecipeStart: _load_recipe_start,
    a.LoadRecipeSuccess: _load_recipe_success,
    a.LoadRecipeFailure: _load_recipe_failure,
    a.GoBackToIdeas: _go_back_to_ideas,
    a.EditPrompt: _edit_prompt,
    a.NextStep: _next_step,
    a.PrevStep: _prev_step,
    a.StepTo: _step_to,
    a.RequireLogin: _require_login,
    a.LoginSubmitted: _login_submitted,
}


def reduce(state: FlowState, action: a.Action) -> FlowState:
    """Apply `action` to `state` and return the resulting state.

    Raises:
        TypeError: If `action` is not one of the known action types.
    """
    handler = REDUCERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown flow action: {type(action).__name__}")
    return handler(state, action)
