#!/usr/bin/env python3
"""Terminal view for RecipeGen.

Renders the current flow screen and maps keystrokes to flow operations.
By default prompts go through the proxy (PROXY_URL) with the cached shared
password; --direct calls Gemini with the local GEMINI_API_KEY instead.

Usage:
    python cook.py
    python cook.py --direct
    python cook.py "quick vegetarian dinner"   # submit right away
"""

import asyncio
import sys

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from recipegen.flow.controller import RecipeFlow
from recipegen.flow.state import FlowState
from recipegen.gateway.credentials import CredentialStore
from recipegen.gateway.gemini import GeminiGateway
from recipegen.gateway.proxy_client import ProxyClient
from recipegen.services.recipe_service import RecipeService
from recipegen.utils.config import config
from recipegen.utils.logger import logger

console = Console()

QUIT = "q"


async def ask(question: str, password: bool = False, default: str | None = None) -> str:
    """Read a line without blocking the event loop."""
    if default is None:
        return await asyncio.to_thread(Prompt.ask, question, password=password)
    return await asyncio.to_thread(Prompt.ask, question, password=password, default=default)


def render_ideas(state: FlowState) -> None:
    console.print(Panel(f"Ideas for [bold]{state.submitted_prompt}[/bold]"))
    if state.error:
        console.print(f"[red]{state.error}[/red]")
    if not state.ideas:
        return

    table = Table(show_lines=True)
    table.add_column("#", justify="right")
    table.add_column("Recipe")
    table.add_column("Prep")
    table.add_column("Cook")
    table.add_column("Difficulty")
    for number, idea in enumerate(state.ideas, start=1):
        table.add_row(str(number), f"[bold]{idea.title}[/bold]\n{idea.description}", idea.prep_time, idea.cook_time, idea.difficulty)
    console.print(table)


def render_cooking(state: FlowState) -> None:
    idea = state.active_recipe or state.selected_idea
    console.print(Panel(f"[bold]{idea.title}[/bold]\n{idea.description}"))

    if state.details_error:
        console.print(f"[red]{state.details_error}[/red]")
        return
    if not state.active_recipe:
        console.print("[yellow]Ingredients will appear once the recipe is ready.[/yellow]")
        return

    recipe = state.active_recipe
    console.print(f"[bold]Serves {recipe.servings}[/bold]")
    for ingredient in recipe.ingredients:
        console.print(f"  • {ingredient}")
    console.print()
    console.print(f"[dim]Step {state.current_step + 1} of {state.total_steps} ({round(state.progress)}%)[/dim]")
    console.print(Panel(state.current_step_text))


async def handle_ideas(flow: RecipeFlow, choice: str) -> None:
    state = flow.state
    if choice == "r":
        with console.status("Generating new ideas..."):
            await flow.regenerate()
    elif choice == "e":
        flow.edit_prompt()
    elif choice.isdigit() and 1 <= int(choice) <= len(state.ideas):
        with console.status("Generating the full recipe..."):
            await flow.select_idea(state.ideas[int(choice) - 1])
    else:
        console.print(f"[yellow]Unknown choice: {choice}[/yellow]")


async def handle_cooking(flow: RecipeFlow, choice: str) -> None:
    if choice == "n":
        flow.next_step()
    elif choice == "p":
        flow.prev_step()
    elif choice == "b":
        flow.go_back()
    elif choice == "t":
        with console.status("Retrying..."):
            await flow.retry_details()
    elif choice.isdigit():
        flow.step_to(int(choice) - 1)
    else:
        console.print(f"[yellow]Unknown choice: {choice}[/yellow]")


async def run(flow: RecipeFlow, initial_prompt: str | None = None) -> None:
    if initial_prompt:
        flow.set_prompt(initial_prompt)

    while True:
        state = flow.state
        console.print()

        if state.screen == "login":
            if state.auth_error:
                console.print(f"[red]{state.auth_error}[/red]")
            password = await ask("RecipeGen password", password=True)
            await flow.login(password)

        elif state.screen == "home":
            if initial_prompt:
                prompt, initial_prompt = initial_prompt, None
            else:
                prompt = await ask(f"What would you like to cook? ({QUIT} to quit)", default=state.prompt or None)
            if prompt.strip().lower() == QUIT:
                return
            flow.set_prompt(prompt)
            with console.status("Generating recipe ideas..."):
                await flow.submit()

        elif state.screen == "ideas":
            render_ideas(state)
            choice = await ask(f"Pick 1-{len(state.ideas)}, r = new ideas, e = edit prompt, {QUIT} = quit")
            if choice.strip().lower() == QUIT:
                return
            await handle_ideas(flow, choice.strip().lower())

        elif state.screen == "cooking":
            render_cooking(state)
            if state.details_error:
                hint = "t = retry, b = back"
            else:
                hint = f"n = next, p = previous, 1-{state.total_steps} = jump, b = back"
            choice = await ask(f"{hint}, {QUIT} = quit")
            if choice.strip().lower() == QUIT:
                return
            await handle_cooking(flow, choice.strip().lower())


def build_flow(direct: bool) -> RecipeFlow:
    if direct:
        logger.info(f"Calling Gemini directly with model {config.GEMINI_MODEL}")
        return RecipeFlow(RecipeService(GeminiGateway()))

    credentials = CredentialStore(config.CREDENTIALS_FILE)
    logger.info(f"Using RecipeGen proxy at {config.PROXY_URL}")
    return RecipeFlow(RecipeService(ProxyClient(config.PROXY_URL, credentials)), credentials=credentials)


if __name__ == "__main__":
    args = sys.argv[1:]
    direct_mode = "--direct" in args
    prompt_words = [arg for arg in args if arg != "--direct"]

    try:
        flow = build_flow(direct_mode)
        asyncio.run(run(flow, " ".join(prompt_words) or None))
    except KeyboardInterrupt:
        logger.info("\nInterrupted by user.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"RecipeGen failed: {e}", exc_info=True)
        sys.exit(1)
