"""Shared fixtures for unit tests."""

import pytest

from factories import make_details, make_idea
from recipegen.models.models import FullRecipe


@pytest.fixture
def ideas():
    """Four distinct ideas, as a valid idea reply would produce."""
    return [
        make_idea("lentil-soup", "Lentil Soup"),
        make_idea("minestrone", "Minestrone"),
        make_idea("tomato-bisque", "Tomato Bisque"),
        make_idea("pho", "Vegetable Pho"),
    ]


@pytest.fixture
def details():
    return make_details()


@pytest.fixture
def full_recipe(ideas, details):
    return FullRecipe.merge(ideas[0], details)
