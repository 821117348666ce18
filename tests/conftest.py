import pytest

from domain.ingredients import Ingredient, InMemoryIngredientCatalog


@pytest.fixture
def flour() -> Ingredient:
    return Ingredient("flour", "Flour", "cups", "🌾")


@pytest.fixture
def sugar() -> Ingredient:
    return Ingredient("sugar", "Sugar", "teaspoons", "🍯")


@pytest.fixture
def butter() -> Ingredient:
    return Ingredient("butter", "Butter", "sticks", "🧈")


@pytest.fixture
def catalog() -> InMemoryIngredientCatalog:
    return InMemoryIngredientCatalog(
        [
            Ingredient("baking-soda", "Baking Soda", "teaspoons", "🧂"),
            Ingredient("nutmeg", "Nutmeg", "teaspoons", "🌰"),
            Ingredient("brown-sugar", "Brown Sugar", "cups", "🟫"),
        ]
    )
