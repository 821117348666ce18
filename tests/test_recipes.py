import pytest

from domain.errors import OrderGapError, ValidationError
from domain.flexible_ingredient import FlexibleIngredient
from domain.ingredients import Ingredient, IngredientAmount
from domain.recipes import Difficulty, MultiStepRecipe
from domain.steps import IngredientGroup, RecipeStep, StepType


def step(order: int, *ingredients: FlexibleIngredient, **kwargs: object) -> RecipeStep:
    return RecipeStep(
        id=f"step-{order}",
        name=f"Step {order}",
        order=order,
        type=StepType.preparation,
        instructions=[f"Do step {order}"],
        ingredients=ingredients,
        **kwargs,  # pyright: ignore[reportArgumentType]
    )


def recipe(steps: list[RecipeStep], **kwargs: object) -> MultiStepRecipe:
    fields: dict[str, object] = {
        "id": "cookies",
        "name": "Cookies",
        "description": "Test cookies",
        "base_servings": 4,
        "difficulty": Difficulty.medium,
        "baking_time": 20,
        "icon": "🍪",
        "tags": ["test"],
        "steps": steps,
    }
    fields.update(kwargs)
    return MultiStepRecipe(**fields)  # pyright: ignore[reportArgumentType]


def test_steps_are_sorted_by_order() -> None:
    built = recipe([step(2), step(1), step(3)])
    assert [s.order for s in built.steps] == [1, 2, 3]


@pytest.mark.parametrize("orders", ([1, 3], [0, 1], [2, 3], [1, 1], [1, 2, 2]))
def test_order_gaps_are_rejected(orders: list[int]) -> None:
    with pytest.raises(OrderGapError):
        recipe([step(o) for o in orders])


@pytest.mark.parametrize(
    "kwargs",
    (
        {"id": ""},
        {"name": " "},
        {"base_servings": 0},
        {"base_servings": -2},
        {"baking_time": -1},
        {"steps": []},
    ),
)
def test_invalid_recipes_are_rejected(kwargs: dict[str, object]) -> None:
    fields: dict[str, object] = {"steps": [step(1)]}
    fields.update(kwargs)
    with pytest.raises(ValidationError):
        recipe(**fields)  # pyright: ignore[reportArgumentType]


def test_scale_to_servings_scenario(flour: Ingredient) -> None:
    built = recipe([step(1, FlexibleIngredient(flour, 2))])
    scaled = built.scale_to_servings(8)
    assert scaled.base_servings == 8
    assert scaled.name == "Cookies (8 servings)"
    assert scaled.get_total_ingredient_requirements() == {"flour": 4}
    assert built.get_total_ingredient_requirements() == {"flour": 2}


@pytest.mark.parametrize("target", (1, 3, 7, 12.5, 100))
def test_scaling_law(flour: Ingredient, sugar: Ingredient, target: float) -> None:
    built = recipe(
        [
            step(1, FlexibleIngredient(flour, 2.25)),
            step(
                2,
                FlexibleIngredient(sugar, {"min": 20, "max": 35, "recommended": 28}),
                groups=[IngredientGroup.of("dry", [FlexibleIngredient(flour, 0.5)])],
            ),
        ]
    )
    original = built.get_total_ingredient_requirements()
    scaled = built.scale_to_servings(target)
    assert scaled.base_servings == target
    for id, amount in scaled.get_total_ingredient_requirements().items():
        assert amount == pytest.approx(original[id] * target / 4, abs=1e-6)


@pytest.mark.parametrize("target", (0, -4))
def test_scale_to_non_positive_servings_fails(flour: Ingredient, target: float) -> None:
    with pytest.raises(ValidationError):
        recipe([step(1, FlexibleIngredient(flour, 2))]).scale_to_servings(target)


def test_requirements_sum_across_steps_and_overrides(
    flour: Ingredient, sugar: Ingredient
) -> None:
    built = recipe(
        [
            step(1, FlexibleIngredient(flour, 2)),
            step(2, FlexibleIngredient(flour, 1), FlexibleIngredient(sugar, {"min": 1, "max": 5})),
        ]
    )
    assert built.get_total_ingredient_requirements() == {"flour": 3, "sugar": 3}
    assert built.get_total_ingredient_requirements({2: {"sugar": 4}}) == {
        "flour": 3,
        "sugar": 4,
    }
    assert built.get_total_ingredient_requirements({1: {"sugar": 4}}) == {
        "flour": 3,
        "sugar": 3,
    }


@pytest.mark.parametrize(
    "stock",
    (
        {},
        {"flour": 3},
        {"flour": 3, "sugar": 3},
        {"flour": 10, "sugar": 10, "eggs": 12},
        {"flour": 2.9, "sugar": 3},
    ),
)
def test_can_be_made_with_agrees_with_missing(
    flour: Ingredient, sugar: Ingredient, stock: dict[str, float]
) -> None:
    built = recipe(
        [
            step(1, FlexibleIngredient(flour, 2)),
            step(2, FlexibleIngredient(flour, 1), FlexibleIngredient(sugar, 3)),
        ]
    )
    assert built.can_be_made_with(stock) is (not built.get_missing_ingredients(stock))


def test_missing_ingredients_report_shortfall(flour: Ingredient, sugar: Ingredient) -> None:
    built = recipe(
        [
            step(1, FlexibleIngredient(flour, 2)),
            step(2, groups=[IngredientGroup.of("dry", [FlexibleIngredient(sugar, 3)])]),
        ]
    )
    missing = built.get_missing_ingredients({"flour": 5, "sugar": 1})
    assert missing == [IngredientAmount(sugar, 2)]
    assert missing[0].ingredient is sugar
    assert not built.can_be_made_with({"flour": 5, "sugar": 1})
    assert built.can_be_made_with({"flour": 2, "sugar": 3})


def test_overview_and_queries(flour: Ingredient) -> None:
    built = recipe(
        [
            step(1, FlexibleIngredient(flour, 2), estimated_time=10),
            step(2),
            step(3, estimated_time=5),
        ]
    )
    overview = built.get_overview()
    assert overview.total_steps == 3
    assert overview.total_time == 15
    assert overview.difficulty is Difficulty.medium
    assert overview.tags == ["test"]
    assert overview.servings == 4

    assert built.get_step(2) is built.steps[1]
    assert built.get_step(9) is None
    assert built.get_step_ingredients(1)[0].ingredient is flour
    assert built.get_step_ingredients(9) == []
    assert [s.order for s in built.get_steps_using_ingredient("flour")] == [1]
    assert built.has_ingredient("flour")
    assert not built.has_ingredient("sugar")
    assert built.ingredients == [IngredientAmount(flour, 2)]
    assert built.get_scaling_factor(2) == 0.5
    assert str(built) == "Cookies (4 servings, 3 steps, medium)"


def test_recipes_are_equal_by_id(flour: Ingredient) -> None:
    a = recipe([step(1)])
    b = recipe([step(1, FlexibleIngredient(flour, 1))], name="Other")
    assert a == b
    assert a.scale_to_servings(8) == a
