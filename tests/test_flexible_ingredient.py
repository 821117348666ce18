import pytest

from domain.errors import ValidationError
from domain.flexible_ingredient import (
    FlexibleIngredient,
    IngredientRange,
    format_amount,
    round_half_up,
)
from domain.ingredients import Ingredient, Nutrition


class FakeConverter:
    def __init__(self, grams_per_unit: float, nutrition: Nutrition | None) -> None:
        self.grams_per_unit = grams_per_unit
        self._nutrition = nutrition

    def to_grams(self, ingredient: Ingredient, amount: float, unit: str) -> float:
        return amount * self.grams_per_unit

    def nutrition(self, ingredient: Ingredient) -> Nutrition | None:
        return self._nutrition


@pytest.mark.parametrize("requested", (None, 0, 5, 12.5, 1000))
def test_fixed_amount_ignores_request(flour: Ingredient, requested: float | None) -> None:
    ingredient = FlexibleIngredient(flour, 5)
    assert ingredient.is_fixed
    assert ingredient.get_amount(requested) == 5


def test_ranged_amount_scenario(sugar: Ingredient) -> None:
    ingredient = FlexibleIngredient(sugar, {"min": 20, "max": 35, "recommended": 28})
    assert not ingredient.is_fixed
    assert ingredient.get_amount() == 28
    assert ingredient.get_amount(50) == 35
    assert ingredient.get_amount(5) == 20


@pytest.mark.parametrize("requested", (-10, 0, 5, 10, 14.5, 20, 25, 1e9))
def test_range_clamp(sugar: Ingredient, requested: float) -> None:
    ingredient = FlexibleIngredient(sugar, IngredientRange.create(10, 20))
    assert 10 <= ingredient.get_amount(requested) <= 20


def test_range_defaults(sugar: Ingredient) -> None:
    ingredient = FlexibleIngredient(sugar, {"min": 10, "max": 20})
    assert ingredient.range == IngredientRange(min=10, max=20, recommended=15, step=1)
    assert ingredient.get_amount() == 15
    assert ingredient.get_amount(5) == 10
    assert ingredient.get_amount(25) == 20


@pytest.mark.parametrize(
    "amount",
    (
        {"min": 20, "max": 20},
        {"min": 30, "max": 20},
        {"min": -1, "max": 5},
        {"min": 1, "max": 5, "recommended": 6},
        {"min": 1, "max": 5, "step": 0},
        {"max": 5},
    ),
)
def test_invalid_range_is_rejected(sugar: Ingredient, amount: dict[str, float]) -> None:
    with pytest.raises(ValidationError):
        FlexibleIngredient(sugar, amount)


def test_negative_fixed_amount_is_rejected(flour: Ingredient) -> None:
    with pytest.raises(ValidationError):
        FlexibleIngredient(flour, -1)


def test_is_valid_amount(flour: Ingredient, sugar: Ingredient) -> None:
    fixed = FlexibleIngredient(flour, 2)
    assert fixed.is_valid_amount(2)
    assert not fixed.is_valid_amount(2.5)

    ranged = FlexibleIngredient(sugar, {"min": 1, "max": 3})
    assert ranged.is_valid_amount(1)
    assert ranged.is_valid_amount(3)
    assert not ranged.is_valid_amount(3.1)


def test_scale_fixed(flour: Ingredient) -> None:
    original = FlexibleIngredient(flour, 2, "sifted")
    scaled = original.scale(1.5)
    assert scaled is not original
    assert scaled.get_amount() == 3
    assert scaled.description == "sifted"
    assert original.get_amount() == 2


def test_scale_range_multiplies_every_bound(sugar: Ingredient) -> None:
    scaled = FlexibleIngredient(
        sugar, {"min": 20, "max": 35, "recommended": 28, "step": 1}
    ).scale(2)
    assert scaled.range == IngredientRange(min=40, max=70, recommended=56, step=2)


@pytest.mark.parametrize("factor", (0, -1))
def test_scale_rejects_non_positive_factor(flour: Ingredient, factor: float) -> None:
    with pytest.raises(ValidationError):
        FlexibleIngredient(flour, 2).scale(factor)


def test_display_strings(flour: Ingredient, sugar: Ingredient) -> None:
    assert FlexibleIngredient(flour, 2.0).to_display_string() == "2 cups Flour"
    ranged = FlexibleIngredient(sugar, {"min": 20, "max": 35, "recommended": 28})
    assert ranged.to_display_string() == "28 teaspoons Sugar (20-35 teaspoons)"
    assert ranged.to_display_string(30) == "30 teaspoons Sugar (20-35 teaspoons)"
    assert ranged.get_range_description() == "20-35 teaspoons (recommended: 28)"
    assert FlexibleIngredient(flour, 2.5).get_range_description() == "2.5 cups"


def test_nutrition_delegates_to_converter(flour: Ingredient) -> None:
    converter = FakeConverter(
        grams_per_unit=120,
        nutrition=Nutrition(calories_per_gram=3.6, protein_per_gram=0.1),
    )
    ingredient = FlexibleIngredient(flour, 2)
    assert ingredient.to_grams(converter) == 240
    assert ingredient.to_grams(converter, 1) == 120
    info = ingredient.get_nutrition_info(converter)
    assert info["calories"] == pytest.approx(864)
    assert info["protein"] == pytest.approx(24)
    assert info["fat"] == 0
    assert ingredient.calculate_calories(converter) == pytest.approx(864)


def test_nutrition_without_data_is_zero(flour: Ingredient) -> None:
    info = FlexibleIngredient(flour, 2).get_nutrition_info(FakeConverter(120, None))
    assert info == {"grams": 240, "calories": 0, "protein": 0, "fat": 0, "carbs": 0}


@pytest.mark.parametrize(
    "value,expected",
    ((2, "2"), (2.0, "2"), (2.5, "2.5"), (375, "375"), ("medium", "medium"), (True, "True")),
)
def test_format_amount(value: object, expected: str) -> None:
    assert format_amount(value) == expected


@pytest.mark.parametrize("value,expected", ((10.5, 11), (10.4, 10), (2.5, 3), (0, 0)))
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected
