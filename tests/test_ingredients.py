import json
from pathlib import Path

import pytest

from domain.errors import ConfigFetchError, ValidationError
from domain.ingredients import (
    STARTER_CATALOG,
    Ingredient,
    IngredientAmount,
    InMemoryIngredientCatalog,
)

from tests.fakes import DATA_DIR


@pytest.mark.parametrize(
    "id,name,unit",
    (("", "Flour", "cups"), ("flour", " ", "cups"), ("flour", "Flour", "")),
)
def test_ingredient_needs_id_name_and_unit(id: str, name: str, unit: str) -> None:
    with pytest.raises(ValidationError):
        Ingredient(id, name, unit)


def test_ingredients_are_equal_by_id(flour: Ingredient) -> None:
    assert flour == Ingredient("flour", "Plain Flour", "grams")
    assert flour != Ingredient("rye", "Flour", "cups")
    assert len({flour, Ingredient("flour", "Other", "grams")}) == 1
    assert str(flour) == "Flour (cups)"


def test_ingredient_amount_arithmetic(butter: Ingredient) -> None:
    amount = IngredientAmount(butter, 2)
    assert amount.add(1).quantity == 3
    assert amount.subtract(0.5).quantity == 1.5
    assert amount.multiply(1.5).quantity == 3
    assert amount.quantity == 2
    assert amount == IngredientAmount(butter, 2.0004)
    assert amount != IngredientAmount(butter, 2.01)


def test_ingredient_amount_display(butter: Ingredient) -> None:
    assert str(IngredientAmount(butter, 2)) == "2 sticks Butter"
    assert str(IngredientAmount(butter, 2.5)) == "2.5 sticks Butter"


@pytest.mark.parametrize("quantity", (-1, float("nan"), float("inf")))
def test_ingredient_amount_rejects_bad_quantities(butter: Ingredient, quantity: float) -> None:
    with pytest.raises(ValidationError):
        IngredientAmount(butter, quantity)


def test_ingredient_amount_cannot_go_negative(butter: Ingredient) -> None:
    with pytest.raises(ValidationError):
        IngredientAmount(butter, 1).subtract(2)
    with pytest.raises(ValidationError):
        IngredientAmount(butter, 1).multiply(-1)


def test_catalog_lookup_and_merge(catalog: InMemoryIngredientCatalog) -> None:
    assert "nutmeg" in catalog
    assert catalog.get_ingredient("flour") is None
    assert len(STARTER_CATALOG) == 5
    assert STARTER_CATALOG.get_ingredient("chocolate").name == "Chocolate Chips"  # type: ignore[union-attr]

    merged = STARTER_CATALOG.merged_with(
        InMemoryIngredientCatalog([Ingredient("flour", "Flour", "grams")])
    )
    assert merged.get_ingredient("flour").unit == "grams"  # type: ignore[union-attr]
    assert len(merged) == 5
    assert len(STARTER_CATALOG.merged_with(catalog)) == 8


def test_catalog_from_bundled_file() -> None:
    catalog = InMemoryIngredientCatalog.from_file(DATA_DIR / "ingredients.json")
    assert {"baking-soda", "nutmeg", "brown-sugar"} <= {
        i.id for i in catalog.get_all_ingredients()
    }
    assert catalog.get_ingredient("nutmeg").unit == "teaspoons"  # type: ignore[union-attr]


def test_catalog_file_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigFetchError):
        InMemoryIngredientCatalog.from_file(tmp_path / "missing.json")

    broken = tmp_path / "ingredients.json"
    broken.write_text(json.dumps({"ingredients": [{"id": "x"}]}))
    with pytest.raises(ConfigFetchError):
        InMemoryIngredientCatalog.from_file(broken)
