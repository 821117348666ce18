import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

import pydantic

from domain.errors import ConfigFetchError, ValidationError
from domain.schema import IngredientsDocument


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Ingredient:
    id: str
    name: str
    unit: str
    icon: str = ""

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Ingredient id cannot be empty")
        if not self.name or not self.name.strip():
            raise ValidationError("Ingredient name cannot be empty")
        if not self.unit or not self.unit.strip():
            raise ValidationError("Ingredient unit cannot be empty")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.name} ({self.unit})"


class IngredientAmount:
    def __init__(self, ingredient: Ingredient, quantity: float) -> None:
        if not math.isfinite(quantity):
            raise ValidationError("Ingredient quantity must be a finite number")
        if quantity < 0:
            raise ValidationError("Ingredient quantity cannot be negative")
        self.ingredient = ingredient
        self.quantity = quantity

    def __repr__(self) -> str:
        return f"<IngredientAmount(ingredient={self.ingredient.id}, quantity={self.quantity})>"

    def __str__(self) -> str:
        qty = (
            str(int(self.quantity))
            if float(self.quantity).is_integer()
            else f"{self.quantity:.1f}"
        )
        return f"{qty} {self.ingredient.unit} {self.ingredient.name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IngredientAmount):
            return NotImplemented
        return (
            self.ingredient == other.ingredient
            and abs(self.quantity - other.quantity) < 0.001
        )

    def add(self, amount: float) -> "IngredientAmount":
        return IngredientAmount(self.ingredient, self.quantity + amount)

    def subtract(self, amount: float) -> "IngredientAmount":
        quantity = self.quantity - amount
        if quantity < 0:
            raise ValidationError(
                f"Cannot subtract {amount} {self.ingredient.unit} "
                f"- only {self.quantity} available"
            )
        return IngredientAmount(self.ingredient, quantity)

    def multiply(self, factor: float) -> "IngredientAmount":
        if factor < 0:
            raise ValidationError("Multiplication factor cannot be negative")
        return IngredientAmount(self.ingredient, self.quantity * factor)


class IngredientCatalog(Protocol):
    def get_ingredient(self, id: str) -> Ingredient | None:
        ...


class InMemoryIngredientCatalog:
    def __init__(self, ingredients: Iterable[Ingredient] = ()) -> None:
        self.ingredients = {i.id: i for i in ingredients}

    def __repr__(self) -> str:
        return f"<InMemoryIngredientCatalog(size={len(self.ingredients)})>"

    def __contains__(self, id: object) -> bool:
        return id in self.ingredients

    def __len__(self) -> int:
        return len(self.ingredients)

    def get_ingredient(self, id: str) -> Ingredient | None:
        return self.ingredients.get(id)

    def get_all_ingredients(self) -> list[Ingredient]:
        return list(self.ingredients.values())

    def merged_with(self, other: "InMemoryIngredientCatalog") -> "InMemoryIngredientCatalog":
        """Entries from `other` win on id clashes."""
        return InMemoryIngredientCatalog(
            [*self.ingredients.values(), *other.ingredients.values()]
        )

    @classmethod
    def from_file(cls, path: Path) -> "InMemoryIngredientCatalog":
        try:
            document = IngredientsDocument.model_validate_json(path.read_bytes())
        except (OSError, pydantic.ValidationError) as e:
            raise ConfigFetchError(f"Failed to load ingredients from {path}: {e}") from e
        catalog = cls(
            Ingredient(id=i.id, name=i.name, unit=i.default_unit, icon=i.icon)
            for i in document.ingredients
        )
        logger.info("Loaded %d ingredients from %s", len(catalog), path)
        return catalog


STARTER_INGREDIENTS = {
    "FLOUR": Ingredient("flour", "Flour", "cups", "🌾"),
    "BUTTER": Ingredient("butter", "Butter", "sticks", "🧈"),
    "EGGS": Ingredient("eggs", "Eggs", "pieces", "🥚"),
    "SUGAR": Ingredient("sugar", "Sugar", "teaspoons", "🍯"),
    "CHOCOLATE": Ingredient("chocolate", "Chocolate Chips", "pieces", "🍫"),
}


STARTER_CATALOG = InMemoryIngredientCatalog(STARTER_INGREDIENTS.values())


@dataclass(frozen=True)
class Nutrition:
    calories_per_gram: float
    protein_per_gram: float = 0
    fat_per_gram: float = 0
    carbs_per_gram: float = 0


class UnitConverter(Protocol):
    """Conversion tables live outside the recipe domain."""

    def to_grams(self, ingredient: Ingredient, amount: float, unit: str) -> float:
        ...

    def nutrition(self, ingredient: Ingredient) -> Nutrition | None:
        ...
