from dataclasses import dataclass
import math
from typing import Any, Mapping

from domain.errors import ValidationError
from domain.ingredients import Ingredient, UnitConverter


def format_amount(value: Any) -> str:
    """Render numbers the way recipe documents write them, `2` rather than `2.0`."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class IngredientRange:
    min: float
    max: float
    recommended: float
    step: float = 1

    @classmethod
    def create(
        cls,
        min: float,
        max: float,
        recommended: float | None = None,
        step: float | None = None,
    ) -> "IngredientRange":
        if min >= max:
            raise ValidationError(
                f"Invalid range: min ({format_amount(min)}) must be less than "
                f"max ({format_amount(max)})"
            )
        if min < 0:
            raise ValidationError("Range minimum cannot be negative")
        recommended = (min + max) / 2 if recommended is None else recommended
        if not min <= recommended <= max:
            raise ValidationError(
                f"Recommended amount {format_amount(recommended)} is outside "
                f"[{format_amount(min)}, {format_amount(max)}]"
            )
        step = 1 if step is None else step
        if step <= 0:
            raise ValidationError("Range step must be positive")
        return cls(min=min, max=max, recommended=recommended, step=step)

    def scale(self, factor: float) -> "IngredientRange":
        return IngredientRange.create(
            min=self.min * factor,
            max=self.max * factor,
            recommended=self.recommended * factor,
            step=self.step * factor,
        )


type AmountSpec = float | IngredientRange | Mapping[str, float | None]


class FlexibleIngredient:
    """An ingredient with a fixed amount or an amount chosen within a range."""

    def __init__(
        self,
        ingredient: Ingredient,
        amount: AmountSpec,
        description: str | None = None,
    ) -> None:
        self.ingredient = ingredient
        self.description = description
        self.fixed_amount: float | None = None
        self.range: IngredientRange | None = None

        if isinstance(amount, IngredientRange):
            self.range = IngredientRange.create(
                amount.min, amount.max, amount.recommended, amount.step
            )
        elif isinstance(amount, Mapping):
            if "min" not in amount or "max" not in amount:
                raise ValidationError("Ranged amount needs both min and max")
            self.range = IngredientRange.create(
                amount["min"],  # pyright: ignore[reportArgumentType]
                amount["max"],  # pyright: ignore[reportArgumentType]
                amount.get("recommended"),
                amount.get("step"),
            )
        else:
            if amount < 0:
                raise ValidationError("Fixed amount cannot be negative")
            self.fixed_amount = amount

    def __repr__(self) -> str:
        amount = (
            format_amount(self.fixed_amount)
            if self.range is None
            else f"{format_amount(self.range.min)}-{format_amount(self.range.max)}"
        )
        return f"<FlexibleIngredient(ingredient={self.ingredient.id}, amount={amount})>"

    @property
    def is_fixed(self) -> bool:
        return self.range is None

    def get_default_amount(self) -> float:
        if self.range is None:
            return self.fixed_amount  # pyright: ignore[reportReturnType]
        return self.range.recommended

    def get_amount(self, requested: float | None = None) -> float:
        if self.range is None:
            return self.fixed_amount  # pyright: ignore[reportReturnType]
        if requested is None:
            return self.range.recommended
        return max(self.range.min, min(self.range.max, requested))

    def is_valid_amount(self, amount: float) -> bool:
        if self.range is None:
            return amount == self.fixed_amount
        return self.range.min <= amount <= self.range.max

    def scale(self, factor: float) -> "FlexibleIngredient":
        if factor <= 0:
            raise ValidationError(f"Scaling factor must be positive, got {factor}")
        if self.range is None:
            return FlexibleIngredient(
                self.ingredient,
                self.fixed_amount * factor,  # pyright: ignore[reportOptionalOperand]
                self.description,
            )
        return FlexibleIngredient(
            self.ingredient, self.range.scale(factor), self.description
        )

    def to_display_string(self, amount: float | None = None) -> str:
        amount = self.get_default_amount() if amount is None else amount
        unit = self.ingredient.unit
        text = f"{format_amount(amount)} {unit} {self.ingredient.name}"
        if self.range is None:
            return text
        return (
            f"{text} ({format_amount(self.range.min)}-"
            f"{format_amount(self.range.max)} {unit})"
        )

    def get_range_description(self) -> str:
        unit = self.ingredient.unit
        if self.range is None:
            return f"{format_amount(self.fixed_amount)} {unit}"
        return (
            f"{format_amount(self.range.min)}-{format_amount(self.range.max)} {unit} "
            f"(recommended: {format_amount(self.range.recommended)})"
        )

    # Conversion tables are owned by the converter, not by the recipe.

    def to_grams(self, converter: UnitConverter, amount: float | None = None) -> float:
        amount = self.get_default_amount() if amount is None else amount
        return converter.to_grams(self.ingredient, amount, self.ingredient.unit)

    def calculate_calories(
        self, converter: UnitConverter, amount: float | None = None
    ) -> float:
        return self.get_nutrition_info(converter, amount)["calories"]

    def get_nutrition_info(
        self, converter: UnitConverter, amount: float | None = None
    ) -> dict[str, float]:
        grams = self.to_grams(converter, amount)
        nutrition = converter.nutrition(self.ingredient)
        if nutrition is None:
            return {"grams": grams, "calories": 0, "protein": 0, "fat": 0, "carbs": 0}
        return {
            "grams": grams,
            "calories": grams * nutrition.calories_per_gram,
            "protein": grams * nutrition.protein_per_gram,
            "fat": grams * nutrition.fat_per_gram,
            "carbs": grams * nutrition.carbs_per_gram,
        }
