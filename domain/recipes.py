from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from domain.errors import OrderGapError, ValidationError
from domain.flexible_ingredient import FlexibleIngredient, format_amount
from domain.ingredients import IngredientAmount
from domain.steps import RecipeStep


type CustomAmountsByStep = Mapping[int, Mapping[str, float]]


class Difficulty(Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


@dataclass(frozen=True)
class RecipeOverview:
    total_steps: int
    total_time: float
    difficulty: Difficulty
    tags: list[str]
    servings: float


class MultiStepRecipe:
    """A recipe made of steps whose orders run 1..N with no gaps."""

    def __init__(
        self,
        *,
        id: str,
        name: str,
        description: str = "",
        base_servings: float,
        difficulty: Difficulty = Difficulty.easy,
        baking_time: float = 0,
        icon: str = "",
        tags: Iterable[str] = (),
        skill_level: str | None = None,
        steps: Iterable[RecipeStep],
    ) -> None:
        if not id or not id.strip():
            raise ValidationError("Recipe id cannot be empty")
        if not name or not name.strip():
            raise ValidationError("Recipe name cannot be empty")
        if base_servings <= 0:
            raise ValidationError("Base servings must be positive")
        if baking_time < 0:
            raise ValidationError("Baking time cannot be negative")

        ordered = sorted(steps, key=lambda s: s.order)
        if not ordered:
            raise ValidationError("Recipe must have at least one step")
        for expected, step in enumerate(ordered, start=1):
            if step.order != expected:
                raise OrderGapError(expected=expected, got=step.order)

        self.id = id
        self.name = name
        self.description = description
        self.base_servings = base_servings
        self.difficulty = difficulty
        self.baking_time = baking_time
        self.icon = icon
        self.tags = tuple(tags)
        self.skill_level = skill_level
        self.steps = tuple(ordered)

    def __repr__(self) -> str:
        return f"<MultiStepRecipe(id={self.id}, name={self.name})>"

    def __str__(self) -> str:
        return (
            f"{self.name} ({format_amount(self.base_servings)} servings, "
            f"{len(self.steps)} steps, {self.difficulty.value})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiStepRecipe):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def ingredients(self) -> list[IngredientAmount]:
        """Default totals across every step."""
        return self._as_amounts(self.get_total_ingredient_requirements())

    def _find_ingredient(self, ingredient_id: str) -> FlexibleIngredient | None:
        for step in self.steps:
            ingredient = step.get_ingredient(ingredient_id)
            if ingredient is not None:
                return ingredient
        return None

    def _as_amounts(self, amounts: Mapping[str, float]) -> list[IngredientAmount]:
        result: list[IngredientAmount] = []
        for id, quantity in amounts.items():
            found = self._find_ingredient(id)
            if found is not None:
                result.append(IngredientAmount(found.ingredient, quantity))
        return result

    def get_step(self, order: int) -> RecipeStep | None:
        return next((s for s in self.steps if s.order == order), None)

    def get_step_ingredients(self, order: int) -> list[FlexibleIngredient]:
        step = self.get_step(order)
        return [] if step is None else step.get_all_ingredients()

    def get_total_estimated_time(self) -> float:
        return sum(s.estimated_time or 0 for s in self.steps)

    def get_total_ingredient_requirements(
        self, custom_amounts_by_step: CustomAmountsByStep | None = None
    ) -> dict[str, float]:
        custom_amounts_by_step = (
            {} if custom_amounts_by_step is None else custom_amounts_by_step
        )
        totals: dict[str, float] = {}
        for step in self.steps:
            amounts = step.get_all_ingredient_amounts(
                custom_amounts_by_step.get(step.order)
            )
            for id, amount in amounts.items():
                totals[id] = totals.get(id, 0) + amount
        return totals

    def can_be_made_with(
        self,
        available: Mapping[str, float],
        custom_amounts_by_step: CustomAmountsByStep | None = None,
    ) -> bool:
        requirements = self.get_total_ingredient_requirements(custom_amounts_by_step)
        return all(
            available.get(id, 0) >= required for id, required in requirements.items()
        )

    def get_missing_ingredients(
        self,
        available: Mapping[str, float],
        custom_amounts_by_step: CustomAmountsByStep | None = None,
    ) -> list[IngredientAmount]:
        requirements = self.get_total_ingredient_requirements(custom_amounts_by_step)
        shortfalls = {
            id: required - available.get(id, 0)
            for id, required in requirements.items()
            if available.get(id, 0) < required
        }
        return self._as_amounts(shortfalls)

    def get_steps_using_ingredient(self, ingredient_id: str) -> list[RecipeStep]:
        return [s for s in self.steps if s.uses_ingredient(ingredient_id)]

    def has_ingredient(self, ingredient_id: str) -> bool:
        return any(s.uses_ingredient(ingredient_id) for s in self.steps)

    def get_scaling_factor(self, target_servings: float) -> float:
        if target_servings <= 0:
            raise ValidationError("Target servings must be positive")
        return target_servings / self.base_servings

    def scale_to_servings(self, target_servings: float) -> "MultiStepRecipe":
        factor = self.get_scaling_factor(target_servings)
        return MultiStepRecipe(
            id=self.id,
            name=f"{self.name} ({format_amount(target_servings)} servings)",
            description=self.description,
            base_servings=target_servings,
            difficulty=self.difficulty,
            baking_time=self.baking_time,
            icon=self.icon,
            tags=self.tags,
            skill_level=self.skill_level,
            steps=[s.scale(factor) for s in self.steps],
        )

    def get_overview(self) -> RecipeOverview:
        return RecipeOverview(
            total_steps=len(self.steps),
            total_time=self.get_total_estimated_time(),
            difficulty=self.difficulty,
            tags=list(self.tags),
            servings=self.base_servings,
        )
