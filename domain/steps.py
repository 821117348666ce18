import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from domain.errors import ValidationError
from domain.flexible_ingredient import FlexibleIngredient, format_amount, round_half_up


PLACEHOLDER = re.compile(r"\{[^{}]+\}")


class StepType(Enum):
    preparation = "preparation"
    baking = "baking"
    cooling = "cooling"
    assembly = "assembly"
    decoration = "decoration"


@dataclass(frozen=True)
class IngredientGroup:
    name: str
    ingredients: tuple[FlexibleIngredient, ...]
    description: str | None = None

    @classmethod
    def of(
        cls,
        name: str,
        ingredients: Iterable[FlexibleIngredient],
        description: str | None = None,
    ) -> "IngredientGroup":
        return cls(name=name, ingredients=tuple(ingredients), description=description)

    def scale(self, factor: float) -> "IngredientGroup":
        return IngredientGroup.of(
            self.name, (i.scale(factor) for i in self.ingredients), self.description
        )


def _describe(ingredient: FlexibleIngredient, custom_amounts: Mapping[str, float]) -> str:
    amount = ingredient.get_amount(custom_amounts.get(ingredient.ingredient.id))
    return f"{format_amount(amount)} {ingredient.ingredient.unit} {ingredient.ingredient.name}"


class RecipeStep:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        description: str = "",
        order: int,
        type: StepType,
        instructions: Iterable[str],
        ingredients: Iterable[FlexibleIngredient] = (),
        groups: Iterable[IngredientGroup] = (),
        parameters: Mapping[str, Any] | None = None,
        estimated_time: float | None = None,
        temperature: float | None = None,
    ) -> None:
        instructions = tuple(instructions)
        groups = tuple(groups)

        if not id or not id.strip():
            raise ValidationError("Step id cannot be empty")
        if not name or not name.strip():
            raise ValidationError("Step name cannot be empty")
        if order < 0:
            raise ValidationError("Step order cannot be negative")
        if estimated_time is not None and estimated_time < 0:
            raise ValidationError("Estimated time cannot be negative")
        if not instructions:
            raise ValidationError("Step must have at least one instruction")
        names = [g.name for g in groups]
        if len(names) != len(set(names)):
            raise ValidationError(f"Duplicate ingredient group names in step {id}")

        self.id = id
        self.name = name
        self.description = description
        self.order = order
        self.type = type
        self.instructions = instructions
        self.ingredients = tuple(ingredients)
        self.groups = groups
        self.parameters = MappingProxyType(dict(parameters or {}))
        self.estimated_time = estimated_time
        self.temperature = temperature

    def __repr__(self) -> str:
        return f"<RecipeStep(id={self.id}, order={self.order}, type={self.type.value})>"

    def __str__(self) -> str:
        return self.to_display_string()

    def _replace(self, **changes: Any) -> "RecipeStep":
        fields: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "order": self.order,
            "type": self.type,
            "instructions": self.instructions,
            "ingredients": self.ingredients,
            "groups": self.groups,
            "parameters": self.parameters,
            "estimated_time": self.estimated_time,
            "temperature": self.temperature,
        }
        fields.update(changes)
        return RecipeStep(**fields)

    def with_order(self, order: int) -> "RecipeStep":
        return self._replace(order=order)

    def scale(self, factor: float) -> "RecipeStep":
        parameters = dict(self.parameters)
        time = parameters.get("time")
        if isinstance(time, (int, float)) and not isinstance(time, bool):
            parameters["time"] = round_half_up(time * factor)
        return self._replace(
            ingredients=[i.scale(factor) for i in self.ingredients],
            groups=[g.scale(factor) for g in self.groups],
            parameters=parameters,
        )

    def get_formatted_instructions(
        self, custom_amounts: Mapping[str, float] | None = None
    ) -> list[str]:
        custom_amounts = {} if custom_amounts is None else custom_amounts

        # temp and time go first, the rest in declaration order.
        keys = [k for k in ("temp", "time") if k in self.parameters]
        keys += [k for k in self.parameters if k not in ("temp", "time")]

        formatted: list[str] = []
        for instruction in self.instructions:
            for key in keys:
                instruction = instruction.replace(
                    f"{{{key}}}", format_amount(self.parameters[key])
                )
            for group in self.groups:
                instruction = instruction.replace(
                    f"{{group:{group.name}}}",
                    ", ".join(_describe(i, custom_amounts) for i in group.ingredients),
                )
            for ingredient in self.ingredients:
                instruction = instruction.replace(
                    f"{{{ingredient.ingredient.id}}}",
                    _describe(ingredient, custom_amounts),
                )
            formatted.append(instruction)
        return formatted

    def unresolved_placeholders(
        self, custom_amounts: Mapping[str, float] | None = None
    ) -> list[str]:
        found: list[str] = []
        for instruction in self.get_formatted_instructions(custom_amounts):
            for token in PLACEHOLDER.findall(instruction):
                if token not in found:
                    found.append(token)
        return found

    def get_all_ingredients(self) -> list[FlexibleIngredient]:
        ingredients = list(self.ingredients)
        for group in self.groups:
            ingredients.extend(group.ingredients)
        return ingredients

    def get_all_ingredient_amounts(
        self, custom_amounts: Mapping[str, float] | None = None
    ) -> dict[str, float]:
        custom_amounts = {} if custom_amounts is None else custom_amounts
        amounts: dict[str, float] = {}
        for ingredient in self.get_all_ingredients():
            id = ingredient.ingredient.id
            amount = ingredient.get_amount(custom_amounts.get(id))
            amounts[id] = amounts.get(id, 0) + amount
        return amounts

    def get_default_ingredient_amounts(self) -> dict[str, float]:
        return self.get_all_ingredient_amounts()

    def get_group(self, name: str) -> IngredientGroup | None:
        return next((g for g in self.groups if g.name == name), None)

    def has_group(self, name: str) -> bool:
        return self.get_group(name) is not None

    def get_ingredient(self, ingredient_id: str) -> FlexibleIngredient | None:
        return next(
            (i for i in self.get_all_ingredients() if i.ingredient.id == ingredient_id),
            None,
        )

    def uses_ingredient(self, ingredient_id: str) -> bool:
        return self.get_ingredient(ingredient_id) is not None

    def has_ingredients(self) -> bool:
        return bool(self.get_all_ingredients())

    def to_display_string(self) -> str:
        time = f" ({format_amount(self.estimated_time)}min)" if self.estimated_time else ""
        temp = f" @ {format_amount(self.temperature)}°F" if self.temperature else ""
        return f"{self.order}. {self.name}{time}{temp}"
