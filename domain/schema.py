"""Declarative documents recipes are resolved from.

Only the shape is checked here. Domain rules (ranges, orders, servings) are
enforced when the documents are turned into domain objects.

`RecipesDocument` checks the envelope only. Each entry is validated as a
`RecipeConfig` when that recipe is built, so one bad recipe never rejects the
whole document.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AmountRange(Document):
    min: float
    max: float
    recommended: float | None = None
    step: float | None = None


class RecipeIngredientConfig(Document):
    id: str
    amount: float | AmountRange
    description: str | None = None
    required: bool = False


class IngredientGroupConfig(Document):
    name: str
    ingredients: list[RecipeIngredientConfig]
    description: str | None = None


class StepConfig(Document):
    template: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)
    custom_instructions: list[str] | None = None
    ingredient_groups: list[IngredientGroupConfig] = Field(default_factory=list)
    ingredients: list[RecipeIngredientConfig] = Field(default_factory=list)
    estimated_time: float | None = None


class RecipeMetadataConfig(Document):
    name: str
    description: str = ""
    base_servings: float
    difficulty: str = "easy"
    baking_time: float = 0
    icon: str = ""
    skill_level: str | None = None
    tags: list[str] = Field(default_factory=list)


class RecipeConfig(Document):
    id: str = Field(min_length=1)
    metadata: RecipeMetadataConfig
    steps: list[StepConfig]


class RecipesDocument(Document):
    recipes: list[Any]


class StepTemplate(Document):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    instructions: list[str]
    description: str | None = None
    default_params: dict[str, Any] = Field(default_factory=dict)
    required_params: list[str] = Field(default_factory=list)


class StepTemplatesDocument(Document):
    step_templates: dict[str, StepTemplate]


class IngredientConfig(Document):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    default_unit: str = Field(min_length=1)
    icon: str = ""
    description: str = ""
    category: str = ""


class IngredientsDocument(Document):
    ingredients: list[IngredientConfig]
