"""Turns declarative recipe documents into `MultiStepRecipe` values.

A resolver is built once with its collaborators and handed to whoever needs
recipes. Loading is lazy: the first read triggers `initialize`, and callers
arriving while a load is running wait on that same load.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Mapping
import warnings

import pydantic

from domain.config_source import ConfigSource
from domain.errors import (
    ConfigFetchError,
    IngredientNotFoundError,
    IngredientNotFoundWarning,
    MissingRequiredParameterError,
    RecipeBuildFailure,
    RecipeError,
    TemplateNotFoundError,
    ValidationError,
)
from domain.flexible_ingredient import FlexibleIngredient, format_amount
from domain.ingredients import STARTER_CATALOG, Ingredient, IngredientCatalog
from domain.recipes import Difficulty, MultiStepRecipe
from domain.schema import (
    IngredientGroupConfig,
    RecipeConfig,
    RecipeIngredientConfig,
    StepConfig,
)
from domain.steps import IngredientGroup, RecipeStep, StepType


logger = logging.getLogger(__name__)


class ResolverState(Enum):
    uninitialized = "uninitialized"
    loading = "loading"
    ready = "ready"
    failed = "failed"


def resolve_template_name(name: str, params: Mapping[str, Any]) -> str:
    for key, value in params.items():
        name = name.replace(f"{{{key}}}", "" if value is None else format_amount(value))
    return name


def to_difficulty(value: str) -> Difficulty:
    try:
        return Difficulty(value.lower())
    except ValueError:
        logger.warning("Unknown difficulty %r, using easy", value)
        return Difficulty.easy


def to_step_type(value: str) -> StepType:
    try:
        return StepType(value.lower())
    except ValueError:
        logger.warning("Unknown step type %r, using preparation", value)
        return StepType.preparation


def _entry_id(entry: Any) -> str:
    id = entry.get("id") if isinstance(entry, Mapping) else None
    return id if isinstance(id, str) and id else "<unknown>"


def _number(params: Mapping[str, Any], key: str, template: str) -> float | None:
    value = params.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            f"Parameter '{key}' for template '{template}' must be a number, got {value!r}"
        )
    return value


def _warn_missing(message: str) -> None:
    logger.warning(message)
    warnings.warn(IngredientNotFoundWarning(message), stacklevel=3)


class TemplateResolver:
    def __init__(
        self,
        source: ConfigSource,
        *,
        catalog: IngredientCatalog | None = None,
        fallback_catalog: IngredientCatalog | None = None,
    ) -> None:
        self.source = source
        self.catalog = STARTER_CATALOG if catalog is None else catalog
        self.fallback_catalog = (
            STARTER_CATALOG if fallback_catalog is None else fallback_catalog
        )
        self.state = ResolverState.uninitialized
        self._recipes: dict[str, MultiStepRecipe] = {}
        self._pending: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return f"<TemplateResolver(state={self.state.value}, recipes={len(self._recipes)})>"

    async def initialize(self) -> None:
        if self.state is ResolverState.ready:
            return
        if self._pending is None:
            self._pending = asyncio.create_task(self._load())
        # A cancelled caller must not cancel the load other callers wait on.
        await asyncio.shield(self._pending)

    async def _load(self) -> None:
        self.state = ResolverState.loading
        logger.info("Initializing recipe resolver")
        try:
            try:
                entries = await self.source.get_all_recipes()
                recipes: dict[str, MultiStepRecipe] = {}
                for entry in entries:
                    try:
                        recipe = await self.build_recipe(entry)
                    except RecipeBuildFailure as e:
                        logger.error("%s", e, exc_info=e.cause)
                        continue
                    except ConfigFetchError:
                        raise
                    except Exception:
                        logger.exception("Failed to create recipe %s", _entry_id(entry))
                        continue
                    if recipe.id in recipes:
                        logger.warning("Duplicate recipe id %s, keeping the last", recipe.id)
                    recipes[recipe.id] = recipe
            except Exception:
                self.state = ResolverState.failed
                logger.exception("Failed to initialize recipe resolver")
                raise
            self._recipes = recipes
            self.state = ResolverState.ready
            logger.info("Initialized recipe resolver with %d recipes", len(recipes))
        finally:
            self._pending = None

    async def reload(self) -> None:
        logger.info("Reloading recipes from configuration")
        if self._pending is not None:
            # The in-flight load reports its own outcome to its awaiters.
            await asyncio.wait([self._pending])
        self._recipes = {}
        self.state = ResolverState.uninitialized
        self.source.clear_cache()
        await self.initialize()

    async def get_recipe(self, id: str) -> MultiStepRecipe | None:
        await self.initialize()
        return self._recipes.get(id)

    async def get_all_recipes(self) -> list[MultiStepRecipe]:
        await self.initialize()
        return list(self._recipes.values())

    async def has_recipe(self, id: str) -> bool:
        await self.initialize()
        return id in self._recipes

    async def get_recipe_ids(self) -> list[str]:
        await self.initialize()
        return list(self._recipes)

    async def get_recipes_by_difficulty(
        self, difficulty: Difficulty
    ) -> list[MultiStepRecipe]:
        return [r for r in await self.get_all_recipes() if r.difficulty is difficulty]

    async def get_recipes_by_tag(self, tag: str) -> list[MultiStepRecipe]:
        return [r for r in await self.get_all_recipes() if tag in r.tags]

    def summary(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "recipe_count": len(self._recipes),
            "recipe_ids": list(self._recipes),
        }

    async def build_recipe(self, config: RecipeConfig | Mapping[str, Any]) -> MultiStepRecipe:
        """Build one recipe from a parsed config or a raw document entry.

        Malformed entries and domain errors come out as `RecipeBuildFailure`.
        """
        if not isinstance(config, RecipeConfig):
            try:
                config = RecipeConfig.model_validate(config)
            except pydantic.ValidationError as e:
                raise RecipeBuildFailure(_entry_id(config), e) from e
        try:
            steps = [
                await self._build_step(step_config, order)
                for order, step_config in enumerate(config.steps, start=1)
            ]
            metadata = config.metadata
            return MultiStepRecipe(
                id=config.id,
                name=metadata.name,
                description=metadata.description,
                base_servings=metadata.base_servings,
                difficulty=to_difficulty(metadata.difficulty),
                baking_time=metadata.baking_time,
                icon=metadata.icon,
                tags=metadata.tags,
                skill_level=metadata.skill_level,
                steps=steps,
            )
        except RecipeError as e:
            raise RecipeBuildFailure(config.id, e) from e

    async def _build_step(self, step_config: StepConfig, order: int) -> RecipeStep:
        template = await self.source.get_step_template(step_config.template)
        if template is None:
            raise TemplateNotFoundError(step_config.template)

        params = {**template.default_params, **step_config.params}
        for required in template.required_params:
            if required not in params:
                raise MissingRequiredParameterError(required, step_config.template)

        instructions = (
            template.instructions
            if step_config.custom_instructions is None
            else step_config.custom_instructions
        )

        ingredients = [
            i
            for i in map(self._bind_ingredient, step_config.ingredients)
            if i is not None
        ]
        groups = [
            g
            for g in map(self._bind_group, step_config.ingredient_groups)
            if g is not None
        ]

        estimated_time = (
            _number(params, "estimatedTime", step_config.template)
            if step_config.estimated_time is None
            else step_config.estimated_time
        )
        step = RecipeStep(
            id=f"{step_config.template}-{order}",
            name=resolve_template_name(template.name, params),
            description=template.description
            or f"Step using {step_config.template} template",
            order=order,
            type=to_step_type(template.type),
            instructions=instructions,
            ingredients=ingredients,
            groups=groups,
            parameters=params,
            estimated_time=estimated_time,
            temperature=_number(params, "temp", step_config.template),
        )

        unresolved = step.unresolved_placeholders()
        if unresolved:
            logger.warning(
                "Step %s has unresolved placeholders: %s", step.id, ", ".join(unresolved)
            )
        return step

    def lookup_ingredient(self, id: str) -> Ingredient | None:
        ingredient = self.catalog.get_ingredient(id)
        if ingredient is None:
            ingredient = self.fallback_catalog.get_ingredient(id)
        return ingredient

    def _bind_ingredient(self, config: RecipeIngredientConfig) -> FlexibleIngredient | None:
        ingredient = self.lookup_ingredient(config.id)
        if ingredient is None:
            if config.required:
                raise IngredientNotFoundError(config.id)
            _warn_missing(f"Ingredient '{config.id}' not found, skipping")
            return None
        amount = (
            config.amount
            if isinstance(config.amount, (int, float))
            else config.amount.model_dump(exclude_none=True)
        )
        return FlexibleIngredient(ingredient, amount, config.description)

    def _bind_group(self, config: IngredientGroupConfig) -> IngredientGroup | None:
        ingredients = [
            i for i in map(self._bind_ingredient, config.ingredients) if i is not None
        ]
        if not ingredients:
            _warn_missing(
                f"No valid ingredients found for group '{config.name}', skipping group"
            )
            return None
        return IngredientGroup.of(config.name, ingredients, config.description)
