"""Recipes composed in code from the step factories rather than from documents."""

import logging

from domain.errors import IngredientNotFoundError
from domain.flexible_ingredient import FlexibleIngredient, IngredientRange
from domain.ingredients import STARTER_INGREDIENTS, Ingredient, IngredientCatalog
from domain.recipes import Difficulty, MultiStepRecipe
from domain.step_templates import (
    combine_wet_dry_step,
    cookie_baking_steps,
    custom_step,
    mix_dry_ingredients_step,
    mix_group_step,
    mix_wet_ingredients_step,
    renumber,
)
from domain.steps import IngredientGroup, StepType


logger = logging.getLogger(__name__)


def _require(catalog: IngredientCatalog, id: str) -> Ingredient:
    ingredient = catalog.get_ingredient(id)
    if ingredient is None:
        raise IngredientNotFoundError(id)
    return ingredient


def modern_chocolate_chip_cookies(catalog: IngredientCatalog) -> MultiStepRecipe:
    flour = STARTER_INGREDIENTS["FLOUR"]
    baking_soda = catalog.get_ingredient("baking-soda")
    if baking_soda is None:
        logger.info("No baking soda in the catalog, leaving it out")

    dry = [FlexibleIngredient(flour, 2.5)]
    if baking_soda is not None:
        dry.append(FlexibleIngredient(baking_soda, IngredientRange.create(0.5, 1.5, 1)))

    wet = [
        FlexibleIngredient(STARTER_INGREDIENTS["BUTTER"], 2),
        FlexibleIngredient(STARTER_INGREDIENTS["EGGS"], 2),
        FlexibleIngredient(
            STARTER_INGREDIENTS["SUGAR"],
            IngredientRange.create(20, 35, 28, 1),
            "Adjust sweetness to taste",
        ),
    ]

    add_chocolate = custom_step(
        "add-chocolate",
        "Add Chocolate Chips",
        "Fold in chocolate for extra deliciousness",
        StepType.preparation,
        [
            "Gently fold in {group:additions} until evenly distributed",
            "Don't overmix, just until chocolate is incorporated",
        ],
        groups=[
            IngredientGroup.of(
                "additions",
                [
                    FlexibleIngredient(
                        STARTER_INGREDIENTS["CHOCOLATE"],
                        IngredientRange.create(15, 40, 25, 5),
                        "More chocolate = more happiness!",
                    )
                ],
                "Chocolate additions",
            )
        ],
        estimated_time=3,
    )

    return MultiStepRecipe(
        id="modern-chocolate-chip-cookies",
        name="Modern Chocolate Chip Cookies",
        description="Classic cookies using templated steps with optional baking soda",
        base_servings=24,
        difficulty=Difficulty.easy,
        baking_time=35,
        icon="🍪",
        skill_level="beginner",
        tags=["templated", "modern", "customizable"],
        steps=renumber(
            [
                mix_dry_ingredients_step(dry, 5),
                mix_wet_ingredients_step(wet, 8),
                combine_wet_dry_step(5),
                add_chocolate,
                *cookie_baking_steps(375, 12, 5),
            ]
        ),
    )


def spiced_brown_sugar_cookies(catalog: IngredientCatalog) -> MultiStepRecipe:
    """Needs brown sugar and nutmeg from the catalog, baking soda is optional."""
    brown_sugar = _require(catalog, "brown-sugar")
    nutmeg = _require(catalog, "nutmeg")
    baking_soda = catalog.get_ingredient("baking-soda")

    dry = [
        FlexibleIngredient(STARTER_INGREDIENTS["FLOUR"], 2.25),
        FlexibleIngredient(
            nutmeg, IngredientRange.create(0.25, 1, 0.5), "Adjust spice level"
        ),
    ]
    if baking_soda is not None:
        dry.append(FlexibleIngredient(baking_soda, 0.5))

    creaming = [
        FlexibleIngredient(STARTER_INGREDIENTS["BUTTER"], 2),
        FlexibleIngredient(
            brown_sugar, IngredientRange.create(0.5, 1, 0.75), "More for chewier cookies"
        ),
        FlexibleIngredient(STARTER_INGREDIENTS["EGGS"], 1),
    ]

    return MultiStepRecipe(
        id="spiced-brown-sugar-cookies",
        name="Spiced Brown Sugar Cookies",
        description="Warm, spiced cookies featuring brown sugar and nutmeg",
        base_servings=18,
        difficulty=Difficulty.easy,
        baking_time=28,
        icon="🍪",
        skill_level="beginner",
        tags=["spiced", "templated"],
        steps=renumber(
            [
                mix_dry_ingredients_step(dry, 4),
                mix_group_step(
                    "creaming",
                    creaming,
                    [
                        "Cream together {group:creaming} until fluffy",
                        "Scrape down the sides of the bowl",
                    ],
                    6,
                ),
                combine_wet_dry_step(4),
                *cookie_baking_steps(350, 11, 5),
            ]
        ),
    )
