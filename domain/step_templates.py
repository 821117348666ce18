"""Canned steps for the usual baking moves.

Every step comes out with order 1. Orders are recipe-wide, so run the
assembled list through `renumber` before building a `MultiStepRecipe`.
"""

from typing import Any, Iterable, Mapping

from domain.flexible_ingredient import FlexibleIngredient
from domain.steps import IngredientGroup, RecipeStep, StepType


PROVISIONAL_ORDER = 1


def renumber(steps: Iterable[RecipeStep]) -> list[RecipeStep]:
    return [step.with_order(i) for i, step in enumerate(steps, start=1)]


def preheat_step(temp: float, estimated_time: float = 10) -> RecipeStep:
    return RecipeStep(
        id="preheat",
        name="Preheat Oven",
        description="Prepare oven for baking",
        order=PROVISIONAL_ORDER,
        type=StepType.preparation,
        instructions=[
            "Preheat oven to {temp}°F",
            "Allow oven to fully heat before baking",
        ],
        parameters={"temp": temp},
        estimated_time=estimated_time,
        temperature=temp,
    )


def bake_step(
    time: float,
    temp: float,
    additional_instructions: Iterable[str] = (),
) -> RecipeStep:
    return RecipeStep(
        id="bake",
        name="Bake",
        description="Bake until done",
        order=PROVISIONAL_ORDER,
        type=StepType.baking,
        instructions=[
            "Bake for {time} minutes at {temp}°F",
            "Check for doneness with toothpick or visual cues",
            *additional_instructions,
        ],
        parameters={"time": time, "temp": temp},
        estimated_time=time,
        temperature=temp,
    )


def mix_group_step(
    group_name: str,
    ingredients: Iterable[FlexibleIngredient],
    custom_instructions: Iterable[str] | None = None,
    mixing_time: float = 5,
) -> RecipeStep:
    instructions = (
        [
            f"In a bowl, combine {{group:{group_name}}}",
            "Mix until well combined",
        ]
        if custom_instructions is None
        else custom_instructions
    )
    return RecipeStep(
        id=f"mix-{group_name}",
        name=f"Mix {group_name[:1].upper()}{group_name[1:]} Ingredients",
        description=f"Combine {group_name} ingredients",
        order=PROVISIONAL_ORDER,
        type=StepType.preparation,
        instructions=instructions,
        groups=[
            IngredientGroup.of(group_name, ingredients, f"{group_name} ingredients")
        ],
        estimated_time=mixing_time,
    )


def mix_wet_ingredients_step(
    wet_ingredients: Iterable[FlexibleIngredient], mixing_time: float = 8
) -> RecipeStep:
    return mix_group_step(
        "wet",
        wet_ingredients,
        [
            "In a large bowl, cream {group:wet}",
            "Beat until light and fluffy (about 3-4 minutes)",
            "Ensure all wet ingredients are well incorporated",
        ],
        mixing_time,
    )


def mix_dry_ingredients_step(
    dry_ingredients: Iterable[FlexibleIngredient], mixing_time: float = 3
) -> RecipeStep:
    return mix_group_step(
        "dry",
        dry_ingredients,
        [
            "In a separate bowl, whisk together {group:dry}",
            "Ensure even distribution of all dry ingredients",
            "Set aside for combining with wet ingredients",
        ],
        mixing_time,
    )


def combine_wet_dry_step(estimated_time: float = 5) -> RecipeStep:
    return RecipeStep(
        id="combine-wet-dry",
        name="Combine Wet & Dry",
        description="Bring wet and dry ingredients together",
        order=PROVISIONAL_ORDER,
        type=StepType.preparation,
        instructions=[
            "Gradually add the dry ingredient mixture to the wet ingredients",
            "Fold gently until just combined, do not overmix",
            "Stop mixing as soon as no dry flour is visible",
        ],
        estimated_time=estimated_time,
    )


def cooling_step(
    time: float,
    location: str = "wire rack",
    additional_instructions: Iterable[str] = (),
) -> RecipeStep:
    return RecipeStep(
        id="cool",
        name="Cool",
        description="Allow to cool properly",
        order=PROVISIONAL_ORDER,
        type=StepType.cooling,
        instructions=[
            f"Cool for {{time}} minutes on {location}",
            "Allow to cool completely before proceeding",
            *additional_instructions,
        ],
        parameters={"time": time},
        estimated_time=time,
    )


def decoration_step(
    decoration_ingredients: Iterable[FlexibleIngredient],
    custom_instructions: Iterable[str] | None = None,
    estimated_time: float = 15,
) -> RecipeStep:
    instructions = (
        [
            "Prepare decorating ingredients: {group:decoration}",
            "Apply decorations as desired for presentation",
            "Be creative with decoration placement!",
        ]
        if custom_instructions is None
        else custom_instructions
    )
    return RecipeStep(
        id="decorate",
        name="Decorate",
        description="Add decorative touches",
        order=PROVISIONAL_ORDER,
        type=StepType.decoration,
        instructions=instructions,
        groups=[
            IngredientGroup.of(
                "decoration", decoration_ingredients, "Decorating ingredients"
            )
        ],
        estimated_time=estimated_time,
    )


def rest_step(
    time: float,
    location: str = "warm place",
    covering_instructions: str = "Cover with damp cloth",
) -> RecipeStep:
    return RecipeStep(
        id="rest",
        name="Rest Dough",
        description="Allow dough to rest and rise",
        order=PROVISIONAL_ORDER,
        type=StepType.preparation,
        instructions=[
            covering_instructions,
            f"Place in {location}",
            "Let rest for {time} minutes",
            "Dough should visibly rise and feel lighter",
        ],
        parameters={"time": time},
        estimated_time=time,
    )


def prep_pans_step(
    pan_type: str = "baking pan",
    prep_method: str = "grease and flour",
    estimated_time: float = 3,
) -> RecipeStep:
    return RecipeStep(
        id="prep-pans",
        name="Prepare Pans",
        description=f"Prepare {pan_type} for baking",
        order=PROVISIONAL_ORDER,
        type=StepType.preparation,
        instructions=[
            f"{prep_method[:1].upper()}{prep_method[1:]} your {pan_type}",
            "Ensure even coverage for easy release",
            "Set prepared pans aside until needed",
        ],
        estimated_time=estimated_time,
    )


def custom_step(
    id: str,
    name: str,
    description: str,
    type: StepType,
    instructions: Iterable[str],
    parameters: Mapping[str, Any] | None = None,
    ingredients: Iterable[FlexibleIngredient] = (),
    groups: Iterable[IngredientGroup] = (),
    estimated_time: float | None = None,
) -> RecipeStep:
    return RecipeStep(
        id=id,
        name=name,
        description=description,
        order=PROVISIONAL_ORDER,
        type=type,
        instructions=instructions,
        parameters=parameters,
        ingredients=ingredients,
        groups=groups,
        estimated_time=estimated_time,
    )


def cookie_baking_steps(
    baking_temp: float = 375,
    baking_time: float = 12,
    cooling_time: float = 5,
) -> list[RecipeStep]:
    return [
        preheat_step(baking_temp),
        bake_step(
            baking_time,
            baking_temp,
            [
                "Drop rounded tablespoons of dough onto ungreased cookie sheets",
                "Space cookies 2 inches apart for even baking",
            ],
        ),
        cooling_step(
            cooling_time,
            "baking sheet",
            ["Transfer to wire rack to cool completely"],
        ),
    ]


def cake_baking_steps(
    baking_temp: float = 350,
    baking_time: float = 25,
    cooling_time: float = 10,
) -> list[RecipeStep]:
    return [
        preheat_step(baking_temp),
        prep_pans_step("cake pans", "grease and flour"),
        bake_step(
            baking_time,
            baking_temp,
            [
                "Divide batter evenly between prepared pans",
                "Tap pans gently to release air bubbles",
            ],
        ),
        cooling_step(
            cooling_time,
            "pans",
            ["Turn out onto wire racks to cool completely"],
        ),
    ]
