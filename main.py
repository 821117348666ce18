import argparse
import asyncio
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import config
from domain.config_source import ConfigSource, FileConfigSource, HttpConfigSource
from domain.errors import ConfigFetchError
from domain.examples import modern_chocolate_chip_cookies, spiced_brown_sugar_cookies
from domain.ingredients import InMemoryIngredientCatalog
from domain.recipes import MultiStepRecipe
from domain.resolver import TemplateResolver


CONFIG = config.Config()


logger = logging.getLogger(__name__)


console = Console()


def config_source_factory(cfg: config.Config) -> ConfigSource:
    match cfg.config_source:
        case config.Source.file:
            return FileConfigSource(cfg.data_dir)
        case config.Source.http:
            return HttpConfigSource(cfg.config_base_url, timeout=cfg.http_timeout)


def load_catalog(cfg: config.Config) -> InMemoryIngredientCatalog:
    try:
        return InMemoryIngredientCatalog.from_file(cfg.data_dir / cfg.ingredients_file)
    except ConfigFetchError as e:
        logger.warning("%s. Using starter ingredients only.", e)
        return InMemoryIngredientCatalog()


def recipes_table(recipes: list[MultiStepRecipe]) -> Table:
    table = Table(title="Recipes")
    for column in ("id", "name", "servings", "steps", "time", "difficulty", "tags"):
        table.add_column(column)
    for recipe in recipes:
        overview = recipe.get_overview()
        table.add_row(
            recipe.id,
            f"{recipe.icon} {recipe.name}",
            str(overview.servings),
            str(overview.total_steps),
            f"{overview.total_time} min",
            overview.difficulty.value,
            ", ".join(overview.tags),
        )
    return table


def print_recipe(recipe: MultiStepRecipe) -> None:
    console.rule(f"{recipe.icon} {recipe}")
    if recipe.description:
        console.print(recipe.description)
    for step in recipe.steps:
        console.print(f"\n[bold]{step.to_display_string()}[/bold]")
        for instruction in step.get_formatted_instructions():
            console.print(f"  - {instruction}")
    console.print("\n[bold]Shopping list[/bold]")
    for amount in recipe.ingredients:
        console.print(f"  - {amount}")


async def run(args: argparse.Namespace) -> None:
    catalog = load_catalog(CONFIG)

    if args.examples:
        recipes = [
            modern_chocolate_chip_cookies(catalog),
            spiced_brown_sugar_cookies(catalog),
        ]
    else:
        resolver = TemplateResolver(config_source_factory(CONFIG), catalog=catalog)
        recipes = await resolver.get_all_recipes()

    if args.recipe is None:
        console.print(recipes_table(recipes))
        return

    recipe = next((r for r in recipes if r.id == args.recipe), None)
    if recipe is None:
        raise SystemExit(f"Unknown recipe: {args.recipe}")
    if args.servings is not None:
        recipe = recipe.scale_to_servings(args.servings)
    print_recipe(recipe)


def main() -> None:
    parser = argparse.ArgumentParser(description="Resolve and scale baking recipes.")
    parser.add_argument("recipe", nargs="?", help="Recipe id to print in full.")
    parser.add_argument("--servings", type=float, help="Scale to this many servings.")
    parser.add_argument(
        "--examples",
        action="store_true",
        help="Use the recipes composed in code instead of the documents.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=CONFIG.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console)],
    )

    asyncio.run(run(args))


if __name__ == "__main__":
    main()
