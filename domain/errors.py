class RecipeError(Exception):
    """Base class for everything the recipe domain raises."""


class ValidationError(RecipeError, ValueError):
    pass


class OrderGapError(RecipeError, ValueError):
    def __init__(self, expected: int, got: int) -> None:
        super().__init__(
            f"Step order must be continuous. Expected step {expected}, got {got}"
        )
        self.expected = expected
        self.got = got


class TemplateNotFoundError(RecipeError, LookupError):
    def __init__(self, template: str) -> None:
        super().__init__(f"Template '{template}' not found")
        self.template = template


class MissingRequiredParameterError(RecipeError, ValueError):
    def __init__(self, param: str, template: str) -> None:
        super().__init__(
            f"Required parameter '{param}' missing for template '{template}'"
        )
        self.param = param
        self.template = template


class IngredientNotFoundError(RecipeError, LookupError):
    def __init__(self, ingredient_id: str) -> None:
        super().__init__(f"Required ingredient '{ingredient_id}' not found")
        self.ingredient_id = ingredient_id


class RecipeBuildFailure(RecipeError):
    def __init__(self, recipe_id: str, cause: Exception) -> None:
        super().__init__(f"Failed to create recipe {recipe_id}: {cause}")
        self.recipe_id = recipe_id
        self.cause = cause


class ConfigFetchError(Exception):
    """The config source could not produce its documents at all."""


class IngredientNotFoundWarning(UserWarning):
    pass
