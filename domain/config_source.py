import asyncio
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx
import pydantic

from domain.errors import ConfigFetchError
from domain.schema import (
    RecipeConfig,
    RecipesDocument,
    StepTemplate,
    StepTemplatesDocument,
)


logger = logging.getLogger(__name__)


RECIPES_DOCUMENT = "recipes.json"
TEMPLATES_DOCUMENT = "recipe-templates.json"


class ConfigSource(Protocol):
    async def get_all_recipes(self) -> list[Any]:
        ...

    async def get_step_template(self, name: str) -> StepTemplate | None:
        ...

    def clear_cache(self) -> None:
        ...


class CachedConfigSource:
    """Fetches each document once and keeps it until `clear_cache`."""

    def __init__(self) -> None:
        self._recipes: RecipesDocument | None = None
        self._templates: StepTemplatesDocument | None = None

    async def fetch(self, document: str) -> bytes:
        raise NotImplementedError

    async def load_recipes(self) -> RecipesDocument:
        if self._recipes is None:
            logger.info("Loading recipes from %s", RECIPES_DOCUMENT)
            raw = await self.fetch(RECIPES_DOCUMENT)
            self._recipes = _parse(RecipesDocument, raw, RECIPES_DOCUMENT)
            logger.info("Loaded %d recipe configs", len(self._recipes.recipes))
        return self._recipes

    async def load_step_templates(self) -> StepTemplatesDocument:
        if self._templates is None:
            logger.info("Loading step templates from %s", TEMPLATES_DOCUMENT)
            raw = await self.fetch(TEMPLATES_DOCUMENT)
            self._templates = _parse(StepTemplatesDocument, raw, TEMPLATES_DOCUMENT)
            logger.info("Loaded %d step templates", len(self._templates.step_templates))
        return self._templates

    async def get_all_recipes(self) -> list[Any]:
        """Raw recipe entries, validated one at a time by whoever builds them."""
        return list((await self.load_recipes()).recipes)

    async def get_recipe_by_id(self, id: str) -> RecipeConfig | None:
        for entry in await self.get_all_recipes():
            if isinstance(entry, dict) and entry.get("id") == id:
                try:
                    return RecipeConfig.model_validate(entry)
                except pydantic.ValidationError as e:
                    raise ConfigFetchError(f"Invalid recipe {id}: {e}") from e
        return None

    async def get_step_template(self, name: str) -> StepTemplate | None:
        return (await self.load_step_templates()).step_templates.get(name)

    async def get_all_step_templates(self) -> dict[str, StepTemplate]:
        return dict((await self.load_step_templates()).step_templates)

    def clear_cache(self) -> None:
        self._recipes = None
        self._templates = None


def _parse[T: pydantic.BaseModel](model: type[T], raw: bytes, document: str) -> T:
    try:
        return model.model_validate_json(raw)
    except pydantic.ValidationError as e:
        raise ConfigFetchError(f"Invalid {document}: {e}") from e


class FileConfigSource(CachedConfigSource):
    def __init__(self, data_dir: Path) -> None:
        super().__init__()
        self.data_dir = data_dir

    def __repr__(self) -> str:
        return f"<FileConfigSource(data_dir={self.data_dir})>"

    async def fetch(self, document: str) -> bytes:
        path = self.data_dir / document
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise ConfigFetchError(f"Failed to read {path}: {e}") from e


class HttpConfigSource(CachedConfigSource):
    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 20,
    ) -> None:
        super().__init__()
        self.base_url = base_url
        self.client = (
            httpx.AsyncClient(base_url=base_url, timeout=timeout)
            if client is None
            else client
        )

    def __repr__(self) -> str:
        return f"<HttpConfigSource(base_url={self.base_url})>"

    async def fetch(self, document: str) -> bytes:
        try:
            resp = await self.client.get(document)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise ConfigFetchError(f"Failed to load {document}: {e}") from e
        return resp.content

    async def aclose(self) -> None:
        await self.client.aclose()
