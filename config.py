from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Source(Enum):
    file = "file"
    http = "http"


class Config(BaseSettings):
    env: Env = Env.local
    data_dir: Path = Path("data")
    ingredients_file: str = "ingredients.json"
    config_source: Source = Source.file
    config_base_url: str = "http://localhost:8000/data/"
    http_timeout: float = 20
    log_level: str = "INFO"
