from enum import Enum

from pydantic_settings import BaseSettings

from domain.agemini import BASE_URL, DEFAULT_MODEL, TIMEOUT


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL
    gemini_base_url: str = BASE_URL
    timeout: float = TIMEOUT
    language: str = "German"
    diet: str = "flexitarian"
    people: int = 2
    meals: int = 3
