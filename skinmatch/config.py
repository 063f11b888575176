from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings, read from the environment or a local .env file."""

    # Market used when the assessment names none (or an unknown one)
    default_market: str = "IN"
    log_level: str = "INFO"

    # Lifestyles that get an afternoon sunscreen top-up
    afternoon_lifestyles: list[str] = ["outdoor", "active"]

    class Config:
        env_file = '.env'
        env_prefix = 'SKINMATCH_'


@lru_cache
def get_settings() -> Settings:
    return Settings()
