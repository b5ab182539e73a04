from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SCAFFOLDGEN_", case_sensitive=False)

    render_spec_file: str = "generated-main.yaml"
    generator_file_prefix: str = "generator-"
    generator_file_suffix: str = ".yaml"
    file_mode: int = 0o644


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
