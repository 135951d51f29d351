from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "INFO"

    default_sort_field: str = "id"
    default_sort_dir: Literal["asc", "desc"] = "desc"
    default_per_page: int = 12
    max_per_page: int = 200
    search_max_length: int = 200

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="TABLEQUERY_", extra="ignore"
    )

    @model_validator(mode="after")
    def validate_paging_settings(self) -> "Settings":
        if self.default_per_page < 1:
            raise ValueError("TABLEQUERY_DEFAULT_PER_PAGE must be at least 1")
        if self.max_per_page < self.default_per_page:
            raise ValueError(
                "TABLEQUERY_MAX_PER_PAGE must not be lower than the default page size"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
