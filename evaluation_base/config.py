"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Artifact paths left unset resolve next to the evaluation function's module

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - The evaluation function is wired by import path at build time, not discovered at
      runtime: one deployed image serves exactly one function
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Deployment wiring
    evaluation_function: str = "evaluation_function.evaluation:evaluation_function"
    docs_user_path: str | None = None
    docs_dev_path: str | None = None
    evaluation_tests_path: str | None = None

    @field_validator("evaluation_function")
    @classmethod
    def require_module_and_attribute(cls, v: str) -> str:
        module, sep, attr = v.partition(":")
        if not sep or not module or not attr:
            raise ValueError("evaluation_function must look like 'package.module:callable'")
        return v

    # API
    service_name: str = "evaluation-function"
    host: str = "0.0.0.0"
    port: int = 8080

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
