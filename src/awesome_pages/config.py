"""Configuración centralizada del parser con pydantic-settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Todas las variables se leen desde env vars con prefijo AWESOME_PAGES_."""

    # --- Idioma ---
    default_language: str = "en"
    language_detection: bool = True
    language_min_confidence: float = 0.5
    language_min_length: int = 30

    # --- Índice de búsqueda ---
    title_weight: int | float = 2
    description_weight: int | float = 1
    tags_weight: int | float = 1.5

    model_config = {"env_prefix": "AWESOME_PAGES_", "env_file": ".env"}


def get_settings() -> Settings:
    """Singleton perezoso para la configuración."""
    return Settings()
