"""
Configuration de l'application d'inscription des candidats (compatible Pydantic v2)
"""
from typing import ClassVar
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Paramètres centralisés (chargés via .env si présent)."""

    # --- Pydantic v2 config ---
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # ignore les clés inconnues
    )

    # === Base de données ===
    DATABASE_URL: str = "sqlite:///./candidats.db"
    # Clé unique sous laquelle est rangé le tableau JSON des candidats
    STORAGE_KEY: str = "candidates_db"

    # === Liste / pagination ===
    PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # === Exports ===
    EXPORT_FILENAME: str = "candidats"

    # === App ===
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    TIMEZONE: str = "Africa/Casablanca"
    SEED_DEMO: bool = False

    # Constante non issue de l'env (pas un champ)
    VERSION: ClassVar[str] = "1.0.0"
    APP_NAME: ClassVar[str] = "Gestion des candidats"

    @field_validator("PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def _taille_positive(cls, v):
        if v < 1:
            raise ValueError("la taille de page doit être supérieure à 0")
        return v


settings = Settings()
