"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MOVIEVERSE_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle : sans elle, les listes échouent en UNAUTHORIZED
et les détails se dégradent en fiche provisoire.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from movieverse.utils.constants import CATEGORY_SUFFICIENCY_THRESHOLD

# Trouver le fichier .env à la racine du projet (parent de movieverse/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MOVIEVERSE_.
    Exemple : MOVIEVERSE_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIEVERSE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///movieverse.db")

    # TMDB
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_timeout_seconds: float = Field(default=5.0, gt=0)
    rate_limit_cooldown_seconds: float = Field(default=1.0, ge=0)

    # Cache-aside
    category_threshold: int = Field(default=CATEGORY_SUFFICIENCY_THRESHOLD, ge=1)
    listing_cache_enabled: bool = Field(default=False)
    listing_cache_dir: Path = Field(default=Path(".cache/listings"))

    # Web
    cors_origins: str = Field(default="http://localhost:3000")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/movieverse.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("listing_cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def allowed_origins(self) -> list[str]:
        """Origines CORS autorisées (liste séparée par des virgules)."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
