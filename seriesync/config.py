"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe SERIESYNC_,
et peut optionnellement être fournie via un fichier .env.

Les options de scan (auto_add, add_unknown, max_concurrent_scans) servent de valeurs
par défaut aux points d'entrée CLI et HTTP, qui peuvent les surcharger.
"""

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de seriesync/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


@dataclass(frozen=True)
class ScanConfig:
    """
    Configuration d'un scan de bibliothèque.

    Attributs :
        auto_add : Sélectionne automatiquement le meilleur candidat
        add_unknown : Crée un épisode vide quand le fournisseur n'a pas de données
        enable_3d_scan : Réservé, sans effet sur le scan des séries
        max_concurrent_scans : Nombre maximum de séries traitées simultanément
    """

    auto_add: bool = False
    add_unknown: bool = True
    enable_3d_scan: bool = False
    max_concurrent_scans: int = 1


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe SERIESYNC_.
    Exemple : SERIESYNC_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="SERIESYNC_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///seriesync.db")

    # Scan
    auto_add: bool = Field(default=False)
    add_unknown: bool = Field(default=True)
    enable_3d_scan: bool = Field(default=False)
    max_concurrent_scans: int = Field(default=1, ge=1)
    match_score_threshold: int = Field(default=85, ge=0, le=100)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/seriesync.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    def scan_config(self) -> ScanConfig:
        """Construit la configuration de scan par défaut."""
        return ScanConfig(
            auto_add=self.auto_add,
            add_unknown=self.add_unknown,
            enable_3d_scan=self.enable_3d_scan,
            max_concurrent_scans=self.max_concurrent_scans,
        )
