"""
Exceptions du domaine SerieSync.

Hierarchie:
- SeriesyncError : base de toutes les erreurs applicatives
  - ConfigurationError : parametres invalides, echec immediat avant le scan
    - UnsupportedMediaTypeError : type de media sans scanner
  - ScanAbortedError : echec avant le traitement des entites (bibliotheque, catalogue, listing)
  - NoConfidentMatchError : aucun candidat au-dessus du seuil
  - ProviderError : echec d'un appel fournisseur
    - ProviderNotFoundError : fournisseur absent du registre
  - SelectionError : selection manuelle impossible (lot absent, index invalide)
  - ReconciliationError : echec du traitement d'une serie
"""


class SeriesyncError(Exception):
    """Erreur de base de SerieSync."""


class ConfigurationError(SeriesyncError):
    """Parametre de scan ou de selection invalide."""


class UnsupportedMediaTypeError(ConfigurationError):
    """Type de media non pris en charge par le scan."""

    def __init__(self, media_type: object) -> None:
        self.media_type = media_type
        super().__init__(f"unsupported media type: {media_type}")


class ScanAbortedError(SeriesyncError):
    """Le scan n'a pas pu demarrer (bibliotheque, catalogue ou listing)."""


class NoConfidentMatchError(SeriesyncError):
    """Aucun candidat ne depasse le seuil de correspondance."""

    def __init__(self, title: str, best_score: float = 0.0) -> None:
        self.title = title
        self.best_score = best_score
        super().__init__("no data")


class ProviderError(SeriesyncError):
    """Echec d'un appel a un fournisseur de metadonnees."""


class ProviderNotFoundError(ProviderError):
    """Fournisseur inconnu du registre ou de la session de scan."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"provider {name} not found")


class SelectionError(SeriesyncError):
    """Selection manuelle impossible."""


class ReconciliationError(SeriesyncError):
    """Echec du traitement d'une serie."""
