"""
Entites liees a la recherche et a la selection d'un fournisseur.

Les candidats sont ephemeres: produits par les fournisseurs lors d'une
recherche, ils ne sont persistes (par lot) que lorsqu'aucune selection
automatique n'a ete faite.
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional


@dataclass
class SearchCandidate:
    """
    Resultat de recherche propose par un fournisseur.

    Attributs :
        title : Titre propose
        provider_name : Nom du fournisseur
        provider_id : ID chez le fournisseur
        provider_data : Donnees opaques du fournisseur
        premiered : Date de premiere diffusion (timestamp unix, 0 si inconnue)
        overview : Resume optionnel, pour l'affichage
        icon : Affiche optionnelle, pour l'affichage
    """

    title: str
    provider_name: str
    provider_id: str
    provider_data: str = ""
    premiered: int = 0
    overview: Optional[str] = None
    icon: Optional[str] = None

    @property
    def premiere_year(self) -> Optional[int]:
        """Annee de premiere diffusion (UTC), None si inconnue."""
        if not self.premiered:
            return None
        return datetime.fromtimestamp(self.premiered, tz=timezone.utc).year

    def to_dict(self) -> dict[str, Any]:
        """Serialise le candidat pour le stockage JSON."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchCandidate":
        """Reconstruit un candidat depuis sa forme stockee."""
        return cls(
            title=data.get("title", ""),
            provider_name=data.get("provider_name", ""),
            provider_id=str(data.get("provider_id", "")),
            provider_data=data.get("provider_data") or "",
            premiered=int(data.get("premiered") or 0),
            overview=data.get("overview"),
            icon=data.get("icon"),
        )


@dataclass(frozen=True)
class SelectionResult:
    """Liaison fournisseur a appliquer a une serie."""

    provider_name: str
    provider_id: str
    provider_data: str = ""

    @classmethod
    def from_candidate(cls, candidate: SearchCandidate) -> "SelectionResult":
        """Construit la liaison depuis un candidat de recherche."""
        return cls(
            provider_name=candidate.provider_name,
            provider_id=candidate.provider_id,
            provider_data=candidate.provider_data,
        )


@dataclass
class SearchBatch:
    """
    Lot de candidats persiste pour une entite en attente de selection.

    Attributs :
        media_type : Type de l'entite ("tvs")
        media_id : ID de l'entite
        name : Titre recherche
        candidates : Candidats dans l'ordre des fournisseurs
    """

    media_type: str
    media_id: int
    name: str
    candidates: list[SearchCandidate]
