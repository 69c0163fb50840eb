"""
Implementation SQLModel du repository Show.

Implemente l'interface IShowRepository pour la persistance des series TV
dans la base de donnees SQLite via SQLModel.
"""

from typing import Optional

from sqlmodel import Session, select

from seriesync.core.entities.media import Show
from seriesync.core.entities.search import SelectionResult
from seriesync.core.ports.repositories import IShowRepository
from seriesync.infrastructure.persistence.models import ShowModel, utc_now

# Champs copies tels quels entre l'entite et le modele
_FIELDS = (
    "title",
    "library_id",
    "path",
    "overview",
    "icon",
    "fanart",
    "website",
    "trailer",
    "premiered",
    "rating",
    "provider_name",
    "provider_id",
    "provider_data",
    "provider_link",
    "update_mode",
)


class SQLModelShowRepository(IShowRepository):
    """
    Repository SQLModel pour les series TV.

    Implemente IShowRepository avec conversion bidirectionnelle
    entre l'entite Show (domaine) et ShowModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: ShowModel) -> Show:
        """Convertit un modele DB en entite domaine."""
        show = Show(id=model.id)
        for name in _FIELDS:
            setattr(show, name, getattr(model, name))
        return show

    def get_by_id(self, show_id: int) -> Optional[Show]:
        """Recupere une serie par son ID interne."""
        model = self._session.get(ShowModel, show_id)
        if model:
            return self._to_entity(model)
        return None

    def list_by_library(self, library_id: int) -> list[Show]:
        """Liste les series d'une bibliotheque."""
        statement = select(ShowModel).where(ShowModel.library_id == library_id)
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def save(self, show: Show) -> Show:
        """Sauvegarde une serie (insertion ou mise a jour)."""
        existing = None
        if show.id:
            existing = self._session.get(ShowModel, show.id)

        model = existing or ShowModel(title=show.title, library_id=show.library_id, path=show.path)
        for name in _FIELDS:
            setattr(model, name, getattr(show, name))
        model.updated_at = utc_now()

        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def set_binding(self, show_id: int, selection: SelectionResult, update_mode: int) -> None:
        """Ecrit la liaison fournisseur et le mode de mise a jour d'une serie."""
        model = self._session.get(ShowModel, show_id)
        if model is None:
            raise LookupError(f"show {show_id} not found")
        model.provider_name = selection.provider_name
        model.provider_id = selection.provider_id
        model.provider_data = selection.provider_data
        model.update_mode = update_mode
        model.updated_at = utc_now()
        self._session.add(model)
        self._session.commit()
