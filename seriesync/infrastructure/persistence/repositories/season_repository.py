"""
Implementation SQLModel du repository Season.

Les saisons sont uniques par (show_id, season_number): une insertion sur une
cle existante met a jour la saison en place.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from seriesync.core.entities.media import Season
from seriesync.core.ports.repositories import ISeasonRepository
from seriesync.infrastructure.persistence.models import SeasonModel, utc_now

_FIELDS = (
    "show_id",
    "season_number",
    "title",
    "overview",
    "icon",
    "fanart",
    "trailer",
    "premiered",
    "rating",
    "provider_name",
    "provider_id",
    "provider_data",
    "provider_link",
    "update_mode",
)


class SQLModelSeasonRepository(ISeasonRepository):
    """
    Repository SQLModel pour les saisons de series.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: SeasonModel) -> Season:
        season = Season(id=model.id)
        for name in _FIELDS:
            setattr(season, name, getattr(model, name))
        return season

    def _find(self, show_id: int, season_number: int) -> Optional[SeasonModel]:
        statement = select(SeasonModel).where(
            SeasonModel.show_id == show_id,
            SeasonModel.season_number == season_number,
        )
        return self._session.exec(statement).first()

    def list_by_show(self, show_id: int) -> list[Season]:
        """Liste les saisons d'une serie, par numero croissant."""
        statement = (
            select(SeasonModel)
            .where(SeasonModel.show_id == show_id)
            .order_by(SeasonModel.season_number)
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def save(self, season: Season) -> Season:
        """Sauvegarde une saison (insertion ou mise a jour par cle naturelle)."""
        if season.id:
            existing = self._session.get(SeasonModel, season.id)
        else:
            existing = self._find(season.show_id, season.season_number)

        model = existing or SeasonModel(
            show_id=season.show_id, season_number=season.season_number
        )
        self._apply(model, season)
        try:
            self._session.add(model)
            self._session.commit()
        except IntegrityError:
            # Insertion concurrente de la meme saison: mise a jour de l'existante
            self._session.rollback()
            model = self._find(season.show_id, season.season_number)
            if model is None:
                raise
            self._apply(model, season)
            self._session.add(model)
            self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def reset_all_for_show(self, show_id: int, update_mode: int) -> int:
        """Efface la liaison fournisseur des saisons et force leur mode."""
        statement = select(SeasonModel).where(SeasonModel.show_id == show_id)
        models = self._session.exec(statement).all()
        for model in models:
            model.provider_name = None
            model.provider_id = None
            model.update_mode = update_mode
            model.updated_at = utc_now()
            self._session.add(model)
        self._session.commit()
        return len(models)

    @staticmethod
    def _apply(model: SeasonModel, season: Season) -> None:
        for name in _FIELDS:
            setattr(model, name, getattr(season, name))
        model.updated_at = utc_now()
