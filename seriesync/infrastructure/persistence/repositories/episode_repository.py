"""
Implementation SQLModel du repository Episode.

Implemente l'interface IEpisodeRepository pour la persistance des episodes
dans la base de donnees SQLite via SQLModel. Les episodes sont uniques par
(show_id, season_number, episode_number).
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from seriesync.core.entities.media import Episode
from seriesync.core.ports.repositories import IEpisodeRepository
from seriesync.infrastructure.persistence.models import EpisodeModel, utc_now

_FIELDS = (
    "show_id",
    "season_number",
    "episode_number",
    "title",
    "overview",
    "icon",
    "premiered",
    "rating",
    "provider_name",
    "provider_id",
    "provider_data",
    "provider_link",
    "update_mode",
)


class SQLModelEpisodeRepository(IEpisodeRepository):
    """
    Repository SQLModel pour les episodes de series.

    Implemente IEpisodeRepository avec conversion bidirectionnelle
    entre l'entite Episode (domaine) et EpisodeModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: EpisodeModel) -> Episode:
        """Convertit un modele DB en entite domaine."""
        episode = Episode(id=model.id)
        for name in _FIELDS:
            setattr(episode, name, getattr(model, name))
        return episode

    def _find(self, show_id: int, season: int, number: int) -> Optional[EpisodeModel]:
        statement = select(EpisodeModel).where(
            EpisodeModel.show_id == show_id,
            EpisodeModel.season_number == season,
            EpisodeModel.episode_number == number,
        )
        return self._session.exec(statement).first()

    def get_by_id(self, episode_id: int) -> Optional[Episode]:
        """Recupere un episode par son ID interne."""
        model = self._session.get(EpisodeModel, episode_id)
        if model:
            return self._to_entity(model)
        return None

    def get_by_number(self, show_id: int, season: int, number: int) -> Optional[Episode]:
        """Recupere un episode par (serie, saison, numero)."""
        model = self._find(show_id, season, number)
        if model:
            return self._to_entity(model)
        return None

    def list_by_show(self, show_id: int) -> list[Episode]:
        """Liste les episodes d'une serie, par saison puis numero."""
        statement = (
            select(EpisodeModel)
            .where(EpisodeModel.show_id == show_id)
            .order_by(EpisodeModel.season_number, EpisodeModel.episode_number)
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def save(self, episode: Episode) -> Episode:
        """Sauvegarde un episode (insertion ou mise a jour par cle naturelle)."""
        if episode.id:
            existing = self._session.get(EpisodeModel, episode.id)
        else:
            existing = self._find(
                episode.show_id, episode.season_number, episode.episode_number
            )

        model = existing or EpisodeModel(
            show_id=episode.show_id,
            season_number=episode.season_number,
            episode_number=episode.episode_number,
        )
        self._apply(model, episode)
        try:
            self._session.add(model)
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            model = self._find(episode.show_id, episode.season_number, episode.episode_number)
            if model is None:
                raise
            self._apply(model, episode)
            self._session.add(model)
            self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def reset_all_for_show(self, show_id: int, update_mode: int) -> int:
        """Efface la liaison fournisseur des episodes et force leur mode."""
        statement = select(EpisodeModel).where(EpisodeModel.show_id == show_id)
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
    def _apply(model: EpisodeModel, episode: Episode) -> None:
        for name in _FIELDS:
            setattr(model, name, getattr(episode, name))
        model.updated_at = utc_now()
