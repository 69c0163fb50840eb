"""
Implementation SQLModel du repository VideoFile.

Un fichier video est identifie par (library_id, path), le chemin etant
relatif a la racine de la bibliotheque.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from seriesync.core.entities.media import VideoFile
from seriesync.core.ports.repositories import IVideoFileRepository
from seriesync.core.value_objects import MediaType
from seriesync.infrastructure.persistence.models import VideoFileModel, utc_now


class SQLModelVideoFileRepository(IVideoFileRepository):
    """
    Repository SQLModel pour les fichiers video.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: VideoFileModel) -> VideoFile:
        return VideoFile(
            id=model.id,
            library_id=model.library_id,
            path=model.path,
            media_type=MediaType(model.media_type),
            media_id=model.media_id,
            size_bytes=model.size_bytes,
        )

    def _find(self, library_id: int, path: str) -> Optional[VideoFileModel]:
        statement = select(VideoFileModel).where(
            VideoFileModel.library_id == library_id,
            VideoFileModel.path == path,
        )
        return self._session.exec(statement).first()

    def get_by_path(self, library_id: int, path: str) -> Optional[VideoFile]:
        """Recupere un fichier par (bibliotheque, chemin relatif)."""
        model = self._find(library_id, path)
        if model:
            return self._to_entity(model)
        return None

    def add(self, video_file: VideoFile) -> VideoFile:
        """Enregistre un fichier, ou retourne l'existant pour ce chemin."""
        existing = self._find(video_file.library_id, video_file.path)
        if existing:
            return self._to_entity(existing)

        model = VideoFileModel(
            library_id=video_file.library_id,
            path=video_file.path,
            media_type=video_file.media_type.value,
            media_id=video_file.media_id,
            size_bytes=video_file.size_bytes,
        )
        try:
            self._session.add(model)
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            existing = self._find(video_file.library_id, video_file.path)
            if existing is None:
                raise
            return self._to_entity(existing)
        self._session.refresh(model)
        return self._to_entity(model)

    def touch(self, video_file_id: int, size_bytes: Optional[int] = None) -> None:
        """Met a jour la date (et la taille) d'un fichier connu."""
        model = self._session.get(VideoFileModel, video_file_id)
        if model is None:
            return
        if size_bytes is not None:
            model.size_bytes = size_bytes
        model.updated_at = utc_now()
        self._session.add(model)
        self._session.commit()

    def list_by_media(self, media_type: MediaType, media_id: int) -> list[VideoFile]:
        """Liste les fichiers associes a un media."""
        statement = select(VideoFileModel).where(
            VideoFileModel.media_type == media_type.value,
            VideoFileModel.media_id == media_id,
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]
