"""
Implementation SQLModel du repository de configuration des fournisseurs.
"""

import json

from sqlmodel import Session, select

from seriesync.core.ports.repositories import IProviderConfigRepository
from seriesync.core.value_objects import MediaType
from seriesync.infrastructure.persistence.models import ProviderConfigModel


class SQLModelProviderConfigRepository(IProviderConfigRepository):
    """Repository SQLModel pour les fournisseurs actives par type de media."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_enabled(
        self, media_type: MediaType
    ) -> tuple[list[str], dict[str, dict[str, str]]]:
        """
        Liste les fournisseurs actives pour un type de media.

        Retourne :
            (noms tries par priorite croissante, mapping nom -> parametres)
        """
        statement = (
            select(ProviderConfigModel)
            .where(
                ProviderConfigModel.media_type == media_type.value,
                ProviderConfigModel.enabled == True,  # noqa: E712
            )
            .order_by(ProviderConfigModel.priority, ProviderConfigModel.id)
        )
        names: list[str] = []
        settings: dict[str, dict[str, str]] = {}
        for model in self._session.exec(statement).all():
            names.append(model.provider)
            settings[model.provider] = {
                str(key): str(value) for key, value in model.settings.items()
            }
        return names, settings

    def save(
        self,
        provider: str,
        media_type: MediaType,
        settings: dict[str, str] | None = None,
        priority: int = 0,
        enabled: bool = True,
    ) -> None:
        """Active (ou met a jour) un fournisseur pour un type de media."""
        statement = select(ProviderConfigModel).where(
            ProviderConfigModel.provider == provider,
            ProviderConfigModel.media_type == media_type.value,
        )
        model = self._session.exec(statement).first() or ProviderConfigModel(
            provider=provider, media_type=media_type.value
        )
        model.enabled = enabled
        model.priority = priority
        model.settings_json = json.dumps(settings or {})
        self._session.add(model)
        self._session.commit()
