"""Registre et sessions des fournisseurs de metadonnees."""

from seriesync.adapters.providers.registry import (
    ENTRY_POINT_GROUP,
    ProviderRegistry,
    ProviderSet,
)

__all__ = ["ENTRY_POINT_GROUP", "ProviderRegistry", "ProviderSet"]
