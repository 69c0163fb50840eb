"""
Registre des fournisseurs de metadonnees.

Le registre associe un nom de fournisseur a une fabrique d'instances
IShowProvider. Les fabriques sont enregistrees explicitement (tests,
integrations) ou decouvertes via les entry points du groupe
"seriesync.providers".

Chaque scan ouvre une ProviderSet: les instances de recherche sont creees et
initialisees une fois pour toute la session; chaque serie obtient sa propre
instance liee (configure() porte un etat), creee depuis la meme fabrique et
les memes parametres.

Un fournisseur dont la creation ou le setup echoue est journalise et
retire de la session, sans interrompre le scan.
"""

from importlib import metadata
from typing import Callable, Iterable, Optional

from loguru import logger

from seriesync.core.exceptions import ProviderNotFoundError
from seriesync.core.ports.providers import IShowProvider

ENTRY_POINT_GROUP = "seriesync.providers"

ProviderFactory = Callable[[], IShowProvider]


class ProviderSet:
    """
    Fournisseurs actifs pour une session de scan.

    Attributs :
        names : Noms des fournisseurs, par priorite croissante
    """

    def __init__(
        self,
        factories: dict[str, ProviderFactory],
        settings: dict[str, dict[str, str]],
    ) -> None:
        self._factories = dict(factories)
        self._settings = settings
        self._search: dict[str, IShowProvider] = {}
        self._opened: list[IShowProvider] = []
        for name in list(self._factories):
            try:
                self._search[name] = self._create(name)
            except Exception as e:
                # Fournisseur retire de la session: ses series liees echoueront seules
                logger.error("Initialisation du fournisseur {} en echec: {}", name, e)
                del self._factories[name]

    @property
    def names(self) -> list[str]:
        return list(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def _create(self, name: str) -> IShowProvider:
        provider = self._factories[name]()
        if not provider.name:
            provider.name = name
        self._opened.append(provider)
        provider.setup(dict(self._settings.get(name, {})))
        return provider

    def search_providers(self) -> list[tuple[str, IShowProvider]]:
        """Retourne les instances de recherche, dans l'ordre de priorite."""
        return list(self._search.items())

    def bound(self, name: str, provider_id: str, provider_data: Optional[str]) -> IShowProvider:
        """
        Cree une instance liee a une serie.

        Raises :
            ProviderNotFoundError : si le fournisseur n'est pas actif
        """
        if name not in self._factories:
            raise ProviderNotFoundError(name)
        provider = self._create(name)
        provider.configure(provider_id, provider_data or "")
        return provider

    async def close(self) -> None:
        """Ferme toutes les instances ouvertes pendant la session."""
        opened, self._opened = self._opened, []
        for provider in opened:
            try:
                await provider.close()
            except Exception as e:
                logger.warning("Fermeture du fournisseur {} en echec: {}", provider.name, e)


class ProviderRegistry:
    """
    Registre nom -> fabrique de fournisseur.

    Utilisation :
        registry = ProviderRegistry()
        registry.discover()
        provider_set = registry.open_session(["tvdb"], {"tvdb": {"apikey": "..."}})
    """

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> None:
        """Enregistre (ou remplace) la fabrique d'un fournisseur."""
        self._factories[name] = factory

    def names(self) -> list[str]:
        """Noms des fournisseurs enregistres, tries."""
        return sorted(self._factories)

    def discover(self, group: str = ENTRY_POINT_GROUP) -> int:
        """
        Charge les fournisseurs declares en entry points.

        Retourne :
            Nombre de fournisseurs enregistres
        """
        count = 0
        for entry_point in self._select_entry_points(group):
            try:
                factory = entry_point.load()
            except Exception as e:
                logger.warning("Chargement du fournisseur {} impossible: {}", entry_point.name, e)
                continue
            self.register(entry_point.name, factory)
            count += 1
        if count:
            logger.debug("Fournisseurs decouverts: {}", ", ".join(self.names()))
        return count

    @staticmethod
    def _select_entry_points(group: str) -> Iterable[metadata.EntryPoint]:
        return metadata.entry_points(group=group)

    def open_session(
        self,
        names: list[str],
        settings: dict[str, dict[str, str]],
    ) -> ProviderSet:
        """
        Ouvre une session de fournisseurs pour un scan.

        Les noms inconnus du registre sont journalises et ignores.

        Args :
            names : Noms des fournisseurs actives, par priorite
            settings : Parametres cle/valeur par fournisseur
        """
        factories: dict[str, ProviderFactory] = {}
        for name in names:
            factory = self._factories.get(name)
            if factory is None:
                logger.error("Fournisseur {} introuvable", name)
                continue
            factories[name] = factory
        if not factories:
            logger.warning("Aucun fournisseur actif pour ce scan")
        return ProviderSet(factories, settings)
