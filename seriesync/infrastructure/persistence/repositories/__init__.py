"""Repositories SQLModel du catalogue."""

from seriesync.infrastructure.persistence.repositories.episode_repository import (
    SQLModelEpisodeRepository,
)
from seriesync.infrastructure.persistence.repositories.library_repository import (
    SQLModelLibraryRepository,
)
from seriesync.infrastructure.persistence.repositories.person_repository import (
    SQLModelPersonRepository,
)
from seriesync.infrastructure.persistence.repositories.provider_config_repository import (
    SQLModelProviderConfigRepository,
)
from seriesync.infrastructure.persistence.repositories.search_result_repository import (
    SQLModelSearchResultRepository,
)
from seriesync.infrastructure.persistence.repositories.season_repository import (
    SQLModelSeasonRepository,
)
from seriesync.infrastructure.persistence.repositories.show_repository import (
    SQLModelShowRepository,
)
from seriesync.infrastructure.persistence.repositories.tag_repository import (
    SQLModelTagRepository,
)
from seriesync.infrastructure.persistence.repositories.video_file_repository import (
    SQLModelVideoFileRepository,
)

__all__ = [
    "SQLModelEpisodeRepository",
    "SQLModelLibraryRepository",
    "SQLModelPersonRepository",
    "SQLModelProviderConfigRepository",
    "SQLModelSearchResultRepository",
    "SQLModelSeasonRepository",
    "SQLModelShowRepository",
    "SQLModelTagRepository",
    "SQLModelVideoFileRepository",
]
