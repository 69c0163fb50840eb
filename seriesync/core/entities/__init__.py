"""
Entites metier representant les concepts du domaine.

Exports:
- Library, Show, Season, Episode, VideoFile : catalogue media
- Tag, Person : entites de reference liees aux series
- SearchCandidate, SearchBatch, SelectionResult : recherche et selection
"""

from seriesync.core.entities.media import (
    Episode,
    Library,
    Person,
    Season,
    Show,
    Tag,
    VideoFile,
)
from seriesync.core.entities.search import SearchBatch, SearchCandidate, SelectionResult

__all__ = [
    "Library",
    "Show",
    "Season",
    "Episode",
    "VideoFile",
    "Tag",
    "Person",
    "SearchCandidate",
    "SearchBatch",
    "SelectionResult",
]
