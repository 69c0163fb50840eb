"""
Constantes globales pour SerieSync.

Ce module contient les constantes utilisees lors du parcours des bibliotheques:
- Extensions video supportees
- Patterns a ignorer lors du scan
"""

# Extensions video reconnues
VIDEO_EXTENSIONS = frozenset({
    ".mkv",
    ".mp4",
    ".avi",
    ".mov",
    ".wmv",
    ".flv",
    ".webm",
    ".m4v",
    ".mpg",
    ".mpeg",
    ".ts",
    ".vob",
})

# Patterns a ignorer (sample, trailers, extras)
IGNORED_PATTERNS = frozenset({
    "sample",
    "trailer",
    "preview",
    "extras",
    "behind the scenes",
    "deleted scenes",
    "featurette",
    "interview",
    "bonus",
})

# Seuil d'acceptation du meilleur candidat (score strictement superieur)
DEFAULT_MATCH_THRESHOLD = 85
