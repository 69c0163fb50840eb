"""
Adaptateur pour le parcours du systeme de fichiers d'une bibliotheque.

Fournit l'enumeration des dossiers racine (series candidates) et des
fichiers video d'une serie, dans un ordre deterministe (tri par nom).
"""

from pathlib import Path
from typing import Iterator

from seriesync.utils.constants import IGNORED_PATTERNS, VIDEO_EXTENSIONS


def is_video_file(path: Path) -> bool:
    """
    Indique si un chemin designe un fichier video a traiter.

    Filtre par extension (VIDEO_EXTENSIONS) et exclut les noms contenant
    un des IGNORED_PATTERNS (insensible a la casse).
    """
    if path.suffix.lower() not in VIDEO_EXTENSIONS:
        return False
    filename_lower = path.name.lower()
    return not any(pattern in filename_lower for pattern in IGNORED_PATTERNS)


class FileSystemAdapter:
    """
    Operations de lecture sur l'arborescence d'une bibliotheque.
    """

    def list_directories(self, root: Path) -> list[Path]:
        """
        Liste les sous-repertoires directs d'une racine, tries par nom.

        Les entrees cachees et les fichiers sont ignores.

        Raises :
            OSError : si la racine ne peut pas etre listee
        """
        return sorted(
            (entry for entry in root.iterdir() if entry.is_dir() and not entry.name.startswith(".")),
            key=lambda entry: entry.name,
        )

    def list_video_files(self, directory: Path) -> Iterator[Path]:
        """
        Liste les fichiers video d'un repertoire (recursif), tries par chemin.

        Args :
            directory : Repertoire de la serie

        Yields :
            Chemins des fichiers video
        """
        if not directory.is_dir():
            return

        paths = []
        for path in directory.rglob("*"):
            relative = path.relative_to(directory)
            # Ignorer les fichiers et dossiers caches
            if any(part.startswith(".") for part in relative.parts):
                continue
            if path.is_dir():
                continue
            if is_video_file(path):
                paths.append(path)
        yield from sorted(paths)

    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'est pas lisible.
        """
        try:
            return path.stat().st_size
        except OSError:
            return 0
