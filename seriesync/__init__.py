"""
SerieSync - Reconciliation d'une bibliotheque de series TV avec son catalogue.

Ce package parcourt l'arborescence d'une bibliotheque (dossiers de series,
fichiers video d'episodes), la confronte au catalogue persiste et enrichit
chaque entite avec les metadonnees de fournisseurs externes.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (matching, reconciliation, orchestration du scan)
- adapters/ : Couche infrastructure (CLI, registre des fournisseurs)
- infrastructure/ : Persistance SQLModel
- web/ : Points d'entree HTTP
"""

__version__ = "0.1.0"
