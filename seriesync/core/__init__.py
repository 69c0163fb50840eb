"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), objets valeur
et exceptions. Cette couche n'a AUCUNE dependance vers l'infrastructure
(adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entites metier (Library, Show, Season, Episode, VideoFile, ...)
- ports/ : Interfaces abstraites (fournisseurs de metadonnees, repositories)
- value_objects/ : Objets valeur immutables (MediaType, UpdateMode, EpisodeNumbering)
"""
