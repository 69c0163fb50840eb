"""
Adaptateurs de SerieSync.

- providers/ : Registre des fournisseurs de metadonnees
- cli/ : Interface en ligne de commande (Typer)
"""
