"""
Couche infrastructure de SerieSync.

Implementations concretes des ports du domaine:

- persistence/ : Stockage SQLite avec SQLModel (modeles et repositories)
"""
