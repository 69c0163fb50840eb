"""Utilitaires partages de SerieSync."""
