"""API web (FastAPI) exposant le scan et la selection manuelle."""
