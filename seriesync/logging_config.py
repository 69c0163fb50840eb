"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console (stderr) : lisible, colorée, au niveau demandé
- fichier : JSON sérialisé, niveau DEBUG, avec rotation

Les loggers de la bibliothèque standard (routes web, uvicorn, sqlalchemy)
sont redirigés vers loguru pour partager ces deux sorties.
"""

import logging
import sys

from loguru import logger

from seriesync.config import Settings

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class _InterceptHandler(logging.Handler):
    """Transmet les enregistrements logging standard a loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(settings: Settings) -> None:
    """Configure loguru depuis les paramètres (SERIESYNC_LOG_*).

    Args :
        settings : Paramètres de l'application (niveau, fichier, rotation, rétention)
    """
    logger.remove()

    logger.add(sys.stderr, level=settings.log_level, format=_CONSOLE_FORMAT, colorize=True)

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,  # Taches concurrentes du scan
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=logging.INFO, force=True)
    # Pas de trace des requetes SQL
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
