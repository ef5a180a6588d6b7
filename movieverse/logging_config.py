"""
Configuration du logging de MovieVerse via loguru.

Deux sorties :
- console : coloree, au niveau demande, pour suivre le serveur ou une commande CLI
- fichier : JSON avec rotation, tous niveaux, pour retrouver les appels TMDB

Les bibliotheques qui passent par le module logging standard (uvicorn,
httpx) sont redirigees vers loguru pour n'avoir qu'une configuration.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Loggers standard rediriges vers loguru, avec leur niveau minimum
STDLIB_LOGGERS = {
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.INFO,
    "httpx": logging.WARNING,
}


class InterceptHandler(logging.Handler):
    """Transmet les enregistrements du module logging a loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Remonte jusqu'a l'appelant d'origine pour garder nom et ligne
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/movieverse.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure les sorties loguru et redirige le logging standard.

    Args :
        log_level : Niveau minimum de la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier JSON, son dossier est cree si besoin
        rotation_size : Taille declenchant la rotation (ex: "10 MB")
        retention_count : Nombre de fichiers tournes conserves
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        encoding="utf-8",
    )

    handler = InterceptHandler()
    for name, level in STDLIB_LOGGERS.items():
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.setLevel(level)
        std_logger.propagate = False
