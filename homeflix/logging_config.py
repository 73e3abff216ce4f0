"""
Logging de Homeflix via loguru.

Deux sorties:
- console coloree au niveau choisi (HOMEFLIX_LOG_LEVEL)
- fichier JSON en rotation, niveau DEBUG, pour relire un scan apres coup
"""

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from .config import Settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> "
    "<level>{level: <7}</level> "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(settings: "Settings") -> None:
    """Remplace le handler par defaut de loguru par la console et le fichier JSON."""
    logger.remove()

    logger.add(sys.stderr, level=settings.log_level.upper(), format=CONSOLE_FORMAT, colorize=True)

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        "Logging configure",
        log_file=str(settings.log_file),
        rotation=settings.log_rotation_size,
    )
