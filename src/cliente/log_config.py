import logging
import sys

from cliente_config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up logging for the cliente packages with:
    - Console output with timestamps and module names
    - Configurable log level for our modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("cliente").setLevel(log_level)
    logging.getLogger("cliente_auth").setLevel(log_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
