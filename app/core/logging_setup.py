"""Configuration du logging de l'API"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Ajoute un handler console au logger racine.

    Si l'hôte (uvicorn, gunicorn, pytest...) a déjà configuré le logging,
    on ne touche à rien.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(level.upper())
    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    root.addHandler(handler)

    # SQLAlchemy est trop bavard en INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
