import logging
from typing import Optional

from blogcorpus.settings import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(name: Optional[str]) -> int:
    level = getattr(logging, (name or "").upper(), None)
    if not isinstance(level, int):
        return logging.INFO
    return level


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=resolve_level(level or settings.LOG_LEVEL),
        format=LOG_FORMAT,
    )
