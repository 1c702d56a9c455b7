import logging

from fantasy_admin.core.config import get_settings

_LOGGERS = {}


def get_logger(name: str) -> logging.Logger:
    """Create or retrieve a named logger writing to the console."""
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(name)
    logger.setLevel(get_settings().log_level.upper())

    if not logger.handlers:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(console)

    _LOGGERS[name] = logger
    return logger


def configure_engine_logging() -> logging.Logger:
    """Give the scoring engine's module loggers the same console output."""
    return get_logger("fantasy_engine")
