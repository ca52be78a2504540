import logging
import logging.handlers
from typing import Optional

_PACKAGE = "mandelband"
_FORMAT = "%(asctime)s.%(msecs)03dZ %(threadName)s %(levelname)s %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"

def get_logger(component: Optional[str] = None) -> logging.Logger:
    """Package logger, or the child logger of one component ("scheduler", "image", ...)."""
    return logging.getLogger(f"{_PACKAGE}.{component}" if component else _PACKAGE)

def level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {name!r}")
    return level

def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(handler)

def configure_root_logging(
    *,
    level: int = logging.INFO,
    console: bool = True,
    log_file: Optional[str] = None,
    rotate_bytes: int = 5 * 1024 * 1024,
    rotate_count: int = 5,
) -> logging.Logger:
    """
    Route every mandelband.* logger, band worker threads included, to stderr
    and optionally a rotating file. Calling it again replaces (and closes)
    the previous handlers.
    """
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    if console:
        _attach(logger, logging.StreamHandler(), level)
    if log_file:
        _attach(logger, logging.handlers.RotatingFileHandler(
            log_file, maxBytes=rotate_bytes, backupCount=rotate_count, encoding="utf-8"), level)
    return logger
