import logging
import logging.handlers
import sys
from typing import Optional

_LOGGER_NAME = "mandelart"

def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)

def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03dZ %(threadName)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

def configure_root_logging(
    *,
    level: int = logging.INFO,
    console: bool = True,
    log_file: Optional[str] = None,
    rotate_bytes: int = 5 * 1024 * 1024,
    rotate_count: int = 5,
) -> logging.Logger:
    # stdout may carry frame data, so console output always goes to stderr.
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    fmt = _build_formatter()
    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(level)
        ch.setFormatter(fmt)
        logger.addHandler(ch)
    if log_file:
        fh = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=rotate_bytes, backupCount=rotate_count, encoding="utf-8"
        )
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    return logger
