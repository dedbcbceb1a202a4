"""Console and rotating file logger."""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "prefetch",
    log_dir: Optional[str | Path] = "logs",
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 10
) -> logging.Logger:
    """
    Configure a named logger with console and rotating file output.
    
    Args:
        name: Logger name, also used for the log file name
        log_dir: Directory for ``<name>.log``; None disables file output
        level: Logging level
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    
    # Calling twice must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)
    
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / f"{name}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger
