"""Logging bootstrap for applications embedding seriescache.

Library modules only create module-level loggers; handlers are attached
here, by the application, once.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from seriescache.schemas import EngineDefaults, LoggingConfig

logger = logging.getLogger(__name__)


def setup_logging(
    config: Union[None, EngineDefaults, LoggingConfig] = None,
    log_path: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure the root logger with console (and optional file) handlers.

    Parameters
    ----------
    config : EngineDefaults or LoggingConfig, optional
        Source of the log level. ``LoggingConfig()`` (INFO) if omitted.
    log_path : str or Path, optional
        Also write to this file. Parent directories are created.

    Returns
    -------
    logging.Logger
        The configured root logger.
    """
    if config is None:
        config = LoggingConfig()
    elif isinstance(config, EngineDefaults):
        config = config.logging
    log_level = getattr(logging, config.level, logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.info("Logging: level=%s, file=%s", config.level, log_path)
    return root
