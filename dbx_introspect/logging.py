"""Configure logging for dbx-introspect."""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import logging
import logging.handlers
from typing import Any, Dict

from dbx_introspect.exceptions import ConfigurationError, InvalidLogLevelException

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure(config: Dict[str, Any]):
    """Configure the Python logger.

    Records go to stderr, or to a daily rotated file when `logging.path` is set.
    Standard output is reserved for the introspection document.
    """
    log_format = "%(asctime)s %(levelname)s %(name)s : %(message)s"
    level = _get_log_level(config)

    if "logging" in config and "path" in config["logging"]:
        path: str = config["logging"]["path"]
        try:
            handler = logging.handlers.TimedRotatingFileHandler(
                path, when="D", backupCount=7
            )
        except OSError as err:
            raise ConfigurationError(f"cannot open log file {path}: {err}") from err
        logging.basicConfig(level=level, format=log_format, handlers=[handler])
    else:
        logging.basicConfig(level=level, format=log_format)


def _get_log_level(config: Dict[str, Any]):
    log_level = logging.INFO
    if "logging" in config and "level" in config["logging"]:
        level_text: str = config["logging"]["level"].lower()
        if level_text not in LEVELS:
            raise InvalidLogLevelException()
        log_level = LEVELS[level_text]
    return log_level
