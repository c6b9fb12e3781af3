#  Copyright © 2025 Bentley Systems, Incorporated
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#      http://www.apache.org/licenses/LICENSE-2.0
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""Package logging.

Library modules get their logger from here so that every logger lives under the
``mlocate_ellipsoids`` namespace. Handlers are only attached by :func:`setup_logging`,
which applications (such as the command line) call explicitly.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

__all__ = [
    "ROOT_LOGGER_NAME",
    "getLogger",
    "setup_logging",
]

ROOT_LOGGER_NAME = "mlocate_ellipsoids"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def getLogger(name: str | None = None) -> logging.Logger:
    """Get a logger in the package namespace.

    :param name: A module name (usually ``__name__``) or a short suffix such as ``"cli"``.

    :returns: The logger ``mlocate_ellipsoids.<name>``, or the package root logger when no name is given.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> logging.Logger:
    """Configure console (and optionally file) output for the package loggers.

    Calling this again replaces the handlers installed by the previous call.

    :param level: Logging level, e.g. ``logging.DEBUG``.
    :param log_file: Optional path to also write the log to.

    :returns: The package root logger.
    """
    logger = getLogger()
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
