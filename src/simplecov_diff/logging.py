# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of simplecov-diff 1.2+main, a coverage difference
# reporter for SimpleCov resultsets.
#
# _____________________________________________________________________________
#
# Copyright (c) 2023-2026 the simplecov-diff authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

import logging
import os
import sys
from typing import Any, Optional
from colorlog import ColoredFormatter

from .options import Options

LOGGER = logging.getLogger("simplecov_diff")
DEFAULT_LOGGING_HANDLER = logging.StreamHandler(sys.stderr)

LOG_FORMAT = "(%(levelname)s) %(message)s"
COLOR_LOG_FORMAT = f"%(log_color)s{LOG_FORMAT}"


def __colored_formatter(options: Optional[Options] = None) -> ColoredFormatter:
    """Configure the colored logging formatter."""
    if options is not None:
        force_color = bool(options.get("force_color"))
        no_color = bool(options.get("no_color"))
    else:
        force_color = False
        no_color = False

    return ColoredFormatter(
        COLOR_LOG_FORMAT,
        datefmt=None,
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "blue",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        secondary_log_colors={},
        style="%",
        force_color=force_color,
        no_color=no_color,
        stream=sys.stderr,
    )


class CiFormatter(logging.Formatter):
    """Formatter to turn warnings and errors into annotations of a CI run."""

    def __init__(self, prefixes: dict[int, str]) -> None:
        super().__init__(fmt=LOG_FORMAT)
        self.prefixes = prefixes

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.prefixes.get(record.levelno, '')}{super().format(record)}"


class CiFilter(logging.Filter):
    """Only pass the records which have a workflow command."""

    def __init__(self, prefixes: dict[int, str]) -> None:
        super().__init__()
        self.prefixes = prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno in self.prefixes


def ci_logging_handler(prefixes: dict[int, str], stream: Any = None) -> logging.Handler:
    """Create the handler writing the annotations, stderr is used by default."""
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(CiFormatter(prefixes))
    handler.addFilter(CiFilter(prefixes))
    return handler


def ci_logging_prefixes() -> Optional[dict[int, str]]:
    """Get the workflow commands of the CI system we are running in."""
    if "TF_BUILD" in os.environ:
        return {
            logging.WARNING: "##vso[task.logissue type=warning]",
            logging.ERROR: "##vso[task.logissue type=error]",
        }
    if "GITHUB_ACTIONS" in os.environ:
        return {
            logging.WARNING: "::warning::",
            logging.ERROR: "::error::",
        }

    return None


def configure_logging() -> None:
    """Configure the logging module."""
    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter())
    logging.basicConfig(level=logging.INFO, handlers=[DEFAULT_LOGGING_HANDLER])

    prefixes = ci_logging_prefixes()
    if prefixes is not None:
        root_logger = logging.getLogger()
        if not any(
            isinstance(handler.formatter, CiFormatter)
            for handler in root_logger.handlers
        ):
            root_logger.addHandler(ci_logging_handler(prefixes))

    def exception_hook(exc_type: Any, exc_value: Any, exc_traceback: Any) -> None:
        logging.exception(
            "Uncaught EXCEPTION", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = exception_hook


def update_logging(options: Options) -> None:
    """Update the logger configuration depending on the options."""
    if options.verbose:
        LOGGER.setLevel(logging.DEBUG)

    # Update the formatter of the default logger depending on options
    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter(options))
