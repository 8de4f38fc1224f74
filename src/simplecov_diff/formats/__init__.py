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

from __future__ import annotations
import logging

from ..coverage import Coverage
from ..diff import FileCoverageDiff
from ..options import ConfigOption, Options

# the handler
from .markdown import MarkdownHandler
from .simplecov import SimplecovHandler

LOGGER = logging.getLogger("simplecov_diff")


def get_options() -> list[ConfigOption]:
    """Get the list of all options from the format handlers."""
    return [
        o
        for o in [
            *SimplecovHandler.get_options(),
            *MarkdownHandler.get_options(),
        ]
        if isinstance(o, ConfigOption)
    ]


def read_reports(options: Options) -> tuple[Coverage, Coverage]:
    """Read the base and the head resultset.

    Both files must exist before any of them is parsed.
    """
    for filename in (options.base_resultset_path, options.head_resultset_path):
        SimplecovHandler.check_exists(filename)

    handler = SimplecovHandler(options)
    LOGGER.info("Reading base coverage data...")
    base = handler.read_report(options.base_resultset_path)
    LOGGER.info("Reading head coverage data...")
    head = handler.read_report(options.head_resultset_path)
    return base, head


def render_report(
    diff: list[FileCoverageDiff], commit_sha: str, options: Options
) -> str:
    """Render the comment body for the diff."""
    return MarkdownHandler(options).render_report(diff, commit_sha)


def write_report(report: str, options: Options) -> None:
    """Write the rendered report if an output file is configured."""
    if options.output is not None:
        MarkdownHandler(options).write_report(report, options.output)
