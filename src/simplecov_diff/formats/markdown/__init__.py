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
from typing import Union

from ...diff import FileCoverageDiff
from ...formats.base import BaseHandler
from ...options import ConfigOption, non_empty_string, output_path

LOGGER = logging.getLogger("simplecov_diff")

DEFAULT_BADGE_URL = (
    "https://raw.githubusercontent.com/kzkn/simplecov-resultset-diff-action/main/assets"
)


class MarkdownHandler(BaseHandler):
    """Class to handle markdown format."""

    @classmethod
    def get_options(cls) -> list[Union[ConfigOption, str]]:
        return [
            ConfigOption(
                "output",
                ["-o", "--output"],
                group="output_options",
                metavar="OUTPUT",
                help=(
                    "Also write the report to this file, "
                    "use '-' to print it on stdout."
                ),
                type=output_path,
            ),
            ConfigOption(
                "markdown_title",
                ["--markdown-title"],
                group="output_options",
                metavar="TITLE",
                help="Use TITLE as heading of the report. Default is {default!r}.",
                type=non_empty_string,
                default="Coverage difference",
            ),
            ConfigOption(
                "badge_url",
                ["--badge-url"],
                group="output_options",
                metavar="URL",
                help=(
                    "Load the delta badges from this base URL. "
                    "Default is {default}."
                ),
                type=lambda value: non_empty_string(value).rstrip("/"),
                default=DEFAULT_BADGE_URL,
            ),
        ]

    def render_report(self, diff: list[FileCoverageDiff], commit_sha: str) -> str:
        """Render the comment body."""
        from .write import render_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        return render_report(diff, commit_sha, self.options)

    def write_report(self, report: str, output_file: str) -> None:
        """Write a rendered report."""
        from .write import write_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        write_report(report, output_file)
