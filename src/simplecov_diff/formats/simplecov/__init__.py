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

import os
from typing import Union

from ...coverage import Coverage
from ...exceptions import MissingInputError
from ...formats.base import BaseHandler
from ...options import ConfigOption


class SimplecovHandler(BaseHandler):
    """Class to handle the SimpleCov resultset format."""

    @classmethod
    def get_options(cls) -> list[Union[ConfigOption, str]]:
        return [
            "base_resultset_path",
            "head_resultset_path",
        ]

    @staticmethod
    def check_exists(filename: str) -> None:
        """Raise MissingInputError if the file doesn't exist."""
        if not os.path.isfile(filename):
            raise MissingInputError(f"{filename} does not exist!")

    def read_report(self, filename: str) -> Coverage:
        """Read a resultset and summarize the coverage."""
        from .read import read_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        return read_report(filename)
