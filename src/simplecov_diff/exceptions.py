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

"""Exceptions used in simplecov-diff."""


class SimplecovDiffError(Exception):
    """Base class for all fatal errors of a run."""


class MissingInputError(SimplecovDiffError):
    """Raised when a resultset file does not exist."""


class ParseError(SimplecovDiffError):
    """Raised when a resultset is not valid JSON or has an unexpected shape."""


class PublicationError(SimplecovDiffError):
    """Raised when the report could not be posted as a comment."""
