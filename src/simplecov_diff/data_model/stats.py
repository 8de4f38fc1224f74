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
from dataclasses import dataclass
from typing import Optional, TypeVar, Union

from .resultset import FileResult

_T = TypeVar("_T")


@dataclass(frozen=True)
class CoverageStat:
    """A single coverage metric, e.g. the line coverage of a file."""

    covered: int
    """How many elements were covered."""

    total: int
    """How many elements there were in total."""

    @staticmethod
    def new_empty() -> CoverageStat:
        """Create a empty coverage statistic."""
        return CoverageStat(0, 0)

    @property
    def percent(self) -> Optional[float]:
        """Percentage of covered elements, equivalent to ``self.percent_or(None)``"""
        return self.percent_or(None)

    def percent_or(self, default: _T) -> Union[float, _T]:
        """Percentage of covered elements.

        The full precision is kept, truncation is done by the reports:
        >>> CoverageStat(2, 3).percent_or("default")
        66.66666666666666
        >>> CoverageStat(3, 3).percent_or("default")
        100.0
        >>> CoverageStat(0, 4).percent_or("default")
        0.0

        If there are no elements, the default will be returned:
        >>> CoverageStat(0, 0).percent_or("default")
        'default'
        """
        if not self.total:
            return default

        return self.covered / self.total * 100.0


@dataclass(frozen=True)
class FileStats:
    """Data class for the coverage statistics of one file."""

    line: CoverageStat
    branch: CoverageStat

    @staticmethod
    def from_file_result(file_result: FileResult) -> FileStats:
        """Summarize the line and branch hits of a file."""
        line_counts = [count for count in file_result.lines if count is not None]
        branch_counts = list(file_result.branches.values())
        return FileStats(
            line=CoverageStat(
                covered=sum(1 for count in line_counts if count > 0),
                total=len(line_counts),
            ),
            branch=CoverageStat(
                covered=sum(1 for count in branch_counts if count > 0),
                total=len(branch_counts),
            ),
        )
