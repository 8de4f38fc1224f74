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

"""
The coverage of one resultset, summarized per file.

The Coverage object is built once and is read-only afterwards,
it can be shared between several diff computations.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Any, Iterator, Optional

from .data_model.resultset import FileResult, parse_resultset
from .data_model.stats import FileStats

LOGGER = logging.getLogger("simplecov_diff")


@dataclass(frozen=True)
class CoveragePercentages:
    """Line and branch coverage of a file, ``None`` if not applicable."""

    lines: Optional[float]
    branches: Optional[float]


ABSENT = CoveragePercentages(lines=None, branches=None)


class Coverage:
    """Per file coverage percentages of a resultset."""

    def __init__(self, resultset: dict[str, FileResult]) -> None:
        self.__stats = {
            filename: FileStats.from_file_result(file_result)
            for filename, file_result in resultset.items()
        }
        LOGGER.debug(f"Summarized the coverage of {len(self.__stats)} files")

    @classmethod
    def from_resultset(cls, raw: Any, data_source: str = "<resultset>") -> Coverage:
        """Parse the raw JSON data of a resultset and summarize it."""
        return cls(parse_resultset(raw, data_source))

    def __contains__(self, filename: object) -> bool:
        return filename in self.__stats

    def __len__(self) -> int:
        return len(self.__stats)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__stats)

    @property
    def filenames(self) -> tuple[str, ...]:
        """The files in the order of the resultset."""
        return tuple(self.__stats)

    def stats(self, filename: str) -> Optional[FileStats]:
        """Get the statistics of a file or None if the file is unknown."""
        return self.__stats.get(filename)

    def percentage_for(self, filename: str) -> CoveragePercentages:
        """Get the line and branch coverage of a file.

        Both values are None if the file isn't part of the resultset.
        """
        stats = self.__stats.get(filename)
        if stats is None:
            return ABSENT

        return CoveragePercentages(
            lines=stats.line.percent,
            branches=stats.branch.percent,
        )
