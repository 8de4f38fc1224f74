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
import enum
import logging
from typing import Any, Optional

from .coverage import Coverage

LOGGER = logging.getLogger("simplecov_diff")


class DiffStatus(enum.Enum):
    """How a metric of a file changed between the two resultsets."""

    NEW = "new"
    DELETED = "deleted"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"
    ABSENT = "absent"


@dataclass(frozen=True)
class CoverageDelta:
    """The value of one metric in the base and in the head resultset."""

    from_: Optional[float]
    to: Optional[float]

    @property
    def status(self) -> DiffStatus:
        """Classify the change by the presence of both values.

        >>> CoverageDelta(None, 50.0).status
        <DiffStatus.NEW: 'new'>
        >>> CoverageDelta(50.0, None).status
        <DiffStatus.DELETED: 'deleted'>
        >>> CoverageDelta(50.0, 75.0).status
        <DiffStatus.MODIFIED: 'modified'>
        >>> CoverageDelta(50.0, 50.0).status
        <DiffStatus.UNCHANGED: 'unchanged'>
        >>> CoverageDelta(None, None).status
        <DiffStatus.ABSENT: 'absent'>
        """
        if self.from_ is None:
            return DiffStatus.ABSENT if self.to is None else DiffStatus.NEW
        if self.to is None:
            return DiffStatus.DELETED
        if self.from_ == self.to:
            return DiffStatus.UNCHANGED
        return DiffStatus.MODIFIED

    @property
    def delta(self) -> Optional[float]:
        """Percentage points gained (positive) or lost, None if a value is missing."""
        if self.from_ is None or self.to is None:
            return None
        return self.to - self.from_

    def serialize(self) -> dict[str, Optional[float]]:
        """Serialize the object."""
        return {"from": self.from_, "to": self.to}


@dataclass(frozen=True)
class FileCoverageDiff:
    """The coverage change of a single file."""

    filename: str
    lines: CoverageDelta
    branches: CoverageDelta

    def serialize(self) -> dict[str, Any]:
        """Serialize the object."""
        return {
            "filename": self.filename,
            "lines": self.lines.serialize(),
            "branches": self.branches.serialize(),
        }


def get_coverage_diff(base: Coverage, head: Coverage) -> list[FileCoverageDiff]:
    """Compare the coverage of every file of the base and the head resultset.

    The files of the head come first in their order, followed by the files
    only present in the base. Files with unchanged coverage are part of the
    result too.
    """
    filenames = list(head.filenames)
    filenames.extend(filename for filename in base.filenames if filename not in head)

    diff = list[FileCoverageDiff]()
    for filename in filenames:
        if filename not in base and filename not in head:
            continue

        base_percentages = base.percentage_for(filename)
        head_percentages = head.percentage_for(filename)
        diff.append(
            FileCoverageDiff(
                filename=filename,
                lines=CoverageDelta(base_percentages.lines, head_percentages.lines),
                branches=CoverageDelta(
                    base_percentages.branches, head_percentages.branches
                ),
            )
        )

    LOGGER.debug(
        f"Compared {len(diff)} files ({len(base)} in base, {len(head)} in head)"
    )
    return diff
