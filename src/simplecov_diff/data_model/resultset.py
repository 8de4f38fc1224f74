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

"""Parse the SimpleCov ``.resultset.json`` structure into per file records.

A resultset maps the name of a test suite (e.g. ``RSpec``) to the coverage
recorded by that suite::

    {
        "RSpec": {
            "coverage": {
                "/app/lib/a.rb": {
                    "lines": [1, 0, null, "ignored"],
                    "branches": {"[:if, 0, 1, 2, 1, 9]": {"[:then, 1, 1, 2, 1, 4]": 1}}
                }
            },
            "timestamp": 1700000000
        }
    }

Files reported by more than one suite are merged by summing the hit counts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Any, Optional

from ..exceptions import ParseError

LOGGER = logging.getLogger("simplecov_diff")

LineCounts = list[Optional[int]]
BranchKeyType = tuple[str, ...]
BranchCounts = dict[BranchKeyType, int]

# Value written by SimpleCov for lines inside a ``:nocov:`` block.
IGNORED_LINE = "ignored"


@dataclass
class FileResult:
    """The merged line and branch hit counts of a single source file."""

    filename: str
    lines: LineCounts = field(default_factory=list)
    """One entry per source line, ``None`` if the line is not relevant."""

    branches: BranchCounts = field(default_factory=dict)
    """Hit count of each branch, keyed by the branch identifiers."""

    def merge(self, other: FileResult, data_source: str) -> None:
        """Add the hit counts of another record of the same file.

        >>> a = FileResult("a.rb", [1, 0, None], {("b1",): 1})
        >>> a.merge(FileResult("a.rb", [0, 2, None], {("b2",): 3}), "test")
        >>> a.lines
        [1, 2, None]
        >>> a.branches
        {('b1',): 1, ('b2',): 3}
        """
        if len(self.lines) != len(other.lines):
            raise ParseError(
                f"{data_source}: can't merge coverage of {self.filename!r}, "
                f"got {len(other.lines)} lines but expected {len(self.lines)}."
            )

        self.lines = [
            _add_counts(count, other_count)
            for count, other_count in zip(self.lines, other.lines)
        ]
        for key, count in other.branches.items():
            self.branches[key] = self.branches.get(key, 0) + count


def _add_counts(left: Optional[int], right: Optional[int]) -> Optional[int]:
    if left is None:
        return right
    if right is None:
        return left
    return left + right


def parse_resultset(raw: Any, data_source: str = "<resultset>") -> dict[str, FileResult]:
    """Build the per file records of a resultset, merging all suites.

    The insertion order of the returned dictionary is the order in which the
    files are seen first. ParseError is raised if the structure is not a
    resultset, nothing is returned in that case.
    """
    if not isinstance(raw, dict):
        raise ParseError(
            f"{data_source}: expected an object at top level, got {_type_name(raw)}."
        )

    files: dict[str, FileResult] = {}
    for suite_name, suite in raw.items():
        LOGGER.debug(f"{data_source}: Processing suite {suite_name!r}")
        if not isinstance(suite, dict):
            raise ParseError(
                f"{data_source}: suite {suite_name!r} must be an object, "
                f"got {_type_name(suite)}."
            )
        if "coverage" not in suite:
            raise ParseError(f"{data_source}: suite {suite_name!r} has no 'coverage' key.")
        coverage = suite["coverage"]
        if not isinstance(coverage, dict):
            raise ParseError(
                f"{data_source}: 'coverage' of suite {suite_name!r} must be an object, "
                f"got {_type_name(coverage)}."
            )

        for filename, json_file in coverage.items():
            file_result = _file_result_from_json(
                f"{data_source}: {suite_name}: {filename}", filename, json_file
            )
            if filename in files:
                LOGGER.debug(f"{data_source}: Merging coverage of {filename!r}")
                files[filename].merge(file_result, data_source)
            else:
                files[filename] = file_result

    return files


def _file_result_from_json(location: str, filename: str, json_file: Any) -> FileResult:
    # SimpleCov before 0.18 stores only the lines array.
    if isinstance(json_file, list):
        return FileResult(filename, _lines_from_json(location, json_file), {})

    if not isinstance(json_file, dict):
        raise ParseError(
            f"{location}: expected an object or an array, got {_type_name(json_file)}."
        )
    if "lines" not in json_file:
        raise ParseError(f"{location}: missing 'lines' key.")

    return FileResult(
        filename,
        lines=_lines_from_json(location, json_file["lines"]),
        branches=_branches_from_json(location, json_file.get("branches")),
    )


def _lines_from_json(location: str, json_lines: Any) -> LineCounts:
    if not isinstance(json_lines, list):
        raise ParseError(f"{location}: 'lines' must be an array, got {_type_name(json_lines)}.")

    lines = LineCounts()
    for lineno, count in enumerate(json_lines, 1):
        if count is None or count == IGNORED_LINE:
            lines.append(None)
        else:
            lines.append(_check_count(f"{location}: line {lineno}", count))
    return lines


def _branches_from_json(location: str, json_branches: Any) -> BranchCounts:
    branches = BranchCounts()
    if json_branches is None:
        return branches
    if not isinstance(json_branches, dict):
        raise ParseError(
            f"{location}: 'branches' must be an object, got {_type_name(json_branches)}."
        )

    for condition, value in json_branches.items():
        if isinstance(value, dict):
            for branch, count in value.items():
                branches[(condition, branch)] = _check_count(
                    f"{location}: branch {condition} {branch}", count
                )
        else:
            branches[(condition,)] = _check_count(f"{location}: branch {condition}", value)
    return branches


def _check_count(location: str, count: Any) -> int:
    # bool is a subclass of int but never a valid hit count
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ParseError(f"{location}: expected a non negative hit count, got {count!r}.")
    return count


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__
