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

from typing import Any

import pytest

from simplecov_diff.coverage import Coverage, CoveragePercentages
from simplecov_diff.data_model.resultset import FileResult
from simplecov_diff.data_model.stats import CoverageStat, FileStats


def resultset(files: dict[str, Any]) -> dict[str, Any]:
    return {"RSpec": {"coverage": files, "timestamp": 1700000000}}


def test_line_percentage() -> None:
    coverage = Coverage.from_resultset(resultset({"a.rb": {"lines": [1, 0, None, 3]}}))
    percentages = coverage.percentage_for("a.rb")
    assert percentages.lines == pytest.approx(200 / 3)
    assert percentages.branches is None


def test_branch_percentage() -> None:
    coverage = Coverage.from_resultset(
        resultset(
            {
                "a.rb": {
                    "lines": [1],
                    "branches": {"if": {"then": 1, "else": 0}, "unless": {"then": 0, "else": 0}},
                }
            }
        )
    )
    assert coverage.percentage_for("a.rb") == CoveragePercentages(100.0, 25.0)


def test_no_instrumentable_lines() -> None:
    coverage = Coverage.from_resultset(resultset({"a.rb": {"lines": [None, "ignored"]}}))
    assert coverage.percentage_for("a.rb") == CoveragePercentages(None, None)
    assert "a.rb" in coverage


def test_uncovered_file_is_zero_percent() -> None:
    coverage = Coverage.from_resultset(resultset({"a.rb": {"lines": [0, 0]}}))
    assert coverage.percentage_for("a.rb").lines == 0.0


def test_unknown_file() -> None:
    coverage = Coverage.from_resultset(resultset({"a.rb": {"lines": [1]}}))
    assert "b.rb" not in coverage
    assert coverage.stats("b.rb") is None
    assert coverage.percentage_for("b.rb") == CoveragePercentages(None, None)


def test_merged_suites() -> None:
    coverage = Coverage.from_resultset(
        {
            "RSpec": {"coverage": {"a.rb": {"lines": [1, 0]}}},
            "Minitest": {"coverage": {"a.rb": {"lines": [0, 2]}}},
        }
    )
    assert coverage.percentage_for("a.rb").lines == 100.0


def test_filenames_keep_order() -> None:
    coverage = Coverage(
        {
            "z.rb": FileResult("z.rb", [1]),
            "a.rb": FileResult("a.rb", [0]),
        }
    )
    assert coverage.filenames == ("z.rb", "a.rb")
    assert list(coverage) == ["z.rb", "a.rb"]
    assert len(coverage) == 2


def test_repeated_lookup_is_stable() -> None:
    coverage = Coverage.from_resultset(resultset({"a.rb": {"lines": [1, 0, 1]}}))
    assert coverage.percentage_for("a.rb") == coverage.percentage_for("a.rb")


def test_file_stats() -> None:
    stats = FileStats.from_file_result(
        FileResult("a.rb", [None, 0, 4, 1], {("b1",): 0, ("b2",): 3})
    )
    assert stats.line == CoverageStat(covered=2, total=3)
    assert stats.branch == CoverageStat(covered=1, total=2)
    assert CoverageStat.new_empty().percent is None
