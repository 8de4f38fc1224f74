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
import math
from typing import Optional

from jinja2 import (
    Environment,
    PackageLoader,
)

from ...diff import CoverageDelta, FileCoverageDiff
from ...options import Options
from ...utils import open_text_for_writing

LOGGER = logging.getLogger("simplecov_diff")

HEADER = ("Filename", "Lines", "Branches")
NO_DIFFERENCES = "No differences"
MIN_COLUMN_WIDTH = 3


def templates() -> Environment:
    """Get the template environment."""
    loader: PackageLoader = PackageLoader(
        "simplecov_diff.formats.markdown",
        package_path="default",
    )

    return Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_report(
    diff: list[FileCoverageDiff], commit_sha: str, options: Options
) -> str:
    """Produce the comment body for the coverage diff."""
    data = {
        "title": options.markdown_title,
        "content": render_content(diff, options.root, options.badge_url),
        "commit_sha": commit_sha,
    }

    return templates().get_template("report_template.md.j2").render(**data)


def write_report(report: str, output_file: str) -> None:
    """Write the rendered report."""
    with open_text_for_writing(output_file, "coverage-diff.md", encoding="UTF-8") as fh:
        fh.write(report)


def render_content(
    diff: list[FileCoverageDiff], workspace: Optional[str], badge_base_url: str
) -> str:
    """Render the table of the diff or a notice if there are no files."""
    if not diff:
        return NO_DIFFERENCES

    return markdown_table(
        [HEADER, *(format_diff(d, workspace, badge_base_url) for d in diff)]
    )


def trunc_percentage(value: float) -> float:
    """Truncate to one decimal, towards zero.

    >>> trunc_percentage(66.666)
    66.6
    >>> trunc_percentage(-2.56)
    -2.5
    >>> trunc_percentage(-0.05)
    0.0
    """
    truncated = math.floor(abs(value) * 10) / 10
    return -truncated if value < 0 and truncated else truncated


def format_number(value: float) -> str:
    """Print a number without a trailing ``.0``.

    >>> format_number(100.0)
    '100'
    >>> format_number(-2.5)
    '-2.5'
    """
    if value.is_integer():
        return str(int(value))
    return str(value)


def badge_url(from_: float, to: float, base_url: str) -> str:
    """Get the URL of the badge showing the direction and size of a change.

    >>> badge_url(50.0, 52.35, "https://badges")
    'https://badges/up/2/2.3.svg'
    >>> badge_url(50.0, 39.0, "https://badges")
    'https://badges/down/11/11.0.svg'
    >>> badge_url(50.0, 50.04, "https://badges")
    'https://badges/0.svg'
    """
    tenths = math.floor(abs(to - from_) * 10)
    if tenths == 0:
        return f"{base_url}/0.svg"

    direction = "down" if to < from_ else "up"
    whole, fraction = divmod(tenths, 10)
    return f"{base_url}/{direction}/{whole}/{whole}.{fraction}.svg"


def format_diff_item(delta: CoverageDelta, badge_base_url: str) -> str:
    """Format one metric of a file.

    >>> format_diff_item(CoverageDelta(None, 80.0), "https://badges")
    'NEW 80%'
    >>> format_diff_item(CoverageDelta(80.0, None), "https://badges")
    'DELETE'
    >>> format_diff_item(CoverageDelta(None, None), "https://badges")
    ''
    """
    text = ""
    if delta.from_ is None and delta.to is not None:
        text += "NEW"
    if delta.from_ is not None and delta.to is None:
        text += "DELETE"
    if delta.to is not None:
        text += f" {format_number(trunc_percentage(delta.to))}%"
    if delta.from_ is not None and delta.to is not None:
        change = format_number(trunc_percentage(delta.to - delta.from_))
        text += f" ![{change}%]({badge_url(delta.from_, delta.to, badge_base_url)})"
    return text


def trim_workspace_path(filename: str, workspace: Optional[str]) -> str:
    """Remove the workspace directory from the file name.

    >>> trim_workspace_path("/home/runner/work/app/lib/a.rb", "/home/runner/work/app")
    'lib/a.rb'
    >>> trim_workspace_path("/opt/gems/b.rb", "/home/runner/work/app")
    '/opt/gems/b.rb'
    """
    if workspace:
        prefix = f"{workspace.rstrip('/')}/"
        if filename.startswith(prefix):
            return filename[len(prefix) :]
    return filename


def format_diff(
    diff: FileCoverageDiff, workspace: Optional[str], badge_base_url: str
) -> tuple[str, str, str]:
    """Get the table row of a file."""
    return (
        trim_workspace_path(diff.filename, workspace),
        format_diff_item(diff.lines, badge_base_url),
        format_diff_item(diff.branches, badge_base_url),
    )


def markdown_table(rows: list[tuple[str, ...]]) -> str:
    """Render rows as a table, the first row is the header.

    >>> print(markdown_table([("a", "bb"), ("cccc", "")]))
    | a    | bb  |
    | ---- | --- |
    | cccc |     |
    """
    widths = [
        max(MIN_COLUMN_WIDTH, *(len(row[column]) for row in rows))
        for column in range(len(rows[0]))
    ]

    def line(cells: tuple[str, ...]) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(cells, widths)) + " |"

    header, *body = rows
    lines = [line(header), line(tuple("-" * w for w in widths))]
    lines.extend(line(row) for row in body)
    return "\n".join(lines)
