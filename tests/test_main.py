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
from pathlib import Path
from typing import Any, Callable, Optional
from unittest import mock

import pytest

from simplecov_diff.__main__ import (
    EXIT_PUBLISH_ERROR,
    EXIT_READ_ERROR,
    EXIT_SUCCESS,
    EXIT_WRITE_ERROR,
    main,
)
from simplecov_diff.exceptions import PublicationError

WORKSPACE = "/home/runner/work/app/app"

BASE = {
    "RSpec": {
        "coverage": {
            f"{WORKSPACE}/lib/a.rb": {
                "lines": [1, 0, None, 1],
                "branches": {"b1": 1, "b2": 0},
            },
            f"{WORKSPACE}/lib/old.rb": {"lines": [0, 1]},
        },
        "timestamp": 1700000000,
    }
}

HEAD = {
    "RSpec": {
        "coverage": {
            f"{WORKSPACE}/lib/a.rb": {
                "lines": [1, 1, None, 1],
                "branches": {"b1": 1, "b2": 1},
            },
            f"{WORKSPACE}/lib/new.rb": {"lines": [1, None]},
        },
        "timestamp": 1700000100,
    }
}


@pytest.fixture
def resultsets(write_json: Callable[[str, Any], str]) -> list[str]:
    return [
        "-b",
        write_json("base/.resultset.json", BASE),
        "-H",
        write_json("head/.resultset.json", HEAD),
        "-r",
        WORKSPACE,
        "--token",
        "secret",
    ]


@pytest.fixture
def pull_request(
    monkeypatch: pytest.MonkeyPatch, write_json: Callable[[str, Any], str]
) -> None:
    event_path = write_json(
        "event.json",
        {"action": "synchronize", "after": "feedbeef", "number": 42},
    )
    monkeypatch.setenv("GITHUB_EVENT_NAME", "pull_request")
    monkeypatch.setenv("GITHUB_SHA", "merge-sha")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/app")
    monkeypatch.setenv("GITHUB_EVENT_PATH", event_path)


def messages(caplog: pytest.LogCaptureFixture, level: int) -> list[str]:
    return [message for _, lvl, message in caplog.record_tuples if lvl == level]


def report_of(caplog: pytest.LogCaptureFixture) -> Optional[str]:
    for message in messages(caplog, logging.INFO):
        if message.startswith("## Coverage difference"):
            return message
    return None


def test_report_without_pull_request(
    caplog: pytest.LogCaptureFixture, resultsets: list[str]
) -> None:
    caplog.set_level(logging.INFO)
    assert main(resultsets) == EXIT_SUCCESS

    assert messages(caplog, logging.WARNING) == ["Cannot find the PR id."]
    report = report_of(caplog)
    assert report is not None
    lines = report.splitlines()
    assert lines[0] == "## Coverage difference"
    assert lines[1].split("|")[1].strip() == "Filename"
    # head files first, then the deleted ones
    assert [row.split("|")[1].strip() for row in lines[3:6]] == [
        "lib/a.rb",
        "lib/new.rb",
        "lib/old.rb",
    ]
    assert lines[-1] == "_Commit _"


def test_report_content(
    capsys: pytest.CaptureFixture[str], resultsets: list[str]
) -> None:
    assert main([*resultsets, "--output", "-"]) == EXIT_SUCCESS

    out = capsys.readouterr().out
    rows = {
        cells[0]: cells[1:]
        for cells in (
            [cell.strip() for cell in line.split("|")[1:-1]]
            for line in out.splitlines()
            if line.startswith("|")
        )
    }
    badges = "https://raw.githubusercontent.com/kzkn/simplecov-resultset-diff-action/main/assets"
    assert rows["lib/a.rb"] == [
        f"100% ![33.3%]({badges}/up/33/33.3.svg)",
        f"100% ![50%]({badges}/up/50/50.0.svg)",
    ]
    assert rows["lib/new.rb"] == ["NEW 100%", ""]
    assert rows["lib/old.rb"] == ["DELETE", ""]


def test_identical_resultsets(
    capsys: pytest.CaptureFixture[str], write_json: Callable[[str, Any], str]
) -> None:
    resultset = write_json("coverage/.resultset.json", HEAD)
    args = ["-b", resultset, "-H", resultset, "-r", WORKSPACE, "--token", "t"]
    assert main([*args, "--output", "-", "--badge-url", "https://badges/"]) == 0

    out = capsys.readouterr().out
    assert " 100% ![0%](https://badges/0.svg)" in out
    assert "/up/" not in out
    assert "lib/new.rb" in out


def test_empty_resultsets(
    capsys: pytest.CaptureFixture[str], write_json: Callable[[str, Any], str]
) -> None:
    resultset = write_json(".resultset.json", {})
    args = ["-b", resultset, "-H", resultset, "--token", "t", "-o", "-"]
    assert main(args) == EXIT_SUCCESS
    assert capsys.readouterr().out == (
        "## Coverage difference\nNo differences\n\n_Commit _\n"
    )


def test_report_to_file(resultsets: list[str], tmp_path: Path) -> None:
    (tmp_path / "out").mkdir()
    assert main([*resultsets, "--output", "out/"]) == EXIT_SUCCESS
    assert (tmp_path / "out" / "coverage-diff.md").read_text(
        encoding="utf-8"
    ).startswith("## Coverage difference\n")


def test_report_to_not_existing_directory(
    caplog: pytest.LogCaptureFixture, resultsets: list[str]
) -> None:
    assert main([*resultsets, "--output", "missing/report.md"]) == EXIT_WRITE_ERROR
    [message] = messages(caplog, logging.ERROR)
    assert message.startswith("Error occurred while writing the report: ")


def test_missing_head_resultset(
    caplog: pytest.LogCaptureFixture,
    write_json: Callable[[str, Any], str],
    tmp_path: Path,
) -> None:
    base = write_json("base.json", BASE)
    with mock.patch("simplecov_diff.formats.simplecov.read.read_report") as read:
        code = main(["-b", base, "-H", "head.json", "--token", "t"])
    assert code == EXIT_READ_ERROR
    read.assert_not_called()
    assert messages(caplog, logging.ERROR) == [
        f"{tmp_path / 'head.json'} does not exist!"
    ]


def test_invalid_json(
    caplog: pytest.LogCaptureFixture,
    write_json: Callable[[str, Any], str],
    tmp_path: Path,
) -> None:
    head = tmp_path / "head.json"
    head.write_text("{not json", encoding="utf-8")
    base = write_json("base.json", BASE)
    code = main(["-b", base, "-H", str(head), "--token", "t"])
    assert code == EXIT_READ_ERROR
    [message] = messages(caplog, logging.ERROR)
    assert message.startswith(f"{head}: not a valid JSON document: ")


def test_invalid_resultset(
    caplog: pytest.LogCaptureFixture, write_json: Callable[[str, Any], str]
) -> None:
    base = write_json("base.json", {"RSpec": {"coverage": {"a.rb": {"lines": 3}}}})
    head = write_json("head.json", HEAD)
    code = main(["-b", base, "-H", head, "--token", "t"])
    assert code == EXIT_READ_ERROR
    [message] = messages(caplog, logging.ERROR)
    assert message.startswith(f"{base}: ")


@mock.patch("simplecov_diff.github.requests.post")
@pytest.mark.usefixtures("pull_request")
def test_publish_comment(post: mock.MagicMock, resultsets: list[str]) -> None:
    post.return_value.json.return_value = {"html_url": "https://github.com/c/1"}

    assert main(resultsets) == EXIT_SUCCESS

    post.assert_called_once()
    args, kwargs = post.call_args
    assert args == ("https://api.github.com/repos/octo/app/issues/42/comments",)
    body = kwargs["json"]["body"]
    assert body.startswith("## Coverage difference\n")
    assert body.endswith("\n\n_Commit feedbeef_\n")
    assert kwargs["headers"]["Authorization"] == "Bearer secret"


@mock.patch("simplecov_diff.github.requests.post")
@pytest.mark.usefixtures("pull_request")
def test_publish_to_enterprise_server(
    post: mock.MagicMock, resultsets: list[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example/api/v3")

    assert main(resultsets) == EXIT_SUCCESS
    assert post.call_args[0] == (
        "https://ghe.example/api/v3/repos/octo/app/issues/42/comments",
    )


@mock.patch("simplecov_diff.github.GitHubAPI.create_comment")
@pytest.mark.usefixtures("pull_request")
def test_publish_error(
    create_comment: mock.MagicMock,
    caplog: pytest.LogCaptureFixture,
    resultsets: list[str],
) -> None:
    create_comment.side_effect = PublicationError(
        "Creating the comment failed: 403 Client Error: Forbidden"
    )

    assert main(resultsets) == EXIT_PUBLISH_ERROR
    assert messages(caplog, logging.ERROR) == [
        "Creating the comment failed: 403 Client Error: Forbidden"
    ]
