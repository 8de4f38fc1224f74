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
from typing import Any, Callable
from unittest import mock

import pytest
import requests

from simplecov_diff.exceptions import PublicationError
from simplecov_diff.github import (
    GitHubAPI,
    GitHubContext,
    publish_report,
    resolve_commit_sha,
)


def test_context_from_environment(write_json: Callable[[str, Any], str]) -> None:
    event_path = write_json(
        "event.json", {"action": "synchronize", "after": "abc", "number": 12}
    )
    context = GitHubContext.from_environment(
        {
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_SHA": "merge-sha",
            "GITHUB_REPOSITORY": "octo/app",
            "GITHUB_EVENT_PATH": event_path,
        }
    )
    assert context.event_name == "pull_request"
    assert context.owner == "octo"
    assert context.repo == "app"
    assert context.issue_number == 12
    assert context.payload["after"] == "abc"


def test_context_without_event_file() -> None:
    context = GitHubContext.from_environment({"GITHUB_EVENT_PATH": "missing.json"})
    assert context.payload == {}
    assert context.issue_number is None


@pytest.mark.parametrize("payload", [[], "pull_request", 42, None])
def test_context_with_event_payload_not_an_object(
    payload: Any,
    write_json: Callable[[str, Any], str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    event_path = write_json("event.json", payload)
    context = GitHubContext.from_environment({"GITHUB_EVENT_PATH": event_path})

    assert context.payload == {}
    assert context.issue_number is None
    [message] = [m for _, level, m in caplog.record_tuples if level == logging.WARNING]
    assert message.startswith(f"Ignoring invalid event payload {event_path}: ")


@pytest.mark.parametrize("content", [b"{not json", b'{"number": "\xff"}'])
def test_context_with_invalid_event_file(
    content: bytes, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    event_path = tmp_path / "event.json"
    event_path.write_bytes(content)
    context = GitHubContext.from_environment({"GITHUB_EVENT_PATH": str(event_path)})

    assert context.payload == {}
    assert context.issue_number is None
    assert "Ignoring invalid event payload" in caplog.text


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"issue": {"number": 3}}, 3),
        ({"pull_request": {"number": 4}, "number": 4}, 4),
        ({"number": 5}, 5),
        ({"after": "abc"}, None),
        ({"number": 0}, None),
    ],
)
def test_issue_number(payload: dict[str, Any], expected: Any) -> None:
    assert GitHubContext(payload=payload).issue_number == expected


def test_commit_sha_of_push() -> None:
    context = GitHubContext(event_name="push", sha="run-sha", payload={"after": "pushed"})
    assert resolve_commit_sha(context) == "pushed"


def test_commit_sha_of_synchronize() -> None:
    context = GitHubContext(
        event_name="pull_request",
        sha="merge-sha",
        payload={"action": "synchronize", "after": "head-sha"},
    )
    assert resolve_commit_sha(context) == "head-sha"


def test_commit_sha_of_unsupported_event(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    context = GitHubContext(
        event_name="pull_request",
        sha="merge-sha",
        payload={"action": "opened", "after": "head-sha"},
    )
    assert resolve_commit_sha(context) == "merge-sha"
    assert "Unsupported event" in caplog.messages
    assert "eventName: pull_request" in caplog.messages


@mock.patch("simplecov_diff.github.requests.post")
def test_create_comment(post: mock.MagicMock) -> None:
    post.return_value.json.return_value = {"html_url": "https://github.com/c/1"}

    api = GitHubAPI("secret", "https://ghe.example/api/v3/")
    result = api.create_comment("octo", "app", 7, "body")

    assert result == {"html_url": "https://github.com/c/1"}
    post.assert_called_once()
    args, kwargs = post.call_args
    assert args == ("https://ghe.example/api/v3/repos/octo/app/issues/7/comments",)
    assert kwargs["json"] == {"body": "body"}
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] > 0


@mock.patch("simplecov_diff.github.requests.post")
def test_create_comment_failure(post: mock.MagicMock) -> None:
    post.return_value.raise_for_status.side_effect = requests.HTTPError(
        "401 Client Error: Unauthorized"
    )

    with pytest.raises(PublicationError, match="401 Client Error"):
        GitHubAPI("wrong").create_comment("octo", "app", 7, "body")


@mock.patch("simplecov_diff.github.GitHubAPI")
def test_publish_without_pull_request(
    api: mock.MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)
    context = GitHubContext(event_name="push", payload={"after": "abc"})

    assert publish_report("## Report", context, "token", "https://api") is False
    api.assert_not_called()
    assert ("simplecov_diff", logging.WARNING, "Cannot find the PR id.") in (
        caplog.record_tuples
    )
    assert "## Report" in caplog.messages


@mock.patch("simplecov_diff.github.GitHubAPI")
def test_publish_to_pull_request(api: mock.MagicMock) -> None:
    context = GitHubContext(
        event_name="pull_request", repository="octo/app", payload={"number": 9}
    )

    assert publish_report("## Report", context, "token", "https://api") is True
    api.assert_called_once_with("token", "https://api")
    api.return_value.create_comment.assert_called_once_with(
        "octo", "app", 9, "## Report"
    )
