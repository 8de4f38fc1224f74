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

"""GitHub Actions context of the run and publication of the report."""

from __future__ import annotations
from dataclasses import dataclass, field
import json
import logging
from typing import Any, Mapping, Optional

import requests

from .exceptions import PublicationError

LOGGER = logging.getLogger("simplecov_diff")

DEFAULT_API_URL = "https://api.github.com"
HTTP_TIMEOUT_SECONDS = 30


@dataclass
class GitHubContext:
    """The parts of the workflow context needed to publish a report."""

    event_name: str = ""
    """Name of the event which triggered the workflow, e.g. ``push``."""

    sha: str = ""
    """Commit SHA of the workflow run."""

    repository: str = ""
    """The ``owner/repo`` of the workflow run."""

    payload: dict[str, Any] = field(default_factory=dict)
    """The webhook payload of the event."""

    @classmethod
    def from_environment(cls, environ: Mapping[str, str]) -> GitHubContext:
        """Collect the context from the environment of a workflow step."""
        payload: dict[str, Any] = {}
        if event_path := environ.get("GITHUB_EVENT_PATH"):
            try:
                with open(event_path, encoding="UTF-8") as fh_in:
                    payload = json.load(fh_in)
            except FileNotFoundError:
                LOGGER.debug(f"Event payload {event_path} does not exist.")
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                LOGGER.warning(f"Ignoring invalid event payload {event_path}: {e}")

            if not isinstance(payload, dict):
                LOGGER.warning(
                    f"Ignoring invalid event payload {event_path}: "
                    f"expected an object, got {type(payload).__name__}."
                )
                payload = {}

        return cls(
            event_name=environ.get("GITHUB_EVENT_NAME", ""),
            sha=environ.get("GITHUB_SHA", ""),
            repository=environ.get("GITHUB_REPOSITORY", ""),
            payload=payload,
        )

    @property
    def owner(self) -> str:
        """The owner of the repository."""
        return self.repository.partition("/")[0]

    @property
    def repo(self) -> str:
        """The name of the repository."""
        return self.repository.partition("/")[2]

    @property
    def issue_number(self) -> Optional[int]:
        """The number of the issue or pull request, None if there is none.

        >>> GitHubContext(payload={"pull_request": {"number": 7}}).issue_number
        7
        >>> GitHubContext(payload={"after": "abc"}).issue_number is None
        True
        """
        for key in ("issue", "pull_request"):
            if isinstance(item := self.payload.get(key), dict):
                number = item.get("number")
                break
        else:
            number = self.payload.get("number")

        if isinstance(number, int) and not isinstance(number, bool) and number:
            return number
        return None


def resolve_commit_sha(context: GitHubContext) -> str:
    """Get the commit the report belongs to.

    For pushes and synchronized pull requests it is the head of the pushed
    commits, for all other events the commit of the workflow run.
    """
    if context.event_name == "push":
        LOGGER.info("Pull sha from push event")
        return str(context.payload.get("after") or context.sha)

    if (
        context.event_name == "pull_request"
        and context.payload.get("action") == "synchronize"
    ):
        LOGGER.info("Pull sha from pull request synchronize event")
        return str(context.payload.get("after") or context.sha)

    LOGGER.info("Unsupported event")
    LOGGER.info(f"eventName: {context.event_name}")
    LOGGER.info(json.dumps(context.payload))
    return context.sha


class GitHubAPI:
    """Client for the GitHub REST API."""

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL) -> None:
        self._api_url = api_url.rstrip("/")
        self._session_headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def create_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        """Create a new comment on an issue or pull request.

        Raises:
            PublicationError: If the API request fails.
        """
        url = f"{self._api_url}/repos/{owner}/{repo}/issues/{issue_number}/comments"
        LOGGER.debug(f"POST {url}")
        try:
            response = requests.post(
                url,
                json={"body": body},
                headers=self._session_headers,
                timeout=HTTP_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            result: dict[str, Any] = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise PublicationError(f"Creating the comment failed: {exc}") from exc

        return result


def publish_report(
    report: str, context: GitHubContext, token: str, api_url: str
) -> bool:
    """Post the report to the pull request of the context.

    Without a pull request the report is logged instead, the return value
    tells if a comment was created.
    """
    issue_number = context.issue_number
    if issue_number is None:
        LOGGER.warning("Cannot find the PR id.")
        LOGGER.info(report)
        return False

    LOGGER.info(
        f"Posting coverage difference to PR #{issue_number} in {context.repository}"
    )
    result = GitHubAPI(token, api_url).create_comment(
        context.owner, context.repo, issue_number, report
    )
    LOGGER.info(f"Successfully posted comment: {result.get('html_url', '')}")
    return True
