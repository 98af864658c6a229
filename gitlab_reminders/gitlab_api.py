"""
GitLab Issues Interface

Fetches the open issues assigned to a user from the GitLab REST API (v4).

Only the first page of results is read: GitLab's default page size is 20,
so larger backlogs are truncated and a warning is logged.
"""

import logging
from typing import Optional

import requests

from .config import Config
from .models import GitLabIssue

logger = logging.getLogger(__name__)

ISSUES_PATH = "/api/v4/issues"
HTTP_OK = 200


class IssueSourceError(Exception):
    """Base class for failures to obtain the issue list."""


class GitLabAPIError(IssueSourceError):
    """Raised on transport failures and non-200 responses."""

    def __init__(self, message: str, *, status: Optional[int] = None, response_text: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.response_text = response_text


class IssueDecodeError(IssueSourceError):
    """Raised when the response body is not a valid array of issues."""


class GitLabClient:
    """
    Minimal client for the one GitLab endpoint this tool uses.

    Authentication is a static PRIVATE-TOKEN header; there is no token
    refresh, retry or pagination.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def issues_url(self) -> str:
        return f"{self.config.gitlab_url}{ISSUES_PATH}"

    def get_assigned_issues(self) -> list[GitLabIssue]:
        """
        Get open issues assigned to the configured user.

        Raises:
            GitLabAPIError: on transport failure or any status other than 200
            IssueDecodeError: if the body is not a JSON array of issues
        """
        params = {
            "assignee_username": self.config.gitlab_username,
            "state": "opened",
        }
        headers = {"PRIVATE-TOKEN": self.config.gitlab_token}

        try:
            response = self.session.get(self.issues_url, params=params, headers=headers)
        except requests.RequestException as e:
            raise GitLabAPIError(f"API request failed: {e}") from e

        if response.status_code != HTTP_OK:
            raise GitLabAPIError(
                f"API request failed with status: {response.status_code} {response.reason}",
                status=response.status_code,
                response_text=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise IssueDecodeError(f"Response body is not valid JSON: {e}") from e

        if not isinstance(payload, list):
            raise IssueDecodeError(
                f"Expected a JSON array of issues, got {type(payload).__name__}"
            )

        try:
            issues = [GitLabIssue.from_dict(item) for item in payload]
        except (TypeError, ValueError) as e:
            raise IssueDecodeError(f"Malformed issue in response: {e}") from e

        next_page = response.headers.get("X-Next-Page")
        if next_page:
            logger.warning(
                f"More assigned issues are available (next page {next_page}); "
                f"only the first {len(issues)} are synced"
            )

        return issues
