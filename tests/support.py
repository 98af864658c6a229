"""Shared fakes and payload builders for the test suite."""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from gitlab_reminders.apple_reminders import AppleReminders, ReminderScriptError


def issue_payload(number: int, title: str, /, **overrides: Any) -> dict[str, Any]:
    data = {
        "id": 1000 + number,
        "iid": number,
        "project_id": 7,
        "title": title,
        "description": f"Details for {title}",
        "state": "opened",
        "created_at": "2024-03-01T09:30:00.000Z",
        "updated_at": "2024-03-02T10:00:00.000Z",
        "due_date": None,
        "web_url": f"https://gitlab.example.com/acme/app/-/issues/{number}",
        "labels": ["bug"],
    }
    data.update(overrides)
    return data


@dataclass
class DummyResponse:
    status_code: int
    payload: Any
    reason: str = "OK"
    headers: dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        if isinstance(self.payload, str):
            return json.loads(self.payload)
        return self.payload

    @property
    def text(self) -> str:
        if isinstance(self.payload, str):
            return self.payload
        return json.dumps(self.payload)


class DummySession:
    def __init__(self, responses: list[Any]):
        self._responses = responses
        self.request_log: list[tuple[str, dict[str, Any], dict[str, str]]] = []

    def get(self, url: str, *, params: Optional[dict[str, Any]] = None, headers: Optional[dict[str, str]] = None):
        self.request_log.append((url, dict(params or {}), dict(headers or {})))
        if not self._responses:
            raise AssertionError("No response queued for request")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class InMemoryReminders(AppleReminders):
    """AppleReminders backed by a dict of list name -> reminders."""

    def __init__(self, lists: Optional[dict[str, list[tuple[str, str]]]] = None, fail_titles=()):
        super().__init__(osascript_path="/nonexistent/osascript")
        self.lists = lists if lists is not None else {"GitLab": []}
        self.fail_titles = set(fail_titles)
        self.calls: list[tuple[str, str]] = []

    def list_lists(self) -> list[str]:
        return list(self.lists)

    def _get_list(self, list_name: str):
        if list_name not in self.lists:
            raise ReminderScriptError(f"Can't get list \"{list_name}\".")
        return self.lists[list_name]

    def reminder_exists(self, title: str, list_name: str) -> bool:
        self.calls.append(("exists", title))
        return any(name == title for name, _ in self._get_list(list_name))

    def add_reminder(self, title: str, notes: str, list_name: str):
        self.calls.append(("create", title))
        if title in self.fail_titles:
            raise ReminderScriptError("AppleScript failed: boom")
        self._get_list(list_name).append((title, notes))
