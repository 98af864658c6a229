"""
Data Models for GitLab-Apple Reminders Sync

Defines the GitLabIssue model, the reminder text derived from it,
and the per-pass SyncResult summary.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


def _parse_timestamp(value) -> Optional[datetime]:
    """Parse an RFC3339 timestamp as returned by the GitLab API."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Expected timestamp string, got {type(value).__name__}")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_due_date(value) -> Optional[date]:
    """Parse a YYYY-MM-DD due date; GitLab sends null or "" when unset."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"Expected due date string, got {type(value).__name__}")
    return date.fromisoformat(value)


def _require_int(data: dict, key: str, default: Optional[int] = None) -> int:
    value = data.get(key)
    if value is None and default is not None:
        return default
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Field '{key}' must be an integer, got {value!r}")
    return value


def _optional_str(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass
class GitLabIssue:
    """
    An issue as returned by GET /api/v4/issues.

    Read-only to this system. `iid` is the project-local number shown to
    users (#42); `id` is GitLab's global identifier and never appears in
    reminders.
    """
    id: int
    iid: int
    title: str
    project_id: int = 0
    description: str = ""
    state: str = "opened"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    due_date: Optional[date] = None
    web_url: str = ""
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "GitLabIssue":
        """
        Create from one issue object of the API response.

        Raises:
            TypeError: if the object or one of its fields has the wrong type
            ValueError: if a required field is missing or a date is malformed
        """
        if not isinstance(data, dict):
            raise TypeError(f"Issue must be a JSON object, got {type(data).__name__}")
        for key in ("id", "iid", "title"):
            if key not in data:
                raise ValueError(f"Issue is missing required field '{key}'")

        labels = data.get("labels")
        if labels is None:
            labels = []
        if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
            raise TypeError("Field 'labels' must be a list of strings")

        return cls(
            id=_require_int(data, "id"),
            iid=_require_int(data, "iid"),
            title=_optional_str(data, "title"),
            project_id=_require_int(data, "project_id", 0),
            description=_optional_str(data, "description"),
            state=_optional_str(data, "state") or "opened",
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
            due_date=_parse_due_date(data.get("due_date")),
            web_url=_optional_str(data, "web_url"),
            labels=list(labels),
        )

    @property
    def reminder_title(self) -> str:
        """Title of the mirrored reminder, also its de-duplication key."""
        return f"#{self.iid}: {self.title}"

    @property
    def reminder_notes(self) -> str:
        """Body of the mirrored reminder."""
        return f"{self.description}\n\nURL: {self.web_url}"


@dataclass
class SyncResult:
    """Summary of one sync pass."""
    started_at: datetime
    completed_at: Optional[datetime] = None
    issues_found: int = 0
    created: int = 0
    already_present: int = 0
    fetch_error: Optional[str] = None
    errors: list = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.fetch_error is None and not self.errors

    def summary(self) -> str:
        """Generate a human-readable summary."""
        if self.fetch_error is not None:
            return f"Sync aborted: {self.fetch_error}"
        verb = "would be created" if self.dry_run else "created"
        line = (
            f"Sync completed: {self.issues_found} issues, "
            f"{self.created} {verb}, {self.already_present} already present"
        )
        if self.errors:
            line += f", {len(self.errors)} errors"
        return line
