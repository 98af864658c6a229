"""
GitLab → Apple Reminders Sync

A polling tool that mirrors the open GitLab issues assigned to a user
as reminders in an Apple Reminders list on macOS.
"""

from .config import Config, ConfigError, load_config
from .models import GitLabIssue, SyncResult
from .gitlab_api import GitLabClient, GitLabAPIError, IssueDecodeError, IssueSourceError
from .apple_reminders import AppleReminders, ReminderError, ReminderScriptError
from .sync_engine import SyncEngine

__all__ = [
    "Config",
    "ConfigError",
    "load_config",
    "GitLabIssue",
    "SyncResult",
    "GitLabClient",
    "GitLabAPIError",
    "IssueDecodeError",
    "IssueSourceError",
    "AppleReminders",
    "ReminderError",
    "ReminderScriptError",
    "SyncEngine",
]

__version__ = "0.1.0"
