"""
Apple Reminders Interface

Drives Reminders.app with AppleScript run through osascript.

AppleScript has no parameterized queries, so values are interpolated into
the script text as double-quoted literals. escape_applescript_string()
escapes double quotes only; backslashes and other characters are passed
through unchanged.
"""

import logging
import subprocess
from typing import Optional

from .models import GitLabIssue
from . import config

logger = logging.getLogger(__name__)

EXISTS_SCRIPT = """
tell application "Reminders"
    set myList to list "{list_name}"
    set matchingReminders to (reminders of myList whose name is "{title}")
    if (count of matchingReminders) > 0 then
        return "true"
    else
        return "false"
    end if
end tell
"""

CREATE_SCRIPT = """
tell application "Reminders"
    tell list "{list_name}"
        make new reminder with properties {{name:"{title}", body:"{notes}"}}
    end tell
end tell
"""

LIST_LISTS_SCRIPT = """
tell application "Reminders"
    set AppleScript's text item delimiters to linefeed
    return (name of every list) as text
end tell
"""


class ReminderError(Exception):
    """Base class for Reminders automation failures."""


class ReminderScriptError(ReminderError):
    """Raised when osascript cannot be run or the script fails."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


def escape_applescript_string(value: str) -> str:
    """Escape a value for use inside an AppleScript string literal."""
    return value.replace('"', '\\"')


def build_exists_script(title: str, list_name: str) -> str:
    return EXISTS_SCRIPT.format(
        list_name=escape_applescript_string(list_name),
        title=escape_applescript_string(title),
    )


def build_create_script(title: str, notes: str, list_name: str) -> str:
    return CREATE_SCRIPT.format(
        list_name=escape_applescript_string(list_name),
        title=escape_applescript_string(title),
        notes=escape_applescript_string(notes),
    )


class AppleReminders:
    """
    Interface to Apple Reminders using AppleScript.

    Reminders are matched by exact name within one list. Nothing is ever
    updated or deleted.
    """

    def __init__(self, osascript_path: Optional[str] = None):
        self.osascript = osascript_path or config.OSASCRIPT_PATH

    def _run_osascript(self, script: str) -> str:
        """Run an AppleScript and return its output."""
        try:
            result = subprocess.run(
                [self.osascript, "-"],
                input=script,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ReminderScriptError(f"Cannot run {self.osascript}: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise ReminderScriptError(f"AppleScript failed: {stderr}", stderr=stderr)
        return result.stdout

    def list_lists(self) -> list[str]:
        """Get all reminder list names."""
        output = self._run_osascript(LIST_LISTS_SCRIPT)
        return [line.strip() for line in output.strip().split("\n") if line.strip()]

    def reminder_exists(self, title: str, list_name: str) -> bool:
        """Check whether a reminder with exactly this name is in the list."""
        output = self._run_osascript(build_exists_script(title, list_name))
        return output.strip().lower() == "true"

    def add_reminder(self, title: str, notes: str, list_name: str):
        """Create a new reminder in the list."""
        self._run_osascript(build_create_script(title, notes, list_name))

    def create_reminder(self, issue: GitLabIssue, list_name: str, dry_run: bool = False) -> bool:
        """
        Create the reminder for an issue unless one with its title exists.

        Returns:
            True if a reminder was created (or would be, in dry-run mode),
            False if it already existed

        Raises:
            ReminderError: if the existence check or the creation fails
        """
        title = issue.reminder_title
        notes = issue.reminder_notes

        if self.reminder_exists(title, list_name):
            logger.info(f"Reminder already exists for issue #{issue.iid}")
            return False

        if dry_run:
            logger.info(f"[DRY RUN] Would create reminder for issue #{issue.iid}: {issue.title}")
            return True

        self.add_reminder(title, notes, list_name)
        logger.info(f"Created reminder for issue #{issue.iid}: {issue.title}")
        return True
