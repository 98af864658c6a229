"""
Sync Engine

One-way sync of assigned GitLab issues into an Apple Reminders list.
Each pass fetches the open issues and creates a reminder for every issue
whose title is not already in the list; the list itself is the only record
of what has been synced.
"""

from datetime import datetime
from typing import Callable, Optional
import logging
import time

from .apple_reminders import AppleReminders, ReminderError
from .config import Config
from .gitlab_api import GitLabClient, IssueSourceError
from .models import SyncResult

logger = logging.getLogger(__name__)


class SyncEngine:
    """
    Fetch-then-create sync between GitLab and Apple Reminders.

    Passes are strictly sequential: one fetch, then one existence check
    and (if needed) one creation per issue, in API order.
    """

    def __init__(
        self,
        config: Config,
        gitlab: Optional[GitLabClient] = None,
        apple: Optional[AppleReminders] = None,
        dry_run: bool = False
    ):
        self.config = config
        self.gitlab = gitlab or GitLabClient(config)
        self.apple = apple or AppleReminders()
        self.dry_run = dry_run

    def run_once(self) -> SyncResult:
        """
        Execute one sync pass.

        A failed fetch aborts the pass before any reminder is touched.
        A failure on one issue is logged and the remaining issues are
        still processed.
        """
        result = SyncResult(started_at=datetime.now(), dry_run=self.dry_run)

        try:
            issues = self.gitlab.get_assigned_issues()
        except IssueSourceError as e:
            logger.error(f"Error fetching GitLab issues: {e}")
            result.fetch_error = str(e)
            result.completed_at = datetime.now()
            return result

        result.issues_found = len(issues)
        logger.info(f"Found {len(issues)} assigned issues")

        for issue in issues:
            try:
                created = self.apple.create_reminder(
                    issue, self.config.reminder_list, dry_run=self.dry_run
                )
            except ReminderError as e:
                logger.error(f"Error creating reminder for issue #{issue.iid}: {e}")
                result.errors.append(f"#{issue.iid}: {e}")
                continue

            if created:
                result.created += 1
            else:
                result.already_present += 1

        result.completed_at = datetime.now()
        logger.info(result.summary())
        return result

    def run_forever(
        self,
        max_passes: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ) -> int:
        """
        Run a pass now and then every poll interval until stopped.

        Ticks fall on a fixed grid from the start time. A tick that comes
        due while a pass is running is held and the next pass starts as
        soon as the current one ends; any further ticks missed during that
        pass are dropped.
        """
        interval = self.config.poll_interval_seconds
        next_tick = clock()
        passes = 0

        while True:
            try:
                self.run_once()
            except Exception:
                logger.exception("Unexpected error during sync pass")
            passes += 1

            if max_passes is not None and passes >= max_passes:
                return passes

            now = clock()
            next_tick += interval
            if next_tick <= now:
                # one pending tick, fired immediately
                while next_tick + interval <= now:
                    next_tick += interval
                continue
            sleep(next_tick - now)
