#!/usr/bin/env python3
"""
GitLab → Apple Reminders Sync CLI

Loads the configuration, then polls GitLab and mirrors assigned issues
into Apple Reminders until the process is stopped.
"""

import argparse
import logging
import sys

from .apple_reminders import AppleReminders, ReminderError
from .config import DEFAULT_CONFIG_PATH, ConfigError, load_config
from .sync_engine import SyncEngine
from . import config as settings

logger = logging.getLogger(__name__)


def setup_logging():
    """Configure root logging for the process."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s"
    )


def check_reminder_list(apple: AppleReminders, list_name: str):
    """Warn early if the target list is missing; each issue would fail otherwise."""
    try:
        lists = apple.list_lists()
    except ReminderError as e:
        logger.warning(f"Could not read reminder lists: {e}")
        return
    if list_name not in lists:
        logger.warning(
            f"Reminder list '{list_name}' does not exist; "
            "reminders cannot be created until it is added"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mirror GitLab issues assigned to you into Apple Reminders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Poll forever using ./config.json
  python -m gitlab_reminders

  # Use another config file
  python -m gitlab_reminders -config ~/.config/gitlab-reminders.json

  # Preview a single pass without creating reminders
  python -m gitlab_reminders --once --dry-run
"""
    )
    parser.add_argument(
        "-config", "--config",
        dest="config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file (default: %(default)s)"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single sync pass and exit"
    )
    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Check for existing reminders but do not create any"
    )
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Error loading configuration: {e}")
        return 1

    logger.info("Starting GitLab to Apple Reminders integration")
    logger.info(f"Monitoring issues assigned to: {config.gitlab_username}")
    logger.info(f"Creating reminders in list: {config.reminder_list}")
    if args.dry_run:
        logger.info("=== DRY RUN MODE ===")

    apple = AppleReminders()
    check_reminder_list(apple, config.reminder_list)
    engine = SyncEngine(config, apple=apple, dry_run=args.dry_run)

    if args.once:
        result = engine.run_once()
        return 0 if result.ok else 1

    try:
        engine.run_forever()
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
