import json
import logging

import pytest

from gitlab_reminders import main as cli
from gitlab_reminders.models import SyncResult


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("GITLAB_TOKEN", raising=False)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "gitlab_token": "t",
        "gitlab_url": "https://gitlab.example.com",
        "gitlab_username": "jdoe",
        "reminder_list": "GitLab",
        "poll_interval_minutes": 1,
    }))
    return path


@pytest.fixture
def no_list_check(monkeypatch):
    monkeypatch.setattr(cli, "check_reminder_list", lambda apple, name: None)


def test_parser_accepts_single_dash_config_flag():
    args = cli.build_parser().parse_args(["-config", "other.json"])

    assert args.config == "other.json"
    assert cli.build_parser().parse_args([]).config == "config.json"


def test_config_load_failure_exits_nonzero(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        status = cli.main(["-config", str(tmp_path / "missing.json")])

    assert status == 1
    assert "Error loading configuration" in caplog.text


def test_once_runs_single_pass(config_file, monkeypatch, no_list_check):
    seen = {}

    def fake_run_once(self):
        seen["dry_run"] = self.dry_run
        seen["list"] = self.config.reminder_list
        return SyncResult(started_at=None)

    monkeypatch.setattr(cli.SyncEngine, "run_once", fake_run_once)

    assert cli.main(["-config", str(config_file), "--once", "--dry-run"]) == 0
    assert seen == {"dry_run": True, "list": "GitLab"}


def test_once_reports_failed_pass(config_file, monkeypatch, no_list_check):
    monkeypatch.setattr(
        cli.SyncEngine, "run_once",
        lambda self: SyncResult(started_at=None, fetch_error="boom"),
    )

    assert cli.main(["--config", str(config_file), "--once"]) == 1


def test_keyboard_interrupt_stops_cleanly(config_file, monkeypatch, no_list_check):
    def interrupted(self, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli.SyncEngine, "run_forever", interrupted)

    assert cli.main(["-config", str(config_file)]) == 0


def test_check_reminder_list_warns_when_missing(caplog):
    class _Apple:
        def list_lists(self):
            return ["Reminders"]

    with caplog.at_level(logging.WARNING):
        cli.check_reminder_list(_Apple(), "GitLab")

    assert "Reminder list 'GitLab' does not exist" in caplog.text
