import pytest

from gitlab_reminders.config import Config


@pytest.fixture
def config() -> Config:
    return Config(
        gitlab_token="glpat-secret",
        gitlab_url="https://gitlab.example.com",
        gitlab_username="jdoe",
        reminder_list="GitLab",
        poll_interval_minutes=5,
    )
