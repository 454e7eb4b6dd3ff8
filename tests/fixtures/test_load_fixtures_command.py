"""
load_fixtures management command tests.

Tests verify:
- Loads tagged and configured fixtures, dependencies first
- --group filtering and the missing-dependency failure
- --append, confirmation prompt and --dry-run behavior
- Fixture errors surface as CommandError
"""

from io import StringIO
from unittest.mock import Mock

import pytest
from django.contrib.auth.models import Group, User
from django.core.management import call_command
from django.core.management.base import CommandError

from seedbed.fixtures.tagging import seed_fixture
from tests.helpers.seed_samples import (
    AdminUserFixture,
    PermissionGroupsFixture,
    StaffUsersFixture,
    StandaloneFixture,
)


@pytest.fixture
def tagged_samples():
    """Tag the sample graph the way an app's seed_fixtures module would."""
    seed_fixture(groups=["auth"])(PermissionGroupsFixture)
    seed_fixture(groups=["auth"])(AdminUserFixture)
    seed_fixture(StaffUsersFixture)
    seed_fixture(StandaloneFixture)


@pytest.fixture
def flush(monkeypatch):
    mock = Mock()
    monkeypatch.setattr("seedbed.fixtures.executor.flush_database", mock)
    return mock


def _run(*args, **kwargs):
    out = StringIO()
    call_command("load_fixtures", *args, stdout=out, **kwargs)
    return out.getvalue()


@pytest.mark.django_db
class TestLoadFixturesCommand:
    def test_loads_all_fixtures_in_dependency_order(self, tagged_samples, flush):
        output = _run("--append")

        lines = [line for line in output.splitlines() if "> loading" in line]
        assert [line.rsplit(".", 1)[-1] for line in lines] == [
            "PermissionGroupsFixture",
            "AdminUserFixture",
            "StaffUsersFixture",
            "StandaloneFixture",
        ]
        assert "Loaded 4 fixture(s)" in output
        assert User.objects.filter(username="admin").exists()
        flush.assert_not_called()

    def test_group_filter(self, tagged_samples, flush):
        output = _run("--append", "--group", "auth")

        assert "Loaded 2 fixture(s)" in output
        assert set(Group.objects.values_list("name", flat=True)) == {"editors", "viewers"}
        assert not User.objects.filter(is_staff=True).exists()

    def test_missing_dependency_in_groups_raises_command_error(self, tagged_samples, flush):
        with pytest.raises(CommandError, match="was declared as a dependency"):
            _run("--append", "--group", "users")

        assert not User.objects.exists()

    def test_no_fixtures_registered(self, flush):
        with pytest.raises(CommandError, match="Could not find any fixtures to load$"):
            _run("--append")

    def test_no_fixtures_in_groups(self, tagged_samples, flush):
        with pytest.raises(CommandError, match=r"in the groups \(nope, other\)"):
            _run("--append", "--group", "nope", "--group", "other")

    def test_purges_without_append(self, tagged_samples, flush):
        output = _run("--group", "StandaloneFixture", interactive=False)

        flush.assert_called_once_with("default")
        assert "purging database 'default'" in output
        assert Group.objects.filter(name="standalone").exists()

    def test_declined_confirmation_loads_nothing(self, tagged_samples, flush, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        output = _run("--group", "StandaloneFixture")

        assert "Load cancelled." in output
        flush.assert_not_called()
        assert not Group.objects.exists()

    def test_dry_run_lists_without_loading(self, tagged_samples, flush):
        output = _run("--dry-run", "--group", "auth")

        assert "Would load 2 fixture(s)" in output
        assert "tests.helpers.seed_samples.AdminUserFixture" in output
        assert not Group.objects.exists()
        flush.assert_not_called()

    def test_configured_fixture_paths(self, settings, flush):
        settings.SEEDBED = {
            "FIXTURES": [
                {"class": "tests.helpers.seed_samples.StandaloneFixture", "groups": ["demo"]},
            ],
            "AUTODISCOVER": False,
        }

        output = _run("--append", "--group", "demo")

        assert "Loaded 1 fixture(s)" in output
        assert Group.objects.filter(name="standalone").exists()

    def test_unregistered_dependency_raises_command_error(self, flush):
        seed_fixture(AdminUserFixture)

        with pytest.raises(CommandError, match="is trying to be loaded, but is not available"):
            _run("--append")

    def test_invalid_settings_raise_command_error(self, settings, flush):
        settings.SEEDBED = {"FIXTURES": [], "UNKNOWN": True}

        with pytest.raises(CommandError, match="Invalid SEEDBED setting"):
            _run("--append")
