"""
Management command to load seed fixtures.

Usage:
    python manage.py load_fixtures
    python manage.py load_fixtures --group users --group catalog
    python manage.py load_fixtures --append
    python manage.py load_fixtures --dry-run

Failure Behavior:
- Unregistered dependencies, dependencies filtered out by --group, cycles and
  invalid SEEDBED settings raise CommandError before anything is written.
- An exception raised by a fixture rolls back the whole load and propagates.
"""

from __future__ import annotations

import logging

from django.core.management.base import BaseCommand, CommandError

from seedbed.fixtures.conf import get_fixture_settings
from seedbed.fixtures.exceptions import FixtureError
from seedbed.fixtures.executor import FixtureExecutor
from seedbed.fixtures.interfaces import fixture_identity
from seedbed.fixtures.run_context import create_load_run
from seedbed.fixtures.tagging import build_loader

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Load seed fixtures into the database, optionally filtered by group."""

    help = "Load seed fixtures (dependencies first), optionally only some groups"

    def add_arguments(self, parser):
        parser.add_argument(
            "--group",
            action="append",
            dest="groups",
            default=[],
            help="Only load fixtures that belong to this group (repeatable)",
        )
        parser.add_argument(
            "--append",
            action="store_true",
            help="Append the data instead of purging the database first",
        )
        parser.add_argument(
            "--database",
            type=str,
            default=None,
            help='Database alias to load into (default: SEEDBED["DATABASE"])',
        )
        parser.add_argument(
            "--no-input",
            "--noinput",
            action="store_false",
            dest="interactive",
            help="Do not ask for confirmation before purging",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the fixtures that would be loaded without loading them",
        )

    def handle(self, *args, **options):
        groups = options["groups"]
        append = options["append"]

        try:
            fixture_settings = get_fixture_settings()
            using = options["database"] or fixture_settings.database
            loader = build_loader(fixture_settings)
            fixtures = loader.get_fixtures(groups)
        except FixtureError as exc:
            raise CommandError(str(exc)) from exc

        if not fixtures:
            if groups:
                raise CommandError(
                    f"Could not find any fixtures to load in the groups ({', '.join(groups)})"
                )
            raise CommandError("Could not find any fixtures to load")

        if options["dry_run"]:
            self.stdout.write(f"Would load {len(fixtures)} fixture(s) into '{using}':")
            for fixture in fixtures:
                self.stdout.write(f"  > {fixture_identity(fixture)}")
            return

        if not append and options["interactive"]:
            answer = input(
                f"Careful, database '{using}' will be purged. Do you want to continue? [y/N] "
            )
            if answer.strip().lower() not in ("y", "yes"):
                self.stdout.write(self.style.WARNING("Load cancelled."))
                return

        run = create_load_run(
            database=using,
            groups=groups,
            append=append,
            trigger_source="command",
        )
        if not append:
            self.stdout.write(f"  > purging database '{using}'")

        executor = FixtureExecutor(using=using)
        summary = executor.execute(
            fixtures,
            append=append,
            run=run,
            on_load=lambda identity: self.stdout.write(f"  > loading {identity}"),
        )

        self.stdout.write(
            self.style.SUCCESS(
                f"Loaded {summary.count} fixture(s) into '{using}' (run {summary.run_id})"
            )
        )
