"""
Fixture executor: purges the database (unless appending) and runs each
fixture's load() inside a single transaction.

Failure behavior:
- Any exception raised by a fixture rolls back the whole load and propagates.
- There are no partial loads: either every selected fixture ran, or none did.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable
from uuid import UUID

from django.core.management import call_command
from django.db import transaction
from pydantic import BaseModel, Field

from seedbed.fixtures.interfaces import fixture_identity
from seedbed.fixtures.observability import log_load_event
from seedbed.fixtures.references import ReferenceRepository
from seedbed.fixtures.run_context import LoadRun, create_load_run

logger = logging.getLogger(__name__)

Purger = Callable[[str], None]


@dataclass
class FixtureContext:
    """
    What a fixture receives in load().

    Attributes:
        using: Database alias to write to (pass to .using() / save(using=...))
        references: Objects shared between fixtures of this load
        run: The LoadRun being executed
    """

    using: str
    run: LoadRun
    references: ReferenceRepository = field(default_factory=ReferenceRepository)


class LoadSummary(BaseModel):
    """Result of a fixture load."""

    run_id: UUID
    database: str
    groups: list[str] = Field(default_factory=list)
    purged: bool = False
    loaded: list[str] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.loaded)


def flush_database(using: str) -> None:
    """Remove all rows from every table of `using` with Django's flush command."""
    call_command("flush", database=using, interactive=False, verbosity=0)


class FixtureExecutor:
    """Runs an ordered list of fixtures against one database."""

    def __init__(self, using: str = "default", purger: Purger | None = None):
        self.using = using
        self.purger = purger or flush_database

    def execute(
        self,
        fixtures: Iterable[Any],
        append: bool = False,
        run: LoadRun | None = None,
        on_load: Callable[[str], None] | None = None,
    ) -> LoadSummary:
        """
        Execute `fixtures` in the given order.

        Args:
            fixtures: Validated fixtures, dependencies first
            append: Keep existing data instead of purging first
            run: LoadRun for logging (created if not provided)
            on_load: Called with each fixture identity just before it runs

        Returns:
            LoadSummary listing the identities loaded, in order
        """
        fixtures = list(fixtures)
        run = run or create_load_run(database=self.using, append=append)
        summary = LoadSummary(run_id=run.run_id, database=self.using, groups=list(run.groups))

        log_load_event(run, "execute", "start", extra={"fixture_count": len(fixtures)})
        try:
            if not append:
                log_load_event(run, "purge", "start")
                self.purger(self.using)
                summary.purged = True

            context = FixtureContext(using=self.using, run=run)
            with transaction.atomic(using=self.using):
                for fixture in fixtures:
                    identity = fixture_identity(fixture)
                    if on_load is not None:
                        on_load(identity)
                    logger.debug("Loading fixture %s", identity)
                    fixture.load(context)
                    summary.loaded.append(identity)
                    log_load_event(run, "load_fixture", "success", extra={"fixture": identity})
        except Exception as exc:
            log_load_event(
                run,
                "execute",
                "failure",
                extra={"loaded": list(summary.loaded)},
                error_summary=f"{type(exc).__name__}: {exc}",
            )
            raise

        log_load_event(run, "execute", "success", extra={"fixture_count": summary.count})
        return summary
