"""
Run context for a fixture load.

LoadRun is an in-memory context object. It is NOT persisted.

It carries:
- run_id: Unique identifier for a single load
- database: Alias the fixtures are written to
- groups: Requested groups (empty means every fixture)
- append: Whether existing data is kept (no purge)
- trigger_source: What initiated the load (command, manual)
"""

from dataclasses import dataclass, field
from typing import Iterable, Literal
from uuid import UUID, uuid4

TriggerSource = Literal["command", "manual"]


@dataclass(frozen=True)
class LoadRun:
    """
    In-memory context for one fixture load.

    Attributes:
        database: Database alias the fixtures are loaded into
        groups: Requested group names, sorted
        append: True when existing rows are kept
        trigger_source: What initiated the load
        run_id: Unique UUID for this load (auto-generated if not provided)
    """

    database: str = "default"
    groups: tuple[str, ...] = ()
    append: bool = False
    trigger_source: TriggerSource = "manual"
    run_id: UUID = field(default_factory=uuid4)


def create_load_run(
    database: str = "default",
    groups: Iterable[str] = (),
    append: bool = False,
    trigger_source: TriggerSource = "manual",
    run_id: UUID | None = None,
) -> LoadRun:
    """
    Factory function to create a LoadRun.

    Groups are de-duplicated and sorted so equal requests log identically.
    """
    return LoadRun(
        database=database,
        groups=tuple(sorted(set(groups))),
        append=append,
        trigger_source=trigger_source,
        run_id=run_id or uuid4(),
    )
