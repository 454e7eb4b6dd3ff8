"""
Structured logging for fixture loads.

Every load logs a "start" event and then either "success" or "failure", plus one
"fixture" event per fixture executed. The payload always includes run_id,
database, groups, append, trigger_source, operation and status.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping

from .run_context import LoadRun

logger = logging.getLogger("seedbed.loads")

Status = Literal["start", "success", "failure"]


def log_load_event(
    run: LoadRun,
    operation: str,
    status: Status,
    extra: Mapping[str, Any] | None = None,
    error_summary: str | None = None,
) -> None:
    """
    Log a structured load event.

    Args:
        run: LoadRun for this load
        operation: Name of the operation (e.g., "purge", "execute", "load_fixture")
        status: Current status ("start", "success", "failure")
        extra: Optional additional fields to include in the log
        error_summary: Short error description for failure status
    """
    payload: dict[str, Any] = {
        "run_id": str(run.run_id),
        "database": run.database,
        "groups": list(run.groups),
        "append": run.append,
        "trigger_source": run.trigger_source,
        "operation": operation,
        "status": status,
    }

    if error_summary:
        payload["error_summary"] = error_summary

    if extra:
        payload.update(extra)

    level = logging.ERROR if status == "failure" else logging.INFO
    logger.log(level, "load_event", extra=payload)
