"""Run independent work units concurrently with an all-or-nothing join."""

import logging
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from gitprompt.errors import UnitFailedError
from gitprompt.models import WorkUnit

logger = logging.getLogger(__name__)


def run_all(units: Sequence[WorkUnit[Any]], max_workers: int | None = None) -> dict[str, Any]:
    """Run every unit in parallel and return results keyed by slot.

    All units are started and all are waited for. If any unit raised, the
    results are discarded and the first failure in dispatch order is
    raised as UnitFailedError.
    """
    slots = [unit.slot for unit in units]
    if len(set(slots)) != len(slots):
        raise ValueError(f"duplicate work unit slots: {slots}")
    if not units:
        return {}

    workers = len(units) if max_workers is None else max(1, min(max_workers, len(units)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gitprompt") as executor:
        future_by_slot: dict[str, Future[Any]] = {
            unit.slot: executor.submit(unit.run) for unit in units
        }
    # Leaving the executor block joins every worker.

    results: dict[str, Any] = {}
    for slot, future in future_by_slot.items():
        exc = future.exception()
        if exc is not None:
            logger.debug("unit %s failed: %s", slot, exc)
            raise UnitFailedError(slot, exc) from exc
        results[slot] = future.result()
        logger.debug("unit %s -> %r", slot, results[slot])
    return results
