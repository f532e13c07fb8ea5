#!/usr/bin/env python3
"""
runner.py
---------
Two-phase rename run: plan in memory, then commit after confirmation.

Phase 1 (`plan`) rewrites every scanned item and keeps the ones that
changed. It has no side effects. Phase 2 (`execute`) asks for confirmation
through an injected `confirm()` callable and only then snapshots the
originals and writes the rewritten items back.

Usage:
    records = fetch_all(client, table, logger)
    rename_plan = plan(records, rules)
    click.echo(rename_plan.summary(), err=True)
    written = execute(rename_plan, client, table, confirm=ask_user)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

# --- Local imports ---
from dynrename.core.exceptions import RenameCanceled
from dynrename.core.logging_manager import RenameLogger, safe_logger
from dynrename.core.snapshot_manager import SnapshotManager
from dynrename.rename.rewrite import ReplaceResult, rewrite
from dynrename.rename.rules import Replace
from dynrename.table.writer import apply_writes

Record = Dict[str, Any]


@dataclass
class RenamePlan:
    """
    Outcome of rewriting a table's items in memory.

    Attributes:
        scanned: Items considered
        dirty: (original, rewritten) pairs for items that changed
        result: Replacement and overwrite counters over all items
    """
    scanned: int = 0
    dirty: List[Tuple[Record, Record]] = field(default_factory=list)
    result: ReplaceResult = field(default_factory=ReplaceResult)

    @property
    def has_changes(self) -> bool:
        return self.result.replacements > 0

    def summary(self) -> str:
        return (
            f"prepared to make {self.result.replacements} replacement(s) "
            f"across {len(self.dirty)} item(s) "
            f"with {self.result.overwrites} overwritten key(s)..."
        )


def plan(records: Sequence[Record], rules: Sequence[Replace]) -> RenamePlan:
    """
    Rewrite every record and collect the ones that changed.

    A record whose rules fired but left it equal to the original (a rename
    onto itself) counts replacements without becoming dirty.
    """
    rename_plan = RenamePlan(scanned=len(records))
    for record in records:
        mutated, _ = rewrite(record, rules, rename_plan.result)
        if mutated != record:
            rename_plan.dirty.append((record, mutated))
    return rename_plan


def execute(
    rename_plan: RenamePlan,
    client: Any,
    table: str,
    confirm: Callable[[], bool],
    snapshots: Optional[SnapshotManager] = None,
    logger: Optional[RenameLogger] = None,
    on_snapshot: Optional[Callable[[Path], None]] = None,
    on_written: Optional[Callable[[int], None]] = None,
) -> int:
    """
    Commit a plan after confirmation.

    Args:
        rename_plan: Result of `plan`
        client: DynamoDB client
        table: Table name
        confirm: Blocking yes/no gate; only True proceeds
        snapshots: Where to save originals before writing (None: skip)
        logger: Optional logger
        on_snapshot: Called with the snapshot path once it is written
        on_written: Called with the running count after each put

    Returns:
        Items written (0 when the plan has no replacements)

    Raises:
        RenameCanceled: If `confirm` returned False
        SnapshotError: If originals could not be saved; nothing is written
        WriteConflictError: On a concurrent modification
        WriteError: On any other write failure
    """
    log = safe_logger(logger)
    if not rename_plan.has_changes:
        log.log_info("No replacements found", {"table": table})
        return 0

    if not confirm():
        log.log_info("Rename canceled at confirmation", {"table": table})
        raise RenameCanceled()

    if snapshots is not None and rename_plan.dirty:
        snapshot_path = snapshots.create_snapshot(
            table, [original for original, _ in rename_plan.dirty]
        )
        if on_snapshot is not None:
            on_snapshot(snapshot_path)

    log.log_operation(
        "write_back_started",
        {
            "table": table,
            "items": len(rename_plan.dirty),
            "replacements": rename_plan.result.replacements,
            "overwrites": rename_plan.result.overwrites,
        },
    )
    return apply_writes(client, table, rename_plan.dirty, logger, on_written)
