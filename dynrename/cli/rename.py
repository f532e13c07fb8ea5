#!/usr/bin/env python3
"""
rename.py
---------
The rename command: scan, rewrite, confirm, write back.

Flow:
    1. Parse every directive (fails before any remote access)
    2. Scan the whole table into memory
    3. Rewrite items and summarize replacements
    4. Ask for confirmation (type 'Y')
    5. Snapshot originals, then write items back one by one under a
       condition that they are unchanged since the scan

Writes are not transactional across items. On failure the error reports
how many items were already updated.

Usage:
    dynrename rename --table users --replace 'fullname>name'
    dynrename rename --table users --replace '*meta.ts>*meta.timestamp' --yes
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import sys
from pathlib import Path
from typing import Optional, Tuple

# --- Third-party imports ---
import click

# --- Local imports ---
from dynrename.core.cli import RenameStats
from dynrename.core.cli_options import (
    dry_run_option,
    no_snapshot_option,
    profile_option,
    region_option,
    replace_option,
    rules_file_option,
    snapshot_dir_option,
    table_option,
    timeout_option,
    yes_option,
)
from dynrename.core.config import collect_directives
from dynrename.core.exceptions import (
    ConfigError,
    RenameCanceled,
    RuleParseError,
    SnapshotError,
    TableError,
)
from dynrename.core.logging_manager import handle_cli_error, safe_logger
from dynrename.core.snapshot_manager import SnapshotManager
from dynrename.rename.rules import parse_replacements
from dynrename.runner import execute, plan
from dynrename.table.scanner import fetch_all
from . import get_client

CONFIRM_TOKEN = "Y"


def ask_confirmation() -> bool:
    """Block on a single line from stdin; only the literal 'Y' proceeds."""
    answer = click.prompt(
        f"confirm (type '{CONFIRM_TOKEN}' and press 'Enter')",
        default="",
        show_default=False,
        err=True,
    )
    return answer.strip() == CONFIRM_TOKEN


@click.command()
@table_option()
@replace_option
@rules_file_option
@region_option
@profile_option
@timeout_option
@dry_run_option
@yes_option
@no_snapshot_option
@snapshot_dir_option
@click.pass_context
def rename(
    ctx: click.Context,
    table: str,
    replace: Tuple[str, ...],
    rules_file: Optional[str],
    region: Optional[str],
    profile: Optional[str],
    timeout: Optional[int],
    dry_run: bool,
    yes: bool,
    no_snapshot: bool,
    snapshot_dir: str,
) -> None:
    """
    Rename fields in every item of a table.

    Directives are applied in the order given: rules file first, then
    each --replace.

    Examples:
        # Rename a top-level field
        dynrename rename --table users --replace 'fullname>name'

        # Rename inside the 'profile' map only
        dynrename rename --table users --replace 'profile.tel>profile.phone'

        # Rename inside any map whose path ends in 'address'
        dynrename rename --table users --replace '*address.zip>*address.postcode'
    """
    logger = ctx.obj.get("logger")
    log = safe_logger(logger)
    stats = RenameStats()

    try:
        directives = collect_directives(
            replace, Path(rules_file) if rules_file else None
        )
        rules = parse_replacements(directives)
    except (ConfigError, RuleParseError) as e:
        handle_cli_error(ctx, e, "parse_rules")

    log.log_operation(
        "rename_started",
        {"table": table, "rules": [str(rule) for rule in rules], "dry_run": dry_run},
    )

    try:
        client = get_client(ctx, region, profile, timeout)
        records = fetch_all(client, table, logger)
    except TableError as e:
        handle_cli_error(ctx, e, "scan", additional_context={"table": table})

    stats.records_scanned = len(records)
    click.echo(f"scanned {len(records)} row(s) in table...", err=True)

    rename_plan = plan(records, rules)
    stats.replacements = rename_plan.result.replacements
    stats.overwrites = rename_plan.result.overwrites
    stats.items_dirty = len(rename_plan.dirty)

    if not rename_plan.has_changes:
        click.echo("no replacements found.", err=True)
        log.log_operation("rename_completed", stats.to_dict())
        return

    click.echo(rename_plan.summary(), err=True)

    if dry_run:
        click.echo("dry run: nothing written.", err=True)
        log.log_operation("rename_dry_run", stats.to_dict())
        return

    snapshots = None
    if not no_snapshot:
        snapshots = SnapshotManager(Path(snapshot_dir), logger=logger)

    def on_written(count: int) -> None:
        stats.items_written = count

    try:
        written = execute(
            rename_plan,
            client,
            table,
            confirm=(lambda: True) if yes else ask_confirmation,
            snapshots=snapshots,
            logger=logger,
            on_snapshot=lambda path: click.echo(f"saved originals to {path}", err=True),
            on_written=on_written,
        )
    except RenameCanceled:
        click.echo("canceled.")
        sys.exit(1)
    except (SnapshotError, TableError) as e:
        log.log_operation("rename_failed", stats.to_dict())
        handle_cli_error(
            ctx,
            e,
            "write_back",
            additional_context={"table": table},
        )

    if snapshots is not None:
        snapshots.cleanup_old_snapshots()

    stats.items_written = written
    log.log_operation("rename_completed", stats.to_dict())
    click.echo(f"successfully updated {written} items.", err=True)
    if ctx.obj.get("verbose"):
        click.echo(stats.summary(), err=True)
