"""
Snapshot Commands
-----------------

List the snapshots of original items saved before write-backs, or show
what one of them holds.

Usage:
    dynrename snapshots
    dynrename snapshots --table users
    dynrename snapshots --show ~/.dynrename/snapshots/users/users_20240115_093000.json
"""
import json

import click
from pathlib import Path

from dynrename.core.cli_options import snapshot_dir_option, table_option
from dynrename.core.exceptions import SnapshotError
from dynrename.core.logging_manager import handle_cli_error
from dynrename.core.snapshot_manager import SnapshotManager


def show_snapshot(manager: SnapshotManager, path: str) -> None:
    """Print a snapshot's header and its items as DynamoDB JSON."""
    data = manager.load_snapshot(Path(path))
    click.echo(f"Table: {data.get('table')}")
    click.echo(f"Created: {data.get('created')}")
    click.echo(f"Items: {data.get('count', len(data['items']))}")
    click.echo(json.dumps(data["items"], indent=2))


@click.command()
@table_option(required=False)
@snapshot_dir_option
@click.option(
    "--show",
    "show_path",
    type=click.Path(),
    help="Print the items saved in this snapshot file",
)
@click.pass_context
def snapshots(ctx, table, snapshot_dir, show_path):
    """List all available snapshots."""
    try:
        manager = SnapshotManager(Path(snapshot_dir), logger=ctx.obj.get("logger"))

        if show_path:
            show_snapshot(manager, show_path)
            return

        snapshots_dict = manager.list_snapshots(table)

        click.echo("\n📦 Available Snapshots")
        click.echo("=" * 70)

        total = 0
        for table_name, snapshot_list in snapshots_dict.items():
            click.echo(f"\n{table_name}:")
            for snapshot in snapshot_list:
                click.echo(f"  • {snapshot['name']}")
                click.echo(f"    Created: {snapshot['created']}")
                click.echo(f"    Size: {snapshot['size']:,} bytes")
                click.echo(f"    Age: {snapshot['age_days']} days")
                total += 1

        if total == 0:
            click.echo("\n  No snapshots found")
        else:
            click.echo(f"\nTotal snapshots: {total}")

    except (SnapshotError, OSError) as e:
        handle_cli_error(ctx, e, "snapshots", additional_context={"show": show_path})
