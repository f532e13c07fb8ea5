#!/usr/bin/env python3
"""
dynamo-rename CLI
-----------------

Command-line interface for bulk, rule-driven field renames in a DynamoDB
table.

Commands:
    - rename: Scan the table, rewrite items, confirm, write back
    - check: Parse rename directives without touching the table
    - snapshots: List snapshots of items taken before write-backs

Usage:
    # Rename a top-level field
    dynrename rename --table users --replace 'fullname>name'

    # Rename inside every 'address' map, at any depth
    dynrename rename --table users --replace '*address.zip>*address.postcode'

    # Preview only
    dynrename rename --table users --rules-file renames.yaml --dry-run

    # Validate directives
    dynrename check --replace 'profile.a>profile.b'
"""
from pathlib import Path
from typing import Any, Optional

import click

from dynrename.core.cli import setup_logger
from dynrename.core.cli_options import log_dir_option, verbose_option
from dynrename.core.exceptions import TableError
from dynrename.table.client import make_client
from dynrename.table.decorators import TableOperation


@click.group()
@log_dir_option
@verbose_option
@click.pass_context
def cli(ctx, log_dir, verbose):
    """dynamo-rename - rename fields inside DynamoDB items"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "dynrename")


def get_client(
    ctx: click.Context,
    region: Optional[str] = None,
    profile: Optional[str] = None,
    timeout: Optional[int] = None,
) -> Any:
    """
    Get or create the DynamoDB client for this invocation.

    Raises:
        TableError: If the session or client cannot be set up (e.g. an
            unknown profile)
    """
    if "client" not in ctx.obj:
        with TableOperation(ctx.obj.get("logger"), "create_client", error_class=TableError):
            ctx.obj["client"] = make_client(region, profile, timeout)
    return ctx.obj["client"]


# Import and register command modules
# These imports must come after CLI group definition
from .rename import rename  # noqa: E402
from .check import check  # noqa: E402
from .snapshots import snapshots  # noqa: E402

cli.add_command(rename)
cli.add_command(check)
cli.add_command(snapshots)


if __name__ == "__main__":
    cli(obj={})
