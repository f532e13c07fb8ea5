#!/usr/bin/env python3
"""
cli_options.py
-------------------
Reusable Click option decorators for consistent CLI interfaces.

Usage:
    from dynrename.core.cli_options import table_option, replace_option

    @cli.command()
    @table_option()
    @replace_option
    def my_command(table, replace):
        pass
"""
import click

from dynrename.core.paths import LOG_DIR, SNAPSHOT_DIR


# ═══════════════════════════════════════════════════════════════════════════
# LOGGING OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

verbose_option = click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks"
)

log_dir_option = click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Directory for log files"
)


# ═══════════════════════════════════════════════════════════════════════════
# TABLE OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

def table_option(required=True):
    """
    Factory function for the target table option.

    Args:
        required: Whether the option is required (default: True)

    Returns:
        Click option decorator
    """
    return click.option(
        "--table",
        required=required,
        help="Name of the table whose items are rewritten"
    )


region_option = click.option(
    "--region",
    default=None,
    help="Region of the table (default: from the AWS environment)"
)

profile_option = click.option(
    "--profile",
    default=None,
    help="Named credentials profile to use"
)

timeout_option = click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Per-call timeout in seconds"
)


# ═══════════════════════════════════════════════════════════════════════════
# RULE OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

replace_option = click.option(
    "--replace",
    "replace",
    multiple=True,
    help="Rename directive such as 'a>b', 'a.b>a.c' or '*b.c>*b.d' (repeatable)"
)

rules_file_option = click.option(
    "--rules-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file listing rename directives"
)


# ═══════════════════════════════════════════════════════════════════════════
# WRITE-BACK OPTIONS
# ═══════════════════════════════════════════════════════════════════════════

dry_run_option = click.option(
    "--dry-run",
    is_flag=True,
    help="Scan and summarize replacements without writing anything"
)

yes_option = click.option(
    "-y", "--yes",
    is_flag=True,
    help="Skip the confirmation prompt"
)

no_snapshot_option = click.option(
    "--no-snapshot",
    is_flag=True,
    help="Do not save original items before writing"
)

snapshot_dir_option = click.option(
    "--snapshot-dir",
    type=click.Path(),
    default=str(SNAPSHOT_DIR),
    help="Directory for snapshots of original items"
)
