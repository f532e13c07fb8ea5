"""
check.py
--------
Parse rename directives and show how they will be applied.

No remote access happens; use it to validate a rules file before a run.

Usage:
    dynrename check --replace 'profile.tel>profile.phone'
    dynrename check --rules-file renames.yaml
"""
from pathlib import Path

import click

from dynrename.core.cli_options import replace_option, rules_file_option
from dynrename.core.config import collect_directives
from dynrename.core.exceptions import ConfigError, RuleParseError
from dynrename.core.logging_manager import handle_cli_error
from dynrename.rename.rules import parse_replace


@click.command()
@replace_option
@rules_file_option
@click.pass_context
def check(ctx, replace, rules_file):
    """Validate rename directives without touching the table."""
    try:
        directives = collect_directives(
            replace, Path(rules_file) if rules_file else None
        )
        for position, directive in enumerate(directives, start=1):
            rule = parse_replace(directive)
            scope = "root" if rule.root else "suffix"
            prefix = rule.prefix or "<item>"
            click.echo(
                f"{position:>3}. {directive!r}: {scope} rule in {prefix}, "
                f"'{rule.from_}' -> '{rule.to}'"
            )
        click.echo(f"\n✅ {len(directives)} directive(s) valid")

    except (ConfigError, RuleParseError) as e:
        handle_cli_error(ctx, e, "check", additional_context={"rules_file": rules_file})
