"""
dynamo-rename
=============

Bulk, rule-driven renaming of fields inside the items of a DynamoDB table.

Every item is scanned into memory, rewritten against an ordered list of
rename rules, and the items that changed are written back one at a time
under a condition that they still hold the values read during the scan.
A concurrent modification therefore stops the run instead of being lost.

Main Components:
    - rename: Directive parsing and the nested-item rewrite engine
    - table: Client construction, scanning and conditional writes
    - runner: Plan/confirm/commit orchestration
    - core: Logging, exceptions, configuration, snapshots
    - cli: Command-line interface (`dynrename`)

Example Usage:
    >>> from dynrename.rename import parse_replacements, rewrite
    >>> rules = parse_replacements(["profile.tel>profile.phone"])
    >>> item = {"profile": {"M": {"tel": {"S": "555"}}}}
    >>> rewrite(item, rules)[0]
    {'profile': {'M': {'phone': {'S': '555'}}}}
"""

__version__ = "0.1.0"

from dynrename.rename import Replace, ReplaceResult, parse_replace, rewrite
from dynrename.runner import RenamePlan, execute, plan

__all__ = [
    "Replace",
    "ReplaceResult",
    "parse_replace",
    "rewrite",
    "RenamePlan",
    "plan",
    "execute",
]
