#!/usr/bin/env python3
"""
rewrite.py
----------
Path-scoped field renaming over nested items.

Items use the DynamoDB attribute-value shape, e.g.

    {"id": {"S": "42"}, "profile": {"M": {"fullname": {"S": "Ada"}}}}

Only map values ({"M": ...}) are descended into; lists, sets and scalars
are leaves. Each map is visited once, depth first, and every rule is tried
once at each map in list order. A field inserted by a rule is not picked up
by later rules at the same map during that pass, so with chained rules
('a>b', 'b>c') only the first applies and a second pass applies the next.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

# --- Local imports ---
from .rules import Replace

Record = Dict[str, Any]

MAP_TYPE = "M"


@dataclass
class ReplaceResult:
    """
    Counters accumulated over a rewrite.

    Attributes:
        replacements: Fields renamed
        overwrites: Renames whose destination field already existed
    """
    replacements: int = 0
    overwrites: int = 0

    def merge(self, other: "ReplaceResult") -> None:
        """Add another result's counters to this one."""
        self.replacements += other.replacements
        self.overwrites += other.overwrites


def _join_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def replace_in_place(
    path: str,
    attributes: Record,
    replacements: Sequence[Replace],
    result: ReplaceResult,
) -> None:
    """
    Apply rules to the map at `path`, then to every nested map below it.

    Args:
        path: Dotted path of `attributes` from the item root ('' at the root)
        attributes: Map to rewrite; modified in place
        replacements: Rules in evaluation order
        result: Counters to update
    """
    inserted = set()
    for rule in replacements:
        if not rule.matches(path) or rule.from_ not in attributes:
            continue
        if rule.from_ in inserted:
            continue
        value = attributes.pop(rule.from_)
        result.replacements += 1
        if rule.to in attributes:
            result.overwrites += 1
        attributes[rule.to] = value
        inserted.add(rule.to)

    for key, value in attributes.items():
        if isinstance(value, dict) and MAP_TYPE in value:
            replace_in_place(_join_path(path, key), value[MAP_TYPE], replacements, result)


def rewrite(
    record: Record,
    replacements: Sequence[Replace],
    result: Optional[ReplaceResult] = None,
) -> Tuple[Record, ReplaceResult]:
    """
    Rewrite a copy of an item.

    Rules that match nothing are silently ignored.

    Args:
        record: Item to rewrite; left untouched
        replacements: Rules in evaluation order
        result: Counters to accumulate into (a fresh one when omitted)

    Returns:
        The rewritten copy and the counters
    """
    if result is None:
        result = ReplaceResult()
    mutated = copy.deepcopy(record)
    replace_in_place("", mutated, replacements, result)
    return mutated, result
