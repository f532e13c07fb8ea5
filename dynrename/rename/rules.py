#!/usr/bin/env python3
"""
rules.py
--------
Rename directive parsing.

A directive has the form `<before>><after>`:

    status>state                  rename at the item root
    profile.fullname>profile.name rename inside the map at path 'profile'
    *zip>*postcode                rename inside every map, at any depth
    *address.zip>*address.postcode
                                  rename inside maps whose path ends in 'address'

Unstarred directives are root rules: the prefix must equal the full path to
the map. Starred directives are suffix rules: the path only has to end with
the prefix. A directive can only rename within one map; moving a value to a
different level is rejected.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass
from typing import Iterable, List

# --- Local imports ---
from dynrename.core.exceptions import (
    InvalidAttributeError,
    MissingArrowError,
    UnsupportedReplaceError,
)

ARROW = ">"
WILDCARD = "*"
NAME_PATTERN = re.compile(r"[a-zA-Z0-9_\-.]+")


@dataclass(frozen=True)
class Replace:
    """
    One parsed rename rule.

    Attributes:
        root: Prefix must match the whole path (False: a suffix of it)
        prefix: Dotted path of the map the rule applies to ('' is the item root)
        from_: Field renamed away
        to: New field name
    """
    root: bool
    prefix: str
    from_: str
    to: str

    def matches(self, path: str) -> bool:
        """
        Whether the rule fires for a map at `path`.

        Suffix rules use a plain string suffix test, so prefix 'b.c' also
        matches path 'xb.c'.
        """
        return path == self.prefix or (not self.root and path.endswith(self.prefix))

    def __str__(self) -> str:
        marker = "" if self.root else WILDCARD
        if self.prefix:
            return f"{marker}{self.prefix}.{self.from_}{ARROW}{marker}{self.prefix}.{self.to}"
        return f"{marker}{self.from_}{ARROW}{marker}{self.to}"


def validate_attribute_name(name: str) -> None:
    """
    Check that `name` consists only of attribute-name characters.

    The pattern is searched, not anchored, so the match must span the
    whole string.

    Raises:
        InvalidAttributeError: If any character falls outside the grammar
    """
    match = NAME_PATTERN.search(name)
    if match is None or match.start() != 0 or match.end() != len(name):
        raise InvalidAttributeError(name)


def parse_replace(text: str) -> Replace:
    """
    Parse a rename directive.

    Args:
        text: Directive such as 'a.b>a.c'

    Returns:
        The parsed rule

    Raises:
        MissingArrowError: If there is no '>'
        UnsupportedReplaceError: If only one side is starred, or the
            rename would cross levels
        InvalidAttributeError: If either side has invalid characters
    """
    if ARROW not in text:
        raise MissingArrowError()

    before, after = text.split(ARROW, 1)

    before_starred = before.startswith(WILDCARD)
    after_starred = after.startswith(WILDCARD)
    if before_starred != after_starred:
        raise UnsupportedReplaceError()

    root = not before_starred
    if before_starred:
        before = before[1:]
        after = after[1:]

    validate_attribute_name(before)
    validate_attribute_name(after)

    if "." in before:
        prefix, from_ = before.rsplit(".", 1)
        head = prefix + "."
        if not after.startswith(head):
            raise UnsupportedReplaceError()
        to = after[len(head):]
    else:
        if "." in after:
            raise UnsupportedReplaceError()
        prefix, from_, to = "", before, after

    # 'a.>a.b' and 'a.b>a.' leave an empty field name
    validate_attribute_name(from_)
    validate_attribute_name(to)

    return Replace(root=root, prefix=prefix, from_=from_, to=to)


def parse_replacements(texts: Iterable[str]) -> List[Replace]:
    """Parse directives in order; the first invalid one raises."""
    return [parse_replace(text) for text in texts]
