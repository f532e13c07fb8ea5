#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for dynamo-rename.

This module defines the hierarchy of exceptions raised while parsing rename
rules, reading the table, snapshotting originals and writing records back.

Exception Hierarchy:
    Exception (built-in)
    └── RenameError - Base for every dynamo-rename failure
        ├── RuleParseError - Rename directive syntax errors
        │   ├── MissingArrowError - Directive has no '>' separator
        │   ├── InvalidAttributeError - Attribute name outside the grammar
        │   └── UnsupportedReplaceError - Cross-level move or wildcard mismatch
        ├── ConfigError - Rules file or option problems
        ├── TableError - Remote table failures
        │   ├── ScanError - Failure while reading the table
        │   └── WriteError - Failure while writing an item back
        │       └── WriteConflictError - Condition check failed
        ├── SnapshotError - Snapshot creation/listing failures
        └── RenameCanceled - User declined the confirmation gate

Usage:
    from dynrename.core.exceptions import WriteConflictError, WriteError

    try:
        apply_writes(client, table, dirty)
    except WriteConflictError as e:
        logger.log_warning(str(e))
    except WriteError as e:
        logger.log_error(e)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional


class RenameError(Exception):
    """
    Base exception for dynamo-rename.

    Catch this to handle any failure raised by the tool, or catch a specific
    subclass for more granular error handling.
    """

    pass


class RuleParseError(RenameError):
    """
    Exception for rename directive syntax errors.

    Raised at configuration time, before any remote access happens.

    Examples:
        >>> raise MissingArrowError()
        >>> raise InvalidAttributeError("user name")
    """

    pass


class MissingArrowError(RuleParseError):
    """Directive does not contain the '>' separator."""

    def __init__(self) -> None:
        super().__init__("replacement missing arrow ('>')")


class InvalidAttributeError(RuleParseError):
    """
    Directive side is not a valid attribute name.

    Attributes:
        attribute: The offending fragment, as written after stripping
            any wildcard marker
    """

    def __init__(self, attribute: str) -> None:
        self.attribute = attribute
        super().__init__(f"attribute '{attribute}' is invalid")


class UnsupportedReplaceError(RuleParseError):
    """Directive would move a value to another level, or mixes wildcard sides."""

    def __init__(self) -> None:
        super().__init__("replacements that move values are not yet supported")


class ConfigError(RenameError):
    """
    Exception for configuration problems.

    Raised when a rules file cannot be read or has an unexpected layout,
    or when no rename directives were supplied at all.

    Examples:
        >>> raise ConfigError("Rules file must contain a list of directives")
    """

    pass


class TableError(RenameError):
    """
    Base exception for remote table failures.

    Attributes:
        table: Name of the table the operation targeted
    """

    def __init__(self, message: str, table: Optional[str] = None) -> None:
        self.table = table
        super().__init__(message)


class ScanError(TableError):
    """
    Exception for failures while reading the table.

    Scanning precedes every write, so a scan failure never leaves the
    table partially updated.

    Attributes:
        pages_read: Number of pages retrieved before the failure
    """

    def __init__(
        self, message: str, table: Optional[str] = None, pages_read: int = 0
    ) -> None:
        self.pages_read = pages_read
        super().__init__(message, table)


class WriteError(TableError):
    """
    Exception for failures while writing an item back.

    Writes are not transactional across items. `written` carries the number
    of items durably updated before this failure; it is filled in by the
    write loop once the failing position is known.

    Attributes:
        reason: Remote failure description
        written: Items successfully written before this failure
    """

    def __init__(
        self, reason: str, table: Optional[str] = None, written: int = 0
    ) -> None:
        self.reason = reason
        self.written = written
        super().__init__(reason, table)

    def __str__(self) -> str:
        return (
            f"after {self.written} successfully updated item(s), "
            f"error putting item: {self.reason}"
        )


class WriteConflictError(WriteError):
    """
    Exception for a conditional write rejected by the table.

    The stored item no longer matches the values read during the scan,
    meaning someone else modified it concurrently. Re-running the tool is
    safe; the item is not retried automatically.
    """

    def __str__(self) -> str:
        return (
            f"after {self.written} successfully updated item(s), "
            f"concurrent modification detected. retry if desired."
        )


class SnapshotError(RenameError):
    """
    Exception for snapshot creation and listing failures.

    Examples:
        >>> raise SnapshotError("Failed to create snapshot: disk full")
    """

    pass


class RenameCanceled(RenameError):
    """User declined the confirmation prompt; nothing was written."""

    def __init__(self) -> None:
        super().__init__("canceled.")
