#!/usr/bin/env python3
"""
writer.py
---------
Conditional write-back of rewritten items.

Each item is put whole, guarded by a condition that every attribute of the
item as originally read still holds its original value. If anything was
changed in the meantime the table rejects the put and the run stops with a
WriteConflictError instead of silently overwriting the other change.

Attribute names and values are bound through generated placeholders
(#a0/:a0, #a1/:a1, ...) so reserved words and special characters in field
names never reach the expression text.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

# --- Local imports ---
from dynrename.core.exceptions import WriteError
from dynrename.core.logging_manager import RenameLogger, safe_logger
from .decorators import TableOperation

Record = Dict[str, Any]


class ConditionBuilder:
    """
    Accumulates attribute equality checks for a condition expression.

    Each check is stored as a (name placeholder, value placeholder, field)
    triple; the expression is the AND of all of them.

    Usage:
        builder = ConditionBuilder()
        for field, value in original.items():
            builder.add(field, value)
        client.put_item(TableName=table, Item=item, **builder.to_request())
    """

    def __init__(self) -> None:
        self.checks: List[Tuple[str, str, str]] = []
        self.values: Dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self.checks)

    def add(self, field: str, value: Any) -> None:
        """Require `field` to still equal `value`."""
        index = len(self.checks)
        name_placeholder = f"#a{index}"
        value_placeholder = f":a{index}"
        self.checks.append((name_placeholder, value_placeholder, field))
        self.values[value_placeholder] = value

    @classmethod
    def from_record(cls, record: Record) -> "ConditionBuilder":
        """Builder requiring every attribute of `record` to be unchanged."""
        builder = cls()
        for field, value in record.items():
            builder.add(field, value)
        return builder

    def expression(self) -> str:
        return " AND ".join(f"{name} = {value}" for name, value, _ in self.checks)

    def attribute_names(self) -> Dict[str, str]:
        return {name: field for name, _, field in self.checks}

    def to_request(self) -> Dict[str, Any]:
        """
        Keyword arguments for put_item.

        Returns:
            ConditionExpression, ExpressionAttributeNames and
            ExpressionAttributeValues, or an empty dict when there are no
            checks (the put is then unconditional)
        """
        if not self.checks:
            return {}
        return {
            "ConditionExpression": self.expression(),
            "ExpressionAttributeNames": self.attribute_names(),
            "ExpressionAttributeValues": dict(self.values),
        }


def put_conditional(
    client: Any,
    table: str,
    original: Record,
    mutated: Record,
    logger: Optional[RenameLogger] = None,
) -> None:
    """
    Write `mutated` provided the stored item still equals `original`.

    Raises:
        WriteConflictError: If the stored item changed since it was read
        WriteError: On any other remote failure
    """
    request = {"TableName": table, "Item": mutated}
    request.update(ConditionBuilder.from_record(original).to_request())

    with TableOperation(logger, "put_item", table=table, error_class=WriteError):
        client.put_item(**request)


def apply_writes(
    client: Any,
    table: str,
    dirty: Iterable[Tuple[Record, Record]],
    logger: Optional[RenameLogger] = None,
    on_written: Optional[Callable[[int], None]] = None,
) -> int:
    """
    Write rewritten items back one at a time, in order.

    Stops at the first failure. Items before it stay written; the raised
    error's `written` attribute says how many.

    Args:
        client: DynamoDB client
        table: Table name
        dirty: (original, rewritten) pairs
        logger: Optional logger
        on_written: Called with the running count after each successful put

    Returns:
        Number of items written

    Raises:
        WriteConflictError: On a concurrent modification
        WriteError: On any other write failure
    """
    count = 0
    for original, mutated in dirty:
        try:
            put_conditional(client, table, original, mutated, logger)
        except WriteError as e:
            e.written = count
            safe_logger(logger).log_warning(
                "Write-back halted", {"table": table, "written": count, "error": e.reason}
            )
            raise
        count += 1
        if on_written is not None:
            on_written(count)

    safe_logger(logger).log_operation("writes_completed", {"table": table, "written": count})
    return count
