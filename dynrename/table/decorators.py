#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared logging and error translation for remote table calls.

`TableOperation` wraps one remote call: it times it, logs completion or
failure, and turns botocore errors into the tool's own exceptions so that
callers above the table layer never handle botocore types.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from types import TracebackType
from typing import Any, Optional, Type

# --- Third party imports ---
from botocore.exceptions import BotoCoreError, ClientError

# --- Local imports ---
from dynrename.core.exceptions import TableError, WriteConflictError, WriteError
from dynrename.core.logging_manager import RenameLogger, safe_logger

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def error_code(error: BaseException) -> Optional[str]:
    """Remote error code of a ClientError, or None."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def error_message(error: BaseException) -> str:
    """Human readable remote message, falling back to str(error)."""
    if isinstance(error, ClientError):
        message = error.response.get("Error", {}).get("Message")
        if message:
            return message
    return str(error)


def translate_client_error(
    error: BaseException,
    error_class: Type[TableError],
    table: Optional[str] = None,
    **error_kwargs: Any,
) -> TableError:
    """
    Map a botocore failure onto the tool's exception hierarchy.

    A failed condition check on a write becomes WriteConflictError; any
    other failure becomes `error_class`.
    """
    if issubclass(error_class, WriteError) and error_code(error) == CONDITIONAL_CHECK_FAILED:
        return WriteConflictError(error_message(error), table=table, **error_kwargs)
    return error_class(error_message(error), table=table, **error_kwargs)


class TableOperation:
    """
    Context manager for one logged remote table operation.

    Usage:
        with TableOperation(logger, "scan_page", table="users", error_class=ScanError):
            response = client.scan(TableName="users")
    """

    def __init__(
        self,
        logger: Optional[RenameLogger],
        operation_name: str,
        table: Optional[str] = None,
        error_class: Type[TableError] = TableError,
        log_start: bool = False,
        **error_kwargs: Any,
    ) -> None:
        self.logger = safe_logger(logger)
        self.operation_name = operation_name
        self.table = table
        self.error_class = error_class
        self.log_start = log_start
        self.error_kwargs = error_kwargs
        self.start_time: Optional[datetime] = None

    def __enter__(self) -> "TableOperation":
        self.start_time = datetime.now()
        if self.log_start:
            self.logger.log_debug(
                f"Starting {self.operation_name}", {"table": self.table}
            )
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        duration = (datetime.now() - self.start_time).total_seconds()

        if exc is None:
            self.logger.log_operation(
                f"{self.operation_name}_completed",
                {"table": self.table, "duration_seconds": duration, "success": True},
            )
            return False

        self.logger.log_error(
            exc,
            {
                "operation": self.operation_name,
                "table": self.table,
                "duration_seconds": duration,
            },
        )
        if isinstance(exc, (ClientError, BotoCoreError)):
            raise translate_client_error(
                exc, self.error_class, self.table, **self.error_kwargs
            ) from exc
        return False

