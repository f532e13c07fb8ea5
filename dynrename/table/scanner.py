#!/usr/bin/env python3
"""
scanner.py
----------
Full-table retrieval.

Pages are read strictly one after another: each response's
LastEvaluatedKey is the ExclusiveStartKey of the next request, and the
loop ends when a response carries none. Every item is held in memory,
so the whole table has to fit.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional, Tuple

# --- Local imports ---
from dynrename.core.exceptions import ScanError
from dynrename.core.logging_manager import RenameLogger, safe_logger
from .decorators import TableOperation

Record = Dict[str, Any]


def scan_page(
    client: Any,
    table: str,
    start_key: Optional[Record] = None,
    logger: Optional[RenameLogger] = None,
    page: int = 0,
) -> Tuple[List[Record], Optional[Record]]:
    """
    Read one page of the table.

    Args:
        client: DynamoDB client
        table: Table name
        start_key: Continuation key from the previous page
        logger: Optional logger
        page: Index of the page, for logging and error reporting

    Returns:
        The page's items and the continuation key (None on the last page)

    Raises:
        ScanError: If the remote call fails
    """
    request: Dict[str, Any] = {"TableName": table}
    if start_key is not None:
        request["ExclusiveStartKey"] = start_key

    with TableOperation(
        logger, "scan_page", table=table, error_class=ScanError, pages_read=page
    ):
        response = client.scan(**request)

    return response.get("Items", []), response.get("LastEvaluatedKey")


def fetch_all(
    client: Any, table: str, logger: Optional[RenameLogger] = None
) -> List[Record]:
    """
    Read every item of a table.

    Args:
        client: DynamoDB client
        table: Table name
        logger: Optional logger

    Returns:
        All items, in scan order

    Raises:
        ScanError: On the first failing page
    """
    records: List[Record] = []
    start_key: Optional[Record] = None
    page = 0

    while True:
        items, start_key = scan_page(client, table, start_key, logger, page)
        records.extend(items)
        page += 1
        safe_logger(logger).log_debug(
            "Scanned page",
            {"table": table, "page": page, "items": len(items), "total": len(records)},
        )
        if start_key is None:
            break

    safe_logger(logger).log_operation(
        "scan_completed", {"table": table, "pages": page, "items": len(records)}
    )
    return records
