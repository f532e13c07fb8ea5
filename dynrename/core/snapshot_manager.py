#!/usr/bin/env python3
"""
snapshot_manager.py
--------------------
Snapshots of original items taken before they are written back.

The tool cannot undo writes, so before the first conditional put the
original form of every item about to change is saved as DynamoDB JSON
(binary values base64 encoded, as on the wire). A snapshot is enough to
restore items by hand if a rename turns out to be wrong.

Layout:
    snapshot_dir/
    └── <table>/
        ├── <table>_20240115_093000.json
        ├── <table>_20240115_093000.json.marker
        └── <table>_20240115_093000_1.json     # second run within the same second

A table ARN is filed under its table name ("arn:...:table/users" -> "users");
the full identifier is kept inside the snapshot.

Usage:
    from dynrename.core.snapshot_manager import SnapshotManager

    manager = SnapshotManager(SNAPSHOT_DIR, logger=logger)
    path = manager.create_snapshot("users", [original for original, _ in dirty])
    snapshots = manager.list_snapshots("users")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import base64
import json
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

# --- Local imports ---
from .exceptions import SnapshotError
from .logging_manager import RenameLogger, safe_logger


ARN_TABLE_MARKER = "table/"
UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_.\-]")


def snapshot_segment(table: str) -> str:
    """
    Directory and file name part for a table name or ARN.

    Table names already fit the pattern; ARNs are cut down to the part
    after "table/", and anything else outside the pattern becomes "_".
    """
    if ARN_TABLE_MARKER in table:
        table = table.rsplit(ARN_TABLE_MARKER, 1)[1]
    return UNSAFE_CHARS.sub("_", table) or "_"


def _encode_binary(value: Any) -> str:
    """JSON fallback for binary attribute values."""
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class SnapshotManager:
    """
    Handles snapshot creation, listing and retention.

    Attributes:
        snapshot_dir: Root directory holding one subdirectory per table
        retention_days: Age after which cleanup removes snapshots
        logger: Optional logger for snapshot operations
    """

    def __init__(
        self,
        snapshot_dir: Path,
        retention_days: int = 30,
        logger: Optional[RenameLogger] = None,
    ) -> None:
        self.snapshot_dir = Path(snapshot_dir)
        self.retention_days = retention_days
        self.logger = logger

    @staticmethod
    def _get_timestamp_for_filename() -> str:
        """Timestamp in format YYYYMMDD_HHMMSS."""
        return datetime.now().strftime("%Y%m%d_%H%M%S")

    def create_snapshot(self, table: str, items: Sequence[Dict[str, Any]]) -> Path:
        """
        Save items of a table to a timestamped snapshot file.

        Args:
            table: Table the items were read from
            items: Items in DynamoDB attribute-value form

        Returns:
            Path to the created snapshot. An existing snapshot is never
            replaced; a clash within the same second gets a "_<n>" counter.

        Raises:
            SnapshotError: If the snapshot cannot be written
        """
        segment = snapshot_segment(table)
        table_dir = self.snapshot_dir / segment
        stem = f"{segment}_{self._get_timestamp_for_filename()}"
        snapshot_path = table_dir / f"{stem}.json"

        payload = {
            "table": table,
            "created": datetime.now().isoformat(),
            "count": len(items),
            "items": list(items),
        }

        try:
            content = json.dumps(payload, default=_encode_binary, indent=2)
            table_dir.mkdir(parents=True, exist_ok=True)
            snapshot_path = self._write_new(table_dir, stem, content)

            marker_path = snapshot_path.with_suffix(".json.marker")
            marker_path.write_text(payload["created"])

            safe_logger(self.logger).log_operation(
                "snapshot_created",
                {
                    "table": table,
                    "snapshot_path": str(snapshot_path),
                    "items": len(items),
                    "size": snapshot_path.stat().st_size,
                },
            )
            return snapshot_path

        except (OSError, TypeError, ValueError) as e:
            safe_logger(self.logger).log_error(
                e,
                {
                    "operation": "create_snapshot",
                    "table": table,
                    "target_path": str(snapshot_path),
                },
            )
            raise SnapshotError(f"Failed to create snapshot: {e}") from e

    @staticmethod
    def _write_new(table_dir: Path, stem: str, content: str) -> Path:
        """Write `content` to the first free "<stem>[_n].json" in `table_dir`."""
        counter = 0
        while True:
            name = f"{stem}_{counter}.json" if counter else f"{stem}.json"
            path = table_dir / name
            try:
                with open(path, "x", encoding="utf-8") as f:
                    f.write(content)
                return path
            except FileExistsError:
                counter += 1

    def list_snapshots(self, table: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
        """
        List snapshots with metadata, grouped by table.

        Args:
            table: Restrict the listing to one table (name or ARN)

        Returns:
            Mapping of table name to snapshot info dictionaries
        """
        snapshots: Dict[str, List[Dict[str, Any]]] = {}
        if not self.snapshot_dir.exists():
            return snapshots

        if table is not None:
            table_dirs = [self.snapshot_dir / snapshot_segment(table)]
        else:
            table_dirs = sorted(p for p in self.snapshot_dir.iterdir() if p.is_dir())

        for table_dir in table_dirs:
            if not table_dir.is_dir():
                continue
            entries = []
            for snapshot_file in sorted(table_dir.glob("*.json")):
                created = self._creation_time(snapshot_file)
                entries.append(
                    {
                        "name": snapshot_file.name,
                        "path": str(snapshot_file),
                        "size": snapshot_file.stat().st_size,
                        "created": created.isoformat(),
                        "age_days": (datetime.now() - created).days,
                    }
                )
            if entries:
                snapshots[table_dir.name] = entries

        return snapshots

    def load_snapshot(self, snapshot_path: Path) -> Dict[str, Any]:
        """
        Read a snapshot back.

        Binary values are left base64 encoded.

        Raises:
            SnapshotError: If the file is missing or not a snapshot
        """
        snapshot_path = Path(snapshot_path)
        try:
            data = json.loads(snapshot_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise SnapshotError(f"Cannot read snapshot {snapshot_path}: {e}") from e
        if not isinstance(data, dict) or "items" not in data:
            raise SnapshotError(f"Not a snapshot file: {snapshot_path}")
        return data

    def cleanup_old_snapshots(self) -> int:
        """
        Remove snapshots older than the retention period.

        Returns:
            Number of snapshots removed
        """
        if not self.snapshot_dir.exists():
            return 0

        cutoff_date = datetime.now() - timedelta(days=self.retention_days)
        removed_count = 0

        for snapshot_file in self.snapshot_dir.glob("*/*.json"):
            marker_file = snapshot_file.with_suffix(".json.marker")
            try:
                if self._creation_time(snapshot_file) >= cutoff_date:
                    continue
                snapshot_file.unlink(missing_ok=True)
                marker_file.unlink(missing_ok=True)
                removed_count += 1
            except OSError as e:
                safe_logger(self.logger).log_error(
                    e, {"operation": "cleanup_snapshot", "file": str(snapshot_file)}
                )

        if removed_count > 0:
            safe_logger(self.logger).log_operation(
                "snapshot_cleanup",
                {"removed_count": removed_count, "retention_days": self.retention_days},
            )
        return removed_count

    @staticmethod
    def _creation_time(snapshot_file: Path) -> datetime:
        """Creation time from the marker file, falling back to mtime."""
        marker_file = snapshot_file.with_suffix(".json.marker")
        if marker_file.exists():
            try:
                return datetime.fromisoformat(marker_file.read_text().strip())
            except ValueError:
                pass
        return datetime.fromtimestamp(snapshot_file.stat().st_mtime)
