#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for dynamo-rename commands.

Functions:
    setup_logger: Initialize RenameLogger for CLI operations

Classes:
    RenameStats: Counters for one scan/rewrite/write-back run

Usage:
    from dynrename.core.cli import setup_logger, RenameStats

    logger = setup_logger(log_dir, "rename")
    stats = RenameStats()
    stats.records_scanned = len(records)
    click.echo(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from dynrename.core.logging_manager import RenameLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> RenameLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a RenameLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g. 'rename')

    Returns:
        Configured RenameLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return RenameLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class RenameStats:
    """
    Statistics for a rename run.

    Attributes:
        records_scanned: Items read from the table
        replacements: Field renames performed in memory
        overwrites: Renames that clobbered an existing destination field
        items_dirty: Items whose rewritten form differs from the original
        items_written: Items durably written back
        start_time: Run start timestamp
    """
    records_scanned: int = 0
    replacements: int = 0
    overwrites: int = 0
    items_dirty: int = 0
    items_written: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        for name in (
            "records_scanned",
            "replacements",
            "overwrites",
            "items_dirty",
            "items_written",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def duration(self) -> float:
        """
        Get elapsed time in seconds (cached after first call).

        Returns:
            Seconds elapsed since start_time
        """
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Get formatted summary string."""
        return (
            f"{self.records_scanned} scanned, "
            f"{self.replacements} replacements, "
            f"{self.overwrites} overwrites, "
            f"{self.items_written}/{self.items_dirty} items written, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for log details."""
        return {
            "records_scanned": self.records_scanned,
            "replacements": self.replacements,
            "overwrites": self.overwrites,
            "items_dirty": self.items_dirty,
            "items_written": self.items_written,
            "duration": self.duration(),
        }
