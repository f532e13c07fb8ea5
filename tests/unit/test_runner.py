#!/usr/bin/env python3
"""
test_runner.py
--------------
Tests for the plan/confirm/commit orchestration.

Usage:
    python -m pytest tests/unit/test_runner.py -v
"""
from unittest.mock import MagicMock

import pytest

from conftest import FakeTable, M, S, client_error
from dynrename.core.exceptions import RenameCanceled, SnapshotError, WriteError
from dynrename.core.snapshot_manager import SnapshotManager
from dynrename.rename.rules import parse_replacements
from dynrename.runner import RenamePlan, execute, plan


@pytest.fixture
def rules():
    return parse_replacements(["fullname>name", "*address.zip>*address.postcode"])


class TestPlan:
    """Phase 1: in-memory rewrite."""

    def test_collects_changed_items_only(self, sample_items, rules):
        rename_plan = plan(sample_items, rules)

        assert rename_plan.scanned == 3
        assert [original["id"] for original, _ in rename_plan.dirty] == [S("1"), S("2")]
        assert rename_plan.result.replacements == 3
        assert rename_plan.result.overwrites == 0

    def test_pairs_keep_original_untouched(self, sample_items, rules):
        rename_plan = plan(sample_items, rules)
        original, mutated = rename_plan.dirty[0]
        assert original is sample_items[0]
        assert "fullname" in original
        assert mutated["name"] == S("Ada Lovelace")
        assert mutated["profile"]["M"]["address"] == M(postcode=S("10001"))

    def test_no_matches(self, sample_items):
        rename_plan = plan(sample_items, parse_replacements(["missing>x"]))
        assert not rename_plan.has_changes
        assert rename_plan.dirty == []

    def test_self_rename_counts_but_not_dirty(self):
        rename_plan = plan([{"id": S("1"), "a": S("x")}], parse_replacements(["a>a"]))
        assert rename_plan.has_changes
        assert rename_plan.dirty == []

    def test_summary(self, sample_items):
        items = sample_items + [{"id": S("4"), "fullname": S("x"), "name": S("y")}]
        rename_plan = plan(items, parse_replacements(["fullname>name"]))
        assert rename_plan.summary() == (
            "prepared to make 3 replacement(s) across 3 item(s) "
            "with 1 overwritten key(s)..."
        )


class TestExecute:
    """Phase 2: confirmation gate and write-back."""

    def test_nothing_to_do_skips_confirmation(self):
        confirm = MagicMock(return_value=True)
        client = MagicMock()
        assert execute(RenamePlan(scanned=5), client, "users", confirm) == 0
        confirm.assert_not_called()
        client.put_item.assert_not_called()

    def test_declined_confirmation_writes_nothing(self, sample_items, rules):
        table = FakeTable(sample_items)
        with pytest.raises(RenameCanceled):
            execute(plan(sample_items, rules), table, "users", confirm=lambda: False)
        assert table.put_calls == []

    def test_confirmed_plan_is_written(self, sample_items, rules):
        table = FakeTable(sample_items)
        rename_plan = plan(sample_items, rules)

        written = execute(rename_plan, table, "users", confirm=lambda: True)

        assert written == 2
        assert table.get("1")["name"] == S("Ada Lovelace")
        assert "fullname" not in table.get("2")
        assert table.get("3") == sample_items[2]

    def test_snapshot_taken_before_writes(self, sample_items, rules, tmp_path):
        table = FakeTable(sample_items)
        manager = SnapshotManager(tmp_path / "snapshots")
        paths = []

        execute(
            plan(sample_items, rules),
            table,
            "users",
            confirm=lambda: True,
            snapshots=manager,
            on_snapshot=paths.append,
        )

        assert len(paths) == 1
        data = manager.load_snapshot(paths[0])
        assert data["count"] == 2
        assert data["items"] == sample_items[:2]

    def test_snapshot_failure_prevents_writes(self, sample_items, rules):
        table = FakeTable(sample_items)
        manager = MagicMock(spec=SnapshotManager)
        manager.create_snapshot.side_effect = SnapshotError("disk full")

        with pytest.raises(SnapshotError):
            execute(plan(sample_items, rules), table, "users", lambda: True, snapshots=manager)

        assert table.put_calls == []

    def test_partial_failure_count(self, rules):
        items = [{"id": S(str(i)), "fullname": S(f"n{i}")} for i in range(1, 5)]
        table = FakeTable(items, fail_puts={3: client_error("InternalServerError", "boom")})

        with pytest.raises(WriteError) as exc_info:
            execute(plan(items, rules), table, "users", confirm=lambda: True)

        assert exc_info.value.written == 2
        assert len(table.put_calls) == 3

    def test_concurrent_change_between_scan_and_write(self, sample_items, rules):
        table = FakeTable(sample_items)
        rename_plan = plan(sample_items, rules)
        table.get("2")["fullname"] = S("Changed Elsewhere")

        with pytest.raises(WriteError) as exc_info:
            execute(rename_plan, table, "users", confirm=lambda: True)

        assert "concurrent modification detected" in str(exc_info.value)
        assert exc_info.value.written == 1
        assert table.get("2")["fullname"] == S("Changed Elsewhere")

    def test_snapshot_with_table_arn(self, sample_items, rules, tmp_path):
        arn = "arn:aws:dynamodb:us-east-1:123456789012:table/users"
        table = FakeTable(sample_items, table_name=arn)
        paths = []

        written = execute(
            plan(sample_items, rules),
            table,
            arn,
            confirm=lambda: True,
            snapshots=SnapshotManager(tmp_path / "snapshots"),
            on_snapshot=paths.append,
        )

        assert written == 2
        assert paths[0].parent == tmp_path / "snapshots" / "users"
