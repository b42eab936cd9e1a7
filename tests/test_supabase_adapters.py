"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from nutrition_labels.adapters.supabase_record_repository import (
    SupabaseNutritionRecordRepository,
)
from nutrition_labels.domain.warnings import Severity
from nutrition_labels.services.normalizer import normalize, to_storage_payload
from tests.conftest import make_analysis_payload


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_limit: int | None = None
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _row(product_id: str, created_at: str) -> dict[str, object]:
    payload = to_storage_payload(normalize(make_analysis_payload()))
    payload["warnings"] = [
        {"type": "warning", "message": "Contains SULFITES", "severity": "high"},
        {"type": "bogus", "message": "skipped", "severity": "low"},
        "not-a-dict",
    ]
    return {
        "id": str(uuid4()),
        "product_id": product_id,
        "created_at": created_at,
        **payload,
    }


def test_save_record_inserts_payload() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutritional_data")
    row = _row("product-1", "2024-01-01T00:00:00+00:00")
    table.queue("insert", [row])
    repository = SupabaseNutritionRecordRepository(client)

    payload = to_storage_payload(normalize(make_analysis_payload()))
    stored = repository.save_record("product-1", payload)

    assert table.last_payload["product_id"] == "product-1"
    assert table.last_payload["basic_nutrition"]["servings"] == 4
    assert str(stored.id) == row["id"]
    assert stored.record.calories_total == 1200
    assert stored.created_at.year == 2024
    assert len(stored.warnings) == 1
    assert stored.warnings[0].severity == Severity.HIGH


def test_save_record_raises_without_data() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseNutritionRecordRepository(client)

    with pytest.raises(RuntimeError, match="Failed to save nutrition record"):
        repository.save_record("product-1", {})


def test_get_latest_queries_newest_first() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutritional_data")
    table.queue("select", [_row("product-1", "2024-02-01T10:00:00+00:00")])
    repository = SupabaseNutritionRecordRepository(client)

    latest = repository.get_latest("product-1")

    assert latest is not None
    assert latest.product_id == "product-1"
    assert table.last_filters == [("product_id", "product-1")]
    assert table.last_order == ("created_at", True)
    assert table.last_limit == 1
    assert repository.get_latest("product-1") is None


def test_list_history_returns_rows() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutritional_data")
    table.queue(
        "select",
        [
            _row("product-1", "2024-02-02T10:00:00+00:00"),
            _row("product-1", "2024-02-01T10:00:00+00:00"),
        ],
    )
    repository = SupabaseNutritionRecordRepository(client)

    history = repository.list_history("product-1", limit=5)

    assert [entry.created_at.day for entry in history] == [2, 1]
    assert table.last_limit == 5
