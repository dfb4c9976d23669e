"""Tests for common.serialization module."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from common.serialization import serialize_dataclass


@dataclass
class SampleData:
    name: str
    value: int


@dataclass
class SampleWithDates:
    name: str
    run_date: date
    created_at: datetime


@dataclass
class SampleChild:
    day: date


@dataclass
class SampleWithNested:
    name: str
    metadata: dict
    children: list[SampleChild] = field(default_factory=list)


class TestSerializeDataclass:
    def test_basic_dataclass_to_dict(self) -> None:
        obj = SampleData(name="test", value=42)
        assert serialize_dataclass(obj) == {"name": "test", "value": 42}

    def test_date_and_datetime_fields_to_iso_string(self) -> None:
        dt = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        obj = SampleWithDates(name="test", run_date=date(2024, 1, 1), created_at=dt)
        result = serialize_dataclass(obj)
        assert result["run_date"] == "2024-01-01"
        assert result["created_at"] == "2024-01-01T12:00:00+00:00"

    def test_nested_dict_and_list_handling(self) -> None:
        dt = datetime(2024, 6, 15, 8, 30, 0, tzinfo=timezone.utc)
        obj = SampleWithNested(
            name="test",
            metadata={"updated_at": dt},
            children=[SampleChild(day=date(2024, 6, 15))],
        )
        result = serialize_dataclass(obj)
        assert result["metadata"]["updated_at"] == "2024-06-15T08:30:00+00:00"
        assert result["children"] == [{"day": "2024-06-15"}]
