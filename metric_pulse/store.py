"""Record store interface and a JSON-file implementation."""
import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from metric_pulse.analyzers.records import align_timestamp
from metric_pulse.models import MetricRecord


class RecordStore(Protocol):
    """Source of raw metric records, queried by owner and time range.

    Production stores live outside this package; anything with this method
    can feed the report engine.
    """

    def list_records(
        self,
        owner_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[MetricRecord]: ...


class JsonRecordStore:
    """Reads a JSON array of record documents, or ``{"records": [...]}``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[MetricRecord]:
        data = json.loads(self.path.read_text())
        if isinstance(data, dict):
            data = data.get("records", [])
        return [MetricRecord.model_validate(doc) for doc in data]

    def list_records(
        self,
        owner_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[MetricRecord]:
        records = self._load()
        if owner_id is not None:
            records = [r for r in records if r.owner_id == owner_id]
        if start is not None:
            records = [r for r in records if align_timestamp(r.published_at, start) >= start]
        if end is not None:
            records = [r for r in records if align_timestamp(r.published_at, end) <= end]
        return records
