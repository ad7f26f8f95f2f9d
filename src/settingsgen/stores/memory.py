import copy
from typing import Any


class MemoryStore:
    """Keeps records in process memory; values are copied in and out."""

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        self._records: dict[str, dict[str, Any]] = copy.deepcopy(records or {})

    def get(self, page_id: str) -> dict[str, Any] | None:
        record = self._records.get(page_id)
        return copy.deepcopy(record) if record is not None else None

    def set(self, page_id: str, record: dict[str, Any]) -> None:
        self._records[page_id] = copy.deepcopy(record)
