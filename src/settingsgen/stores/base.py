from typing import Any, Protocol


class SettingsStore(Protocol):
    def get(self, page_id: str) -> dict[str, Any] | None: ...

    def set(self, page_id: str, record: dict[str, Any]) -> None: ...
