import json
import logging
import re
from pathlib import Path
from typing import Any

from ..errors import StoreException
from ..utils import atomic_write_text

logger = logging.getLogger(__name__)

_PAGE_ID_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")


class FileStore:
    """One JSON document per page under a directory."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def _path(self, page_id: str) -> Path:
        if not _PAGE_ID_RE.match(page_id):
            raise StoreException(f"Page id cannot be used as a file name: {page_id!r}")
        return self._directory / f"{page_id}.json"

    def get(self, page_id: str) -> dict[str, Any] | None:
        path = self._path(page_id)
        if not path.exists():
            return None

        try:
            record = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreException(f"Failed to read settings from {path}: {e}") from e

        if not isinstance(record, dict):
            raise StoreException(f"Settings file {path} does not hold an object")
        return record

    def set(self, page_id: str, record: dict[str, Any]) -> None:
        path = self._path(page_id)
        content = json.dumps(record, indent=2, ensure_ascii=False, sort_keys=True)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_text(path, content)
        except OSError as e:
            raise StoreException(f"Failed to write settings to {path}: {e}") from e

        logger.debug(f"Settings for page '{page_id}' written to {path}")
