import logging
from datetime import datetime
from typing import Any

from peewee import PeeweeException

from ..errors import StoreException
from ..models import UTC, SettingsRecord

logger = logging.getLogger(__name__)


class DBStore:
    """Records in the ``settings_records`` table; requires :func:`settingsgen.db.init_db`."""

    def get(self, page_id: str) -> dict[str, Any] | None:
        try:
            row = SettingsRecord.get_or_none(SettingsRecord.page_id == page_id)
        except PeeweeException as e:
            raise StoreException(f"Failed to load settings for page '{page_id}': {e}") from e
        return dict(row.data) if row is not None else None

    def set(self, page_id: str, record: dict[str, Any]) -> None:
        try:
            with SettingsRecord._meta.database.atomic():
                (
                    SettingsRecord.insert(page_id=page_id, data=record)
                    .on_conflict(
                        conflict_target=[SettingsRecord.page_id],
                        update={
                            SettingsRecord.data: record,
                            SettingsRecord.updated_at: datetime.now(UTC),
                        },
                    )
                    .execute()
                )
        except PeeweeException as e:
            raise StoreException(f"Failed to save settings for page '{page_id}': {e}") from e

        logger.debug(f"Settings for page '{page_id}' saved to database")
