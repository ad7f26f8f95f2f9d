"""Attachment lookup used to preview media fields."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Mapping, Protocol
from urllib.parse import urlsplit


@dataclass(frozen=True, slots=True)
class Attachment:
    url: str
    mime_type: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    @property
    def filename(self) -> str:
        return PurePosixPath(urlsplit(self.url).path).name


class MediaResolver(Protocol):
    def resolve(self, attachment_id: int) -> Attachment | None: ...


class NullMediaResolver:
    """Resolves nothing; media fields render without a preview."""

    def resolve(self, attachment_id: int) -> Attachment | None:
        return None


class MappingMediaResolver:
    def __init__(self, attachments: Mapping[int, Attachment]) -> None:
        self._attachments = dict(attachments)

    def resolve(self, attachment_id: int) -> Attachment | None:
        return self._attachments.get(attachment_id)
