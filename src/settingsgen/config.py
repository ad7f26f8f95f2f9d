"""Configuration file loading and validation."""

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import DEFAULT_CAPABILITY, LOG_FILE_DEFAULT
from .enums import StoreType
from .errors import ConfigException
from .fields import FieldDefinition
from .media import Attachment, MappingMediaResolver
from .schema import PageLocation

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Settings record storage. An empty path uses the per-type default."""

    type: StoreType = StoreType.FILE
    path: str = ""


class WebConfig(BaseModel):
    """Web service configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    capabilities: List[str] = Field(default_factory=lambda: [DEFAULT_CAPABILITY])


class LogConfig(BaseModel):
    file: str = LOG_FILE_DEFAULT


class AttachmentConfig(BaseModel):
    url: str
    mime_type: str


class MediaConfig(BaseModel):
    attachments: dict[int, AttachmentConfig] = Field(default_factory=dict)

    def create_resolver(self) -> MappingMediaResolver:
        return MappingMediaResolver(
            {
                attachment_id: Attachment(url=item.url, mime_type=item.mime_type)
                for attachment_id, item in self.attachments.items()
            }
        )


class TabConfig(BaseModel):
    id: str
    title: str
    description: str = ""


class PageConfig(BaseModel):
    """One ``[[pages]]`` table: the page, its tabs and its fields."""

    id: str
    title: str
    menu_title: str = ""
    capability: str = DEFAULT_CAPABILITY
    location: PageLocation = Field(default_factory=PageLocation)
    default_tab: str = ""
    tabs: List[TabConfig] = Field(default_factory=list)
    fields: List[FieldDefinition] = Field(default_factory=list)


class Config(BaseSettings):
    """Application configuration."""

    language: str = Field(default="en")

    store: StoreConfig = Field(default_factory=StoreConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)
    pages: List[PageConfig] = Field(default_factory=list)

    model_config = SettingsConfigDict(
        env_prefix="SETTINGSGEN_",
        env_nested_delimiter="__",
    )

    @field_validator("pages")
    @classmethod
    def validate_unique_page_ids(cls, v: List[PageConfig]) -> List[PageConfig]:
        seen: set[str] = set()
        for page in v:
            if page.id in seen:
                raise ValueError(f"Duplicate page id: {page.id}")
            seen.add(page.id)
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="SETTINGSGEN_",
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e
        except ValueError as e:
            raise ConfigException(f"Invalid configuration file {config_path}: {e}") from e

    def get_page(self, page_id: str) -> Optional[PageConfig]:
        return next((page for page in self.pages if page.id == page_id), None)
