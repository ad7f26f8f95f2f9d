"""Settings schema: page, tabs and fields, plus the builder that assembles them."""

from __future__ import annotations

import logging
from functools import partialmethod
from typing import TYPE_CHECKING, Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .consts import DEFAULT_CAPABILITY, DEFAULT_MENU_ICON, DEFAULT_SECTION_ID
from .enums import FieldType, LocationType
from .errors import SchemaException
from .fields import BaseField, FieldDefinition, MultiselectField, parse_field

if TYPE_CHECKING:
    from .config import PageConfig

logger = logging.getLogger(__name__)


class TabDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    description: str = ""


class PageLocation(BaseModel):
    """Where the page sits in the host's navigation."""

    model_config = ConfigDict(frozen=True)

    type: LocationType = LocationType.MENU
    parent: str = ""
    position: Optional[int] = None
    icon: str = DEFAULT_MENU_ICON

    @model_validator(mode="after")
    def validate_parent(self) -> "PageLocation":
        if self.type == LocationType.SUBMENU and not self.parent:
            raise ValueError("location.parent is required for submenu pages")
        return self


class PageDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    menu_title: str = ""
    capability: str = DEFAULT_CAPABILITY
    location: PageLocation = Field(default_factory=PageLocation)

    @model_validator(mode="before")
    @classmethod
    def default_menu_title(cls, values):
        if not isinstance(values, dict):
            return values

        if not values.get("menu_title"):
            values = {**values, "menu_title": values.get("title", "")}
        return values


class SettingsSchema(BaseModel):
    """Immutable description of one settings page."""

    model_config = ConfigDict(frozen=True)

    page: PageDefinition
    tabs: list[TabDefinition] = Field(default_factory=list)
    fields: list[FieldDefinition] = Field(default_factory=list)
    default_tab: str = ""

    @property
    def page_id(self) -> str:
        return self.page.id

    @property
    def has_tabs(self) -> bool:
        return bool(self.tabs)

    def get_field(self, field_id: str) -> BaseField | None:
        return next((f for f in self.fields if f.id == field_id), None)

    def get_tab(self, tab_id: str) -> TabDefinition | None:
        return next((t for t in self.tabs if t.id == tab_id), None)

    def section_ids(self) -> list[str]:
        if self.has_tabs:
            return [tab.id for tab in self.tabs]
        return [DEFAULT_SECTION_ID]

    def fields_for_section(self, section_id: str) -> list[BaseField]:
        """Fields shown in a section.

        With tabs, a tab's section holds exactly the fields tagged with that
        tab. Without tabs there is a single default section holding the
        untagged fields.
        """
        if self.has_tabs:
            return [f for f in self.fields if f.tab == section_id]
        if section_id != DEFAULT_SECTION_ID:
            return []
        return [f for f in self.fields if not f.tab]

    def resolve_tab(self, requested: str | None) -> str:
        """Clamp a requested tab id to a known tab, falling back to the default."""
        if not self.has_tabs:
            return DEFAULT_SECTION_ID
        if requested and self.get_tab(requested) is not None:
            return requested
        return self.default_tab


def _format_validation_error(prefix: str, e: ValidationError) -> str:
    lines = [prefix]
    for error in e.errors():
        loc = " -> ".join(str(item) for item in error.get("loc", []))
        msg = error.get("msg", "")
        lines.append(f"  - {loc}: {msg}" if loc else f"  - {msg}")
    return "\n".join(lines)


class SchemaBuilder:
    """Fluent builder for a :class:`SettingsSchema`.

        schema = (
            SchemaBuilder("my_plugin", "My Plugin Settings")
            .add_tab("general", "General")
            .add_tab("advanced", "Advanced")
            .add_text_field("site_name", "Site name", tab="general")
            .add_number_field("volume", "Volume", tab="advanced", default=10)
            .build()
        )
    """

    def __init__(
        self,
        page_id: str,
        title: str,
        menu_title: str = "",
        capability: str = DEFAULT_CAPABILITY,
        location: PageLocation | dict[str, Any] | None = None,
    ) -> None:
        try:
            self._page = PageDefinition(
                id=page_id,
                title=title,
                menu_title=menu_title,
                capability=capability,
                location=location or PageLocation(),
            )
        except ValidationError as e:
            raise SchemaException(_format_validation_error(f"Invalid page '{page_id}':", e)) from e

        self._tabs: list[TabDefinition] = []
        self._fields: dict[str, BaseField] = {}
        self._default_tab = ""

    def enable_tabs(self, default_tab: str = "") -> "SchemaBuilder":
        """Use default_tab as the default instead of the first tab added.

        Tabs are active as soon as one is added with :meth:`add_tab`; this
        call only picks which of them is shown when the request names none.
        """
        if default_tab:
            self._default_tab = default_tab
        return self

    def add_tab(self, tab_id: str, title: str, description: str = "") -> "SchemaBuilder":
        if any(tab.id == tab_id for tab in self._tabs):
            raise SchemaException(f"Duplicate tab id '{tab_id}' on page '{self._page.id}'")

        self._tabs.append(TabDefinition(id=tab_id, title=title, description=description))
        if not self._default_tab:
            self._default_tab = tab_id
        return self

    def add_definition(self, field: BaseField) -> "SchemaBuilder":
        if field.id in self._fields:
            raise SchemaException(f"Duplicate field id '{field.id}' on page '{self._page.id}'")
        self._fields[field.id] = field
        return self

    def add_field(
        self,
        field_id: str,
        title: str,
        field_type: FieldType | str,
        tab: str = "",
        **args: Any,
    ) -> "SchemaBuilder":
        data = {**args, "id": field_id, "title": title, "type": field_type, "tab": tab}
        try:
            field = parse_field(data)
        except ValidationError as e:
            raise SchemaException(_format_validation_error(f"Invalid field '{field_id}':", e)) from e
        return self.add_definition(field)

    def _add_typed_field(
        self, field_type: FieldType, field_id: str, title: str, tab: str = "", **args: Any
    ) -> "SchemaBuilder":
        return self.add_field(field_id, title, field_type, tab, **args)

    add_text_field = partialmethod(_add_typed_field, FieldType.TEXT)
    add_textarea_field = partialmethod(_add_typed_field, FieldType.TEXTAREA)
    add_wysiwyg_field = partialmethod(_add_typed_field, FieldType.WYSIWYG)
    add_checkbox_field = partialmethod(_add_typed_field, FieldType.CHECKBOX)
    add_toggle_field = partialmethod(_add_typed_field, FieldType.TOGGLE)
    add_radio_field = partialmethod(_add_typed_field, FieldType.RADIO)
    add_select_field = partialmethod(_add_typed_field, FieldType.SELECT)
    add_media_field = partialmethod(_add_typed_field, FieldType.MEDIA)
    add_email_field = partialmethod(_add_typed_field, FieldType.EMAIL)
    add_url_field = partialmethod(_add_typed_field, FieldType.URL)
    add_password_field = partialmethod(_add_typed_field, FieldType.PASSWORD)
    add_number_field = partialmethod(_add_typed_field, FieldType.NUMBER)
    add_tel_field = partialmethod(_add_typed_field, FieldType.TEL)
    add_date_field = partialmethod(_add_typed_field, FieldType.DATE)
    add_color_field = partialmethod(_add_typed_field, FieldType.COLOR)

    def add_multiselect_field(
        self, field_id: str, title: str, tab: str = "", **args: Any
    ) -> "SchemaBuilder":
        # A scalar default becomes a one-item list, a missing one an empty list.
        default = args.pop("default", None)
        if default is None:
            default = []
        elif not isinstance(default, (list, tuple)):
            default = [default]
        return self.add_field(field_id, title, FieldType.MULTISELECT, tab, default=list(default), **args)

    def set_multiselect_default(self, field_id: str, values: Iterable[str]) -> "SchemaBuilder":
        """Replace a multiselect field's default; silently ignores other fields."""
        field = self._fields.get(field_id)
        if isinstance(field, MultiselectField):
            self._fields[field_id] = field.model_copy(update={"default": [str(v) for v in values]})
        return self

    def build(self) -> SettingsSchema:
        tab_ids = {tab.id for tab in self._tabs}
        if self._tabs and self._default_tab not in tab_ids:
            raise SchemaException(
                f"Default tab '{self._default_tab}' is not a tab of page '{self._page.id}'"
            )

        for field in self._fields.values():
            if self._tabs and field.tab not in tab_ids:
                logger.warning(
                    f"Field '{field.id}' on page '{self._page.id}' belongs to unknown tab "
                    f"'{field.tab}' and will not be shown"
                )
            elif not self._tabs and field.tab:
                logger.warning(
                    f"Field '{field.id}' on page '{self._page.id}' is tagged with tab "
                    f"'{field.tab}' but the page has no tabs; it will not be shown"
                )

        return SettingsSchema(
            page=self._page,
            tabs=list(self._tabs),
            fields=list(self._fields.values()),
            default_tab=self._default_tab if self._tabs else "",
        )

    @classmethod
    def from_config(cls, page_config: "PageConfig") -> SettingsSchema:
        builder = cls(
            page_config.id,
            page_config.title,
            menu_title=page_config.menu_title,
            capability=page_config.capability,
            location=page_config.location,
        )
        for tab in page_config.tabs:
            builder.add_tab(tab.id, tab.title, tab.description)
        builder.enable_tabs(page_config.default_tab)
        for field in page_config.fields:
            builder.add_definition(field)
        return builder.build()
