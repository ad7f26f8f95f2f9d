"""The settings engine: validate, merge, persist and render one page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from markupsafe import Markup

from .consts import TEMPLATE_PAGE, TEMPLATE_SECTION
from .fields import BaseField
from .hooks import HookRegistry
from .render import FieldRenderer
from .sanitize import SanitizeContext, sanitize
from .schema import SettingsSchema
from .stores.base import SettingsStore
from .utils import mask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Per-request inputs handed in by the host instead of read from globals."""

    tab: str | None = None
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


@dataclass(frozen=True)
class FieldRow:
    field: BaseField
    control: Markup


class SettingsEngine:
    """Binds a schema to a store.

    The record is only written through :meth:`save`; rendering reads it and
    never modifies it.
    """

    def __init__(
        self,
        schema: SettingsSchema,
        store: SettingsStore,
        *,
        hooks: HookRegistry | None = None,
        renderer: FieldRenderer | None = None,
    ) -> None:
        self.schema = schema
        self.store = store
        self.hooks = hooks or (renderer.hooks if renderer else HookRegistry())
        self.renderer = renderer or FieldRenderer(hooks=self.hooks)

    @property
    def page_id(self) -> str:
        return self.schema.page_id

    def get_record(self) -> dict[str, Any] | None:
        return self.store.get(self.page_id)

    def validate(self, submitted: Mapping[str, Any], *, record_exists: bool = False) -> dict[str, Any]:
        """Sanitize the submitted values of known fields.

        Ids that are not fields of the schema are ignored; fields missing from
        the submission are left out of the result.
        """
        context = SanitizeContext(record_exists=record_exists, hooks=self.hooks)
        sanitized: dict[str, Any] = {}

        for schema_field in self.schema.fields:
            if schema_field.id not in submitted:
                continue
            value = sanitize(schema_field, submitted[schema_field.id], context)
            sanitized[schema_field.id] = value
            logger.debug(f"[{self.page_id}] {schema_field.id} = {self._loggable(schema_field, value)}")

        ignored = set(submitted) - set(sanitized)
        if ignored:
            logger.debug(f"[{self.page_id}] Ignored unknown fields: {', '.join(sorted(ignored))}")

        return sanitized

    @staticmethod
    def merge(existing: Mapping[str, Any] | None, sanitized: Mapping[str, Any]) -> dict[str, Any]:
        record = dict(existing or {})
        record.update(sanitized)
        return record

    def save(self, submitted: Mapping[str, Any]) -> dict[str, Any]:
        """Validate submitted values and merge them into the stored record."""
        existing = self.store.get(self.page_id)
        sanitized = self.validate(submitted, record_exists=existing is not None)
        record = self.merge(existing, sanitized)
        self.store.set(self.page_id, record)

        logger.info(
            f"Saved settings for page '{self.page_id}' "
            f"({len(sanitized)} field(s) updated, {len(record)} stored)"
        )
        return record

    def bound_value(self, schema_field: BaseField, record: Mapping[str, Any] | None) -> Any:
        record = record or {}
        if schema_field.type == "multiselect":
            stored = record.get(schema_field.id)
            return stored if stored else schema_field.default
        return record.get(schema_field.id, schema_field.default)

    def field_name(self, schema_field: BaseField) -> str:
        return f"{self.page_id}[{schema_field.id}]"

    def render_field(self, field_id: str, record: Mapping[str, Any] | None = None) -> Markup:
        schema_field = self.schema.get_field(field_id)
        if schema_field is None:
            logger.debug(f"[{self.page_id}] No field '{field_id}' to render")
            return Markup("")

        if record is None:
            record = self.get_record()
        value = self.bound_value(schema_field, record)
        return self.renderer.render(schema_field, value, self.field_name(schema_field))

    def render_section(self, section_id: str, record: Mapping[str, Any] | None = None) -> Markup:
        if record is None:
            record = self.get_record()

        rows = [
            FieldRow(
                field=schema_field,
                control=self.renderer.render(
                    schema_field,
                    self.bound_value(schema_field, record),
                    self.field_name(schema_field),
                ),
            )
            for schema_field in self.schema.fields_for_section(section_id)
        ]
        template = self.renderer.jinja_env.get_template(TEMPLATE_SECTION)
        return Markup(
            template.render(
                section_id=section_id,
                tab=self.schema.get_tab(section_id),
                rows=rows,
            )
        )

    def render_page(
        self,
        context: RequestContext | None = None,
        *,
        form_action: str = "",
        updated: bool = False,
    ) -> Markup:
        context = context or RequestContext()
        active_tab = self.schema.resolve_tab(context.tab)
        record = self.get_record()

        template = self.renderer.jinja_env.get_template(TEMPLATE_PAGE)
        return Markup(
            template.render(
                page=self.schema.page,
                tabs=self.schema.tabs,
                active_tab=active_tab,
                section=self.render_section(active_tab, record or {}),
                form_action=form_action,
                updated=updated,
            )
        )

    @staticmethod
    def _loggable(schema_field: BaseField, value: Any) -> str:
        if schema_field.type == "password":
            return mask(value if isinstance(value, str) else None)
        return repr(value)
