"""Per-type rendering of fields into value-bound HTML controls."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from .consts import COLOR_FALLBACK, TEMPLATE_FIELD
from .enums import BUILTIN_FIELD_TYPES
from .fields import BaseField
from .hooks import HookRegistry
from .i18n import gettext as _
from .markup import clean_html
from .media import Attachment, MediaResolver, NullMediaResolver
from .sanitize import sanitize_media

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

_KEY_SLUG_RE = re.compile(r"[^a-z0-9_\-]")


def build_attributes(attrs: Mapping[str, Any]) -> Markup:
    """Render extra attributes: True emits the bare key, False omits it."""
    parts = []
    for key, value in attrs.items():
        if isinstance(value, bool):
            if value:
                parts.append(escape(key))
        elif value is not None:
            parts.append(Markup('{}="{}"').format(key, value))
    return Markup(" ").join(parts)


def safe_html(value: str | None) -> Markup:
    return Markup(clean_html(value or ""))


def key_slug(value: Any) -> str:
    return _KEY_SLUG_RE.sub("", str(value).lower())


def format_number(value: Any) -> Any:
    """Show whole floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def create_environment(template_dir: Path | str | None = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(template_dir or TEMPLATE_DIR),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals["_"] = _
    env.filters["html_attrs"] = build_attributes
    env.filters["safe_html"] = safe_html
    env.filters["key_slug"] = key_slug
    return env


class FieldRenderer:
    """Render a field definition bound to a value.

    Built-in types each have a template under ``templates/fields``; other
    types are handed to the render hook registered for them.
    """

    def __init__(
        self,
        hooks: HookRegistry | None = None,
        media_resolver: MediaResolver | None = None,
        template_dir: Path | str | None = None,
    ) -> None:
        self.hooks = hooks or HookRegistry()
        self.media_resolver = media_resolver or NullMediaResolver()
        self.jinja_env = create_environment(template_dir)

    def render(self, field: BaseField, value: Any, name: str) -> Markup:
        if field.type in BUILTIN_FIELD_TYPES:
            control = self._render_builtin(field, value, name)
        else:
            control = self._render_extension(field, value, name)

        if field.description:
            control += Markup('\n<p class="description">') + safe_html(field.description) + Markup("</p>")
        return control

    def _render_builtin(self, field: BaseField, value: Any, name: str) -> Markup:
        context: dict[str, Any] = {"field": field, "name": name, "value": value}

        match field.type:
            case "radio" | "select" | "multiselect" if not field.options:
                logger.debug(f"Field '{field.id}' has no options, nothing to render")
                return Markup("")
            case "multiselect":
                selected = value if isinstance(value, (list, tuple, set)) else []
                context["selected"] = {str(item) for item in selected}
            case "radio" | "select":
                context["current"] = None if value is None else str(value)
            case "checkbox" | "toggle":
                context["checked"] = bool(value)
            case "color":
                context["value"] = value or field.default or COLOR_FALLBACK
            case "media":
                attachment_id = sanitize_media(value)
                context["value"] = attachment_id or ""
                context["attachment"] = self._resolve_media(attachment_id)
            case "number":
                context["value"] = format_number(value)
                context["extra"] = {
                    "min": field.min,
                    "max": field.max,
                    "step": field.step,
                }
            case "tel":
                context["extra"] = {"pattern": field.pattern or None}

        template = self.jinja_env.get_template(TEMPLATE_FIELD.format(type=field.type))
        return Markup(template.render(**context))

    def _resolve_media(self, attachment_id: int) -> Attachment | None:
        if not attachment_id:
            return None
        return self.media_resolver.resolve(attachment_id)

    def _render_extension(self, field: BaseField, value: Any, name: str) -> Markup:
        handler = self.hooks.renderer_for(field.type)
        if handler is None:
            logger.debug(f"No renderer registered for field type '{field.type}'")
            return Markup("")

        try:
            rendered = handler(field, name, value)
        except Exception as e:
            logger.warning(f"Renderer for field type '{field.type}' failed on '{field.id}': {e}")
            return Markup("")

        return Markup(rendered) if rendered else Markup("")
