"""Per-type sanitization of submitted values.

Every rule is total: values that cannot be accepted resolve to the field's
default (or an empty value for email and url) instead of raising, so the
record is well-formed after every save.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import AnyHttpUrl, EmailStr, TypeAdapter, ValidationError

from .consts import (
    COLOR_PATTERN,
    DATE_PATTERN,
    FALSY_STRINGS,
    LEADING_INT_PATTERN,
    NUMERIC_PATTERN,
    TEL_DISALLOWED_PATTERN,
)
from .fields import BaseField
from .hooks import HookRegistry
from .markup import clean_html, strip_tags
from .utils import parse_json_list

logger = logging.getLogger(__name__)

_COLOR_RE = re.compile(COLOR_PATTERN)
_DATE_RE = re.compile(DATE_PATTERN)
_NUMERIC_RE = re.compile(NUMERIC_PATTERN)
_TEL_DISALLOWED_RE = re.compile(TEL_DISALLOWED_PATTERN)
_LEADING_INT_RE = re.compile(LEADING_INT_PATTERN)
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(AnyHttpUrl)


@dataclass(frozen=True)
class SanitizeContext:
    """Per-submission inputs that are not part of the field definition.

    Attributes:
        record_exists: Whether the page already has a persisted record.
            Only the multiselect default bootstrap looks at it.
        hooks: Extension handlers for non built-in field types.
    """

    record_exists: bool = False
    hooks: Optional[HookRegistry] = None


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (list, tuple, set, dict)):
        return ""
    return str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_STRINGS
    return bool(value)


def _option_key(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def sanitize_choice(field: BaseField, value: Any) -> Any:
    key = _option_key(value)
    if key is not None and key in field.options:
        return key
    logger.debug(f"Field '{field.id}': {value!r} is not an option, using default")
    return field.default


def sanitize_multiselect(field: BaseField, value: Any, context: SanitizeContext) -> list[str]:
    if isinstance(value, (list, tuple)):
        submitted = list(value)
    elif isinstance(value, str):
        submitted = parse_json_list(value) or []
    else:
        submitted = []

    selected: list[str] = []
    for item in submitted:
        key = _option_key(item)
        if key is not None and key in field.options and key not in selected:
            selected.append(key)

    if not selected and field.default and not context.record_exists:
        # First save of the page: seed the field with its default selection.
        return list(field.default)

    return selected


def sanitize_email(value: Any) -> str:
    text = strip_tags(_as_text(value))
    if not text:
        return ""
    try:
        return _email_adapter.validate_python(text)
    except ValidationError:
        logger.debug(f"Rejected invalid email address: {text!r}")
        return ""


def sanitize_url(value: Any) -> str:
    text = strip_tags(_as_text(value))
    if not text:
        return ""
    if not _SCHEME_RE.match(text):
        text = f"http://{text}"
    try:
        return str(_url_adapter.validate_python(text))
    except ValidationError:
        logger.debug(f"Rejected invalid URL: {text!r}")
        return ""


def sanitize_number(field: BaseField, value: Any) -> Any:
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and _NUMERIC_RE.match(value):
        number = float(value)
    else:
        number = None

    if number is None or not math.isfinite(number):
        logger.debug(f"Field '{field.id}': {value!r} is not numeric, using default")
        return field.default

    if (field.min is not None and number < field.min) or (field.max is not None and number > field.max):
        logger.debug(f"Field '{field.id}': {number} is out of range, using default")
        return field.default

    return number


def sanitize_pattern(field: BaseField, value: Any, pattern: re.Pattern) -> Any:
    if isinstance(value, str) and pattern.fullmatch(value):
        return value
    logger.debug(f"Field '{field.id}': {value!r} does not match {pattern.pattern}, using default")
    return field.default


def sanitize_media(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        return abs(int(value)) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        return abs(int(match.group(1))) if match else 0
    return 0


def _sanitize_extension(field: BaseField, value: Any, context: SanitizeContext) -> Any:
    handler = context.hooks.sanitizer_for(field.type) if context.hooks else None
    if handler is not None:
        try:
            result = handler(value, field)
        except Exception as e:
            logger.warning(f"Sanitizer for field type '{field.type}' failed on '{field.id}': {e}")
            result = None
        if result is not None:
            return result

    logger.debug(f"No sanitizer result for field type '{field.type}', stripping to plain text")
    return strip_tags(_as_text(value))


def default_sanitize(field: BaseField, value: Any, context: SanitizeContext) -> Any:
    """Apply the built-in rule for field.type."""
    match field.type:
        case "text":
            return strip_tags(_as_text(value))
        case "textarea":
            return strip_tags(_as_text(value), keep_newlines=True)
        case "wysiwyg":
            return clean_html(_as_text(value))
        case "checkbox" | "toggle":
            return _as_bool(value)
        case "radio" | "select":
            return sanitize_choice(field, value)
        case "multiselect":
            return sanitize_multiselect(field, value, context)
        case "email":
            return sanitize_email(value)
        case "url":
            return sanitize_url(value)
        case "number":
            return sanitize_number(field, value)
        case "tel":
            return _TEL_DISALLOWED_RE.sub("", _as_text(value))
        case "color":
            return sanitize_pattern(field, value, _COLOR_RE)
        case "date":
            return sanitize_pattern(field, value, _DATE_RE)
        case "media":
            return sanitize_media(value)
        case "password":
            return value
        case _:
            return _sanitize_extension(field, value, context)


def sanitize(field: BaseField, value: Any, context: SanitizeContext | None = None) -> Any:
    """Sanitize a submitted value for field.

    A field-level ``sanitizer`` callable takes precedence over the built-in
    rule; if it raises, the built-in rule is applied instead.
    """
    context = context or SanitizeContext()

    if field.sanitizer is not None:
        try:
            return field.sanitizer(value, field)
        except Exception as e:
            logger.warning(f"Custom sanitizer for field '{field.id}' failed, using built-in rule: {e}")

    return default_sanitize(field, value, context)
