"""Extension points for field types outside the built-in set."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .enums import BUILTIN_FIELD_TYPES
from .errors import SchemaException

logger = logging.getLogger(__name__)

SanitizeHandler = Callable[[Any, Any], Any]
RenderHandler = Callable[[Any, str, Any], Optional[str]]


class HookRegistry:
    """Maps an extension field type to its sanitize and render handlers.

    A sanitize handler receives ``(raw_value, field)`` and returns the
    sanitized value, or ``None`` to fall back to plain-text stripping.
    A render handler receives ``(field, name, value)`` and returns markup,
    or ``None`` to render nothing.

    Handlers are looked up at dispatch time and only for types the engine
    does not handle itself.

        hooks = HookRegistry()

        @hooks.sanitizer("slider")
        def sanitize_slider(value, field):
            ...
    """

    def __init__(self) -> None:
        self._sanitizers: dict[str, SanitizeHandler] = {}
        self._renderers: dict[str, RenderHandler] = {}

    @staticmethod
    def _check_type(field_type: str) -> None:
        if field_type in BUILTIN_FIELD_TYPES:
            raise SchemaException(
                f"'{field_type}' is a built-in field type and cannot be handled by an extension"
            )

    def register_sanitizer(self, field_type: str, handler: SanitizeHandler) -> None:
        self._check_type(field_type)
        self._sanitizers[field_type] = handler
        logger.debug(f"Registered sanitizer for field type '{field_type}'")

    def register_renderer(self, field_type: str, handler: RenderHandler) -> None:
        self._check_type(field_type)
        self._renderers[field_type] = handler
        logger.debug(f"Registered renderer for field type '{field_type}'")

    def sanitizer(self, field_type: str):
        def decorator(func: SanitizeHandler) -> SanitizeHandler:
            self.register_sanitizer(field_type, func)
            return func

        return decorator

    def renderer(self, field_type: str):
        def decorator(func: RenderHandler) -> RenderHandler:
            self.register_renderer(field_type, func)
            return func

        return decorator

    def sanitizer_for(self, field_type: str) -> SanitizeHandler | None:
        return self._sanitizers.get(field_type)

    def renderer_for(self, field_type: str) -> RenderHandler | None:
        return self._renderers.get(field_type)
