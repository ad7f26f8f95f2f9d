"""Extension hook registry tests"""

import pytest

from settingsgen.errors import SchemaException
from settingsgen.hooks import HookRegistry


def test_decorators_register_handlers():
    hooks = HookRegistry()

    @hooks.sanitizer("slider")
    def sanitize_slider(value, field):
        return int(value)

    @hooks.renderer("slider")
    def render_slider(field, name, value):
        return f'<input type="range" name="{name}" value="{value}">'

    assert hooks.sanitizer_for("slider") is sanitize_slider
    assert hooks.renderer_for("slider") is render_slider


def test_lookup_of_unregistered_type_returns_none():
    hooks = HookRegistry()

    assert hooks.sanitizer_for("slider") is None
    assert hooks.renderer_for("slider") is None


@pytest.mark.parametrize("field_type", ["text", "multiselect", "color"])
def test_builtin_types_cannot_be_hooked(field_type):
    hooks = HookRegistry()

    with pytest.raises(SchemaException, match="built-in field type"):
        hooks.register_sanitizer(field_type, lambda value, field: value)
    with pytest.raises(SchemaException, match="built-in field type"):
        hooks.register_renderer(field_type, lambda field, name, value: "")


def test_later_registration_replaces_earlier():
    hooks = HookRegistry()
    first = lambda value, field: 1  # noqa: E731
    second = lambda value, field: 2  # noqa: E731

    hooks.register_sanitizer("slider", first)
    hooks.register_sanitizer("slider", second)

    assert hooks.sanitizer_for("slider") is second
