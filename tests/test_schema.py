"""Schema builder and tab partition tests"""

import pytest

from settingsgen.config import PageConfig
from settingsgen.consts import DEFAULT_SECTION_ID
from settingsgen.enums import LocationType
from settingsgen.errors import SchemaException
from settingsgen.schema import SchemaBuilder


def test_first_tab_is_default(schema):
    assert schema.has_tabs is True
    assert schema.default_tab == "general"
    assert schema.section_ids() == ["general", "advanced"]


def test_enable_tabs_overrides_default():
    schema = (
        SchemaBuilder("p", "Page")
        .add_tab("general", "General")
        .add_tab("advanced", "Advanced")
        .enable_tabs("advanced")
        .build()
    )

    assert schema.default_tab == "advanced"


def test_tabs_are_active_without_enable_tabs():
    schema = SchemaBuilder("p", "Page").add_tab("general", "General").build()

    assert schema.has_tabs is True
    assert schema.default_tab == "general"


def test_unknown_default_tab_fails_build():
    builder = SchemaBuilder("p", "Page").add_tab("general", "General").enable_tabs("missing")

    with pytest.raises(SchemaException, match="missing"):
        builder.build()


def test_page_without_tabs_has_single_default_section():
    schema = (
        SchemaBuilder("p", "Page")
        .add_text_field("shown", "Shown")
        .add_text_field("hidden", "Hidden", tab="general")
        .build()
    )

    assert schema.has_tabs is False
    assert schema.default_tab == ""
    assert schema.section_ids() == [DEFAULT_SECTION_ID]
    assert [f.id for f in schema.fields_for_section(DEFAULT_SECTION_ID)] == ["shown"]
    assert schema.resolve_tab("general") == DEFAULT_SECTION_ID


def test_tab_partition(schema):
    general = [f.id for f in schema.fields_for_section("general")]
    advanced = [f.id for f in schema.fields_for_section("advanced")]

    assert general == ["site_name", "colors"]
    assert advanced == ["volume", "api_key"]
    assert not set(general) & set(advanced)


@pytest.mark.parametrize(
    "requested, expected",
    [(None, "general"), ("", "general"), ("advanced", "advanced"), ("bogus", "general")],
)
def test_resolve_tab_clamps_to_known_tabs(schema, requested, expected):
    assert schema.resolve_tab(requested) == expected


def test_duplicate_field_id_is_rejected():
    builder = SchemaBuilder("p", "Page").add_text_field("name", "Name")

    with pytest.raises(SchemaException, match="Duplicate field id 'name'"):
        builder.add_email_field("name", "Name again")


def test_duplicate_tab_id_is_rejected():
    builder = SchemaBuilder("p", "Page").add_tab("general", "General")

    with pytest.raises(SchemaException, match="Duplicate tab id"):
        builder.add_tab("general", "General again")


def test_invalid_field_payload_raises_schema_exception():
    with pytest.raises(SchemaException, match="Invalid field 'notes'"):
        SchemaBuilder("p", "Page").add_textarea_field("notes", "Notes", rows=0)


def test_add_multiselect_field_coerces_scalar_default():
    schema = (
        SchemaBuilder("p", "Page")
        .add_multiselect_field("one", "One", options=["a", "b"], default="a")
        .add_multiselect_field("none", "None", options=["a", "b"])
        .build()
    )

    assert schema.get_field("one").default == ["a"]
    assert schema.get_field("none").default == []


def test_set_multiselect_default_only_touches_multiselect_fields():
    schema = (
        SchemaBuilder("p", "Page")
        .add_multiselect_field("colors", "Colors", options=["red", "blue"])
        .add_text_field("name", "Name", default="x")
        .set_multiselect_default("colors", ["blue"])
        .set_multiselect_default("name", ["blue"])
        .set_multiselect_default("missing", ["blue"])
        .build()
    )

    assert schema.get_field("colors").default == ["blue"]
    assert schema.get_field("name").default == "x"
    assert schema.get_field("missing") is None


def test_menu_title_defaults_to_title():
    schema = SchemaBuilder("p", "Plugin Settings").build()

    assert schema.page.menu_title == "Plugin Settings"
    assert schema.page.capability == "manage_options"
    assert schema.page.location.type == LocationType.MENU


def test_submenu_requires_parent():
    with pytest.raises(SchemaException, match="Invalid page 'p'"):
        SchemaBuilder("p", "Page", location={"type": "submenu"})


def test_from_config_builds_schema():
    page_config = PageConfig(
        id="acme",
        title="Acme",
        default_tab="style",
        tabs=[{"id": "main", "title": "Main"}, {"id": "style", "title": "Style"}],
        fields=[
            {"id": "name", "title": "Name", "type": "text", "tab": "main"},
            {"id": "accent", "title": "Accent", "type": "color", "tab": "style", "default": "#ff0000"},
        ],
    )

    schema = SchemaBuilder.from_config(page_config)

    assert schema.page_id == "acme"
    assert schema.default_tab == "style"
    assert [f.id for f in schema.fields_for_section("style")] == ["accent"]
