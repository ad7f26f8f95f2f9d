import pytest

from settingsgen.engine import SettingsEngine
from settingsgen.schema import SchemaBuilder
from settingsgen.stores import MemoryStore

COLOR_OPTIONS = {"red": "Red", "green": "Green", "blue": "Blue"}


@pytest.fixture
def schema():
    return (
        SchemaBuilder("acme_settings", "Acme Settings")
        .add_tab("general", "General", "Basic site options.")
        .add_tab("advanced", "Advanced")
        .add_text_field("site_name", "Site name", tab="general", default="Acme")
        .add_multiselect_field("colors", "Colors", tab="general", options=COLOR_OPTIONS, default="red")
        .add_number_field("volume", "Volume", tab="advanced", default=10)
        .add_password_field("api_key", "API key", tab="advanced")
        .build()
    )


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(schema, store):
    return SettingsEngine(schema, store)
