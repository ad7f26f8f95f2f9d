import json

import pytest

from settingsgen.errors import StoreException
from settingsgen.stores import FileStore


def test_missing_page_returns_none(tmp_path):
    assert FileStore(tmp_path).get("acme") is None


def test_set_writes_json_document(tmp_path):
    store = FileStore(tmp_path / "settings")

    store.set("acme", {"volume": 7.5, "colors": ["red"], "name": "Café"})

    path = tmp_path / "settings" / "acme.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"volume": 7.5, "colors": ["red"], "name": "Café"}
    assert store.get("acme") == {"volume": 7.5, "colors": ["red"], "name": "Café"}


def test_set_overwrites(tmp_path):
    store = FileStore(tmp_path)

    store.set("acme", {"volume": 1})
    store.set("acme", {"volume": 2})

    assert store.get("acme") == {"volume": 2}


@pytest.mark.parametrize("page_id", ["../escape", "a/b", "", ".hidden"])
def test_unsafe_page_ids_are_rejected(tmp_path, page_id):
    with pytest.raises(StoreException):
        FileStore(tmp_path).get(page_id)


def test_corrupt_document(tmp_path):
    (tmp_path / "acme.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreException, match="Failed to read"):
        FileStore(tmp_path).get("acme")


def test_non_object_document(tmp_path):
    (tmp_path / "acme.json").write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(StoreException, match="does not hold an object"):
        FileStore(tmp_path).get("acme")
