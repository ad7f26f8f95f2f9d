from settingsgen.stores import MemoryStore


def test_missing_page_returns_none():
    assert MemoryStore().get("acme") is None


def test_set_then_get():
    store = MemoryStore()

    store.set("acme", {"volume": 3})

    assert store.get("acme") == {"volume": 3}


def test_records_are_copied_in_and_out():
    store = MemoryStore()
    record = {"colors": ["red"]}

    store.set("acme", record)
    record["colors"].append("blue")
    loaded = store.get("acme")
    loaded["colors"].append("green")

    assert store.get("acme") == {"colors": ["red"]}


def test_initial_records():
    store = MemoryStore({"acme": {"volume": 1}})

    assert store.get("acme") == {"volume": 1}
