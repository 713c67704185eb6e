import pytest

from masterlabel.app.registry.registry import get_default_design_for_group
from masterlabel.app.services.designs import load_tenant_design, save_tenant_design
from masterlabel.app.services.serialization import (
    DesignDeserializationError,
    compute_design_revision,
)
from masterlabel.app.storage.store import InMemoryDesignStore, RevisionConflictError
from masterlabel.tests.fixtures.label_data import simple_design


def test_save_and_get():
    store = InMemoryDesignStore()

    stored = store.save("tenant-a", "toys", b'{"a":1}')

    assert store.get("tenant-a", "toys") == stored
    assert stored.revision.startswith("SHA-256:")
    assert store.get("tenant-b", "toys") is None


def test_save_with_stale_revision_conflicts():
    store = InMemoryDesignStore()
    first = store.save("tenant-a", "toys", b"one")
    store.save("tenant-a", "toys", b"two", expected_revision=first.revision)

    with pytest.raises(RevisionConflictError) as excinfo:
        store.save("tenant-a", "toys", b"three", expected_revision=first.revision)

    assert excinfo.value.expected == first.revision
    assert excinfo.value.actual == store.get("tenant-a", "toys").revision
    assert store.get("tenant-a", "toys").payload == b"two"


def test_expected_revision_on_missing_design_conflicts():
    store = InMemoryDesignStore()

    with pytest.raises(RevisionConflictError) as excinfo:
        store.save("tenant-a", "toys", b"one", expected_revision="SHA-256:abc")

    assert excinfo.value.actual is None


def test_delete_and_list():
    store = InMemoryDesignStore()
    store.save("tenant-a", "toys", b"1")
    store.save("tenant-a", "electronics", b"2")
    store.save("tenant-b", "toys", b"3")

    assert [d.category for d in store.list_for_tenant("tenant-a")] == ["electronics", "toys"]
    assert store.delete("tenant-a", "toys") is True
    assert store.delete("tenant-a", "toys") is False
    assert [d.category for d in store.list_for_tenant("tenant-a")] == ["electronics"]


def test_load_falls_back_to_template_then_blank():
    store = InMemoryDesignStore()

    template = load_tenant_design(store, "tenant-a", "electronics")
    blank = load_tenant_design(store, "tenant-a", "spaceships")

    assert template.source == "template"
    assert template.template_id == "builtin-electronics"
    assert template.design == get_default_design_for_group("electronics")
    assert blank.source == "blank"
    assert blank.design.elements == []
    assert blank.revision is None


def test_saved_design_wins_over_template():
    store = InMemoryDesignStore()
    design = simple_design()

    stored = save_tenant_design(store, "tenant-a", "electronics", design)
    loaded = load_tenant_design(store, "tenant-a", "electronics")

    assert loaded.source == "stored"
    assert loaded.design == design
    assert loaded.revision == stored.revision == compute_design_revision(design)


def test_unreadable_stored_design_raises():
    store = InMemoryDesignStore()
    store.save("tenant-a", "toys", b"not json")

    with pytest.raises(DesignDeserializationError):
        load_tenant_design(store, "tenant-a", "toys")
