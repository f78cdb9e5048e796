"""
Module 04 - Node Store Unit Tests
Tests for smtree/store/

Covers the in-memory, file and read-only backends plus the factory.
"""
import pytest

from smtree.config.runtime import StoreConfig
from smtree.schemas.errors import (
    ConfigurationException,
    StoreException,
    UnsupportedOperationException,
)
from smtree.store import (
    STORE_BACKENDS,
    BaseNodeStore,
    FileNodeStore,
    InMemoryNodeStore,
    NodeStoreProtocol,
    ReadOnlyNodeStore,
    create_store,
)


KEY = b"\x11" * 32
OTHER = b"\x22" * 32


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    """Each writable backend in turn."""
    if request.param == "memory":
        return InMemoryNodeStore()
    return FileNodeStore(tmp_path / "store")


class TestNodeStoreContract:
    """Behaviour shared by every writable backend."""

    def test_satisfies_protocol(self, store):
        assert isinstance(store, NodeStoreProtocol)
        assert isinstance(store, BaseNodeStore)

    def test_get_missing(self, store):
        assert store.get(KEY) is None
        assert KEY not in store

    def test_set_then_get(self, store):
        store.set(KEY, b"payload")

        assert store.get(KEY) == b"payload"
        assert KEY in store

    def test_last_write_wins(self, store):
        store.set(KEY, b"first")
        store.set(KEY, b"second")

        assert store.get(KEY) == b"second"

    def test_remove(self, store):
        store.set(KEY, b"payload")
        store.set(OTHER, b"other")

        store.remove(KEY)

        assert store.get(KEY) is None
        assert store.get(OTHER) == b"other"

    def test_remove_missing_is_not_an_error(self, store):
        store.remove(KEY)

        assert store.get(KEY) is None

    def test_empty_value(self, store):
        store.set(KEY, b"")

        assert store.get(KEY) == b""

    def test_iter_and_len(self, store):
        store.set(KEY, b"a")
        store.set(OTHER, b"b")

        assert sorted(store) == [KEY, OTHER]
        assert len(store) == 2


class TestInMemoryNodeStore:

    def test_clear(self):
        store = InMemoryNodeStore()
        store.set(KEY, b"a")

        store.clear()

        assert len(store) == 0

    def test_bytearray_keys_normalised(self):
        store = InMemoryNodeStore()
        store.set(bytearray(KEY), b"a")

        assert store.get(KEY) == b"a"

    def test_repr(self):
        assert "memory" in repr(InMemoryNodeStore())


class TestFileNodeStore:
    """File layout and persistence."""

    def test_sharded_layout(self, tmp_path):
        store = FileNodeStore(tmp_path)
        store.set(KEY, b"a")

        assert (tmp_path / "11" / KEY.hex()).read_bytes() == b"a"

    def test_persists_across_instances(self, tmp_path):
        FileNodeStore(tmp_path).set(KEY, b"durable")

        assert FileNodeStore(tmp_path).get(KEY) == b"durable"

    def test_no_temp_files_left(self, tmp_path):
        store = FileNodeStore(tmp_path)
        store.set(KEY, b"a")
        store.set(KEY, b"b")

        names = [p.name for p in (tmp_path / "11").iterdir()]
        assert names == [KEY.hex()]

    def test_iter_skips_stray_files(self, tmp_path):
        store = FileNodeStore(tmp_path)
        store.set(KEY, b"a")
        (tmp_path / "ROOT").write_text("0x00")
        (tmp_path / "11" / ".tmp-leftover").write_bytes(b"x")

        assert list(store) == [KEY]

    def test_empty_key_rejected(self, tmp_path):
        with pytest.raises(StoreException):
            FileNodeStore(tmp_path).set(b"", b"a")

    def test_unwritable_path(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(StoreException) as exc_info:
            FileNodeStore(blocker / "store")

        assert exc_info.value.details["operation"] == "open"


class TestReadOnlyNodeStore:

    def test_reads_pass_through(self):
        inner = InMemoryNodeStore()
        inner.set(KEY, b"a")

        assert ReadOnlyNodeStore(inner).get(KEY) == b"a"

    def test_set_rejected(self):
        with pytest.raises(UnsupportedOperationException) as exc_info:
            ReadOnlyNodeStore(InMemoryNodeStore()).set(KEY, b"a")

        assert exc_info.value.details["operation"] == "set"

    def test_remove_rejected(self):
        with pytest.raises(UnsupportedOperationException):
            ReadOnlyNodeStore(InMemoryNodeStore()).remove(KEY)


class TestCreateStore:
    """Tests for the store factory."""

    def test_backends(self):
        assert STORE_BACKENDS == ("memory", "file")

    def test_memory_default(self):
        assert isinstance(create_store(StoreConfig()), InMemoryNodeStore)

    def test_file_backend(self, tmp_path):
        store = create_store(StoreConfig(backend="file", path=str(tmp_path)))

        assert isinstance(store, FileNodeStore)
        assert store.path == tmp_path

    def test_file_backend_needs_path(self):
        with pytest.raises(ConfigurationException) as exc_info:
            create_store(StoreConfig(backend="file"))

        assert exc_info.value.details["setting"] == "store.path"

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationException) as exc_info:
            create_store(StoreConfig(backend="rocksdb"))

        assert exc_info.value.details["setting"] == "store.backend"

    def test_read_only_wrap(self):
        store = create_store(StoreConfig(read_only=True))

        assert isinstance(store, ReadOnlyNodeStore)
        assert isinstance(store.inner, InMemoryNodeStore)

    def test_backend_name_case_insensitive(self):
        assert isinstance(create_store(StoreConfig(backend="MEMORY")), InMemoryNodeStore)
