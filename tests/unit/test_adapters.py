"""Tests for storage adapters."""

import io
import stat

import pytest

from neo_filesystem import (
    AdapterRegistry,
    ConfigurationError,
    InvalidInputError,
    LocalAdapter,
    MemoryAdapter,
    StorageAdapter,
    Visibility,
)
from neo_filesystem.infrastructure.adapters import normalize_key


class FailingStream:
    """Stream returning one chunk, then failing like a dropped connection."""

    def __init__(self, first_chunk: bytes):
        self._chunks = [first_chunk]

    def read(self, size=-1):
        if self._chunks:
            return self._chunks.pop()
        raise OSError("connection reset")


class TestNormalizeKey:
    """Test storage key normalization."""

    @pytest.mark.parametrize("key,expected", [
        ("a/b.txt", "a/b.txt"),
        ("/a//b.txt", "a/b.txt"),
        ("a\\b.txt", "a/b.txt"),
        ("./a/./b.txt", "a/b.txt"),
    ])
    def test_normalized(self, key, expected):
        assert normalize_key(key) == expected

    @pytest.mark.parametrize("key", ["", "/", "../etc/passwd", "a/../../b", None])
    def test_rejected(self, key):
        with pytest.raises(InvalidInputError):
            normalize_key(key)


class TestMemoryAdapter:
    """Test MemoryAdapter."""

    def test_write_and_read(self, memory_adapter):
        assert memory_adapter.write("docs/a.txt", io.BytesIO(b"content")) is True

        assert memory_adapter.read("docs/a.txt") == b"content"
        assert memory_adapter.exists("/docs//a.txt")
        assert memory_adapter.keys() == ["docs/a.txt"]
        assert len(memory_adapter) == 1
        assert isinstance(memory_adapter, StorageAdapter)

    def test_read_missing(self, memory_adapter):
        with pytest.raises(FileNotFoundError):
            memory_adapter.read("missing.txt")

    def test_delete(self, memory_adapter):
        memory_adapter.write("a.txt", io.BytesIO(b"x"))

        assert memory_adapter.delete("a.txt") is True
        assert memory_adapter.delete("a.txt") is False
        assert not memory_adapter.exists("a.txt")

    def test_rename(self, memory_adapter):
        memory_adapter.write("a.txt", io.BytesIO(b"x"))

        assert memory_adapter.rename("a.txt", "moved/b.txt") is True
        assert not memory_adapter.exists("a.txt")
        assert memory_adapter.read("moved/b.txt") == b"x"

    def test_rename_missing_source(self, memory_adapter):
        assert memory_adapter.rename("a.txt", "b.txt") is False

    def test_rename_onto_existing_key(self, memory_adapter):
        memory_adapter.write("a.txt", io.BytesIO(b"a"))
        memory_adapter.write("b.txt", io.BytesIO(b"b"))

        assert memory_adapter.rename("a.txt", "b.txt") is False
        assert memory_adapter.read("b.txt") == b"b"

    def test_clear(self, memory_adapter):
        memory_adapter.write("a.txt", io.BytesIO(b"a"))
        memory_adapter.clear()

        assert len(memory_adapter) == 0

    def test_traversal_rejected(self, memory_adapter):
        with pytest.raises(InvalidInputError):
            memory_adapter.write("../a.txt", io.BytesIO(b"a"))


class TestLocalAdapter:
    """Test LocalAdapter."""

    def test_root_created(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path / "storage")

        assert adapter.root == (tmp_path / "storage").resolve()
        assert adapter.root.is_dir()

    def test_write_creates_parents(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path)

        assert adapter.write("a/b/c.txt", io.BytesIO(b"nested")) is True

        assert (tmp_path / "a" / "b" / "c.txt").read_bytes() == b"nested"
        assert adapter.read("a/b/c.txt") == b"nested"
        assert adapter.exists("a/b/c.txt")
        assert not adapter.exists("a/b")

    @pytest.mark.parametrize("visibility,mode", [
        (Visibility.PUBLIC, 0o644),
        ("private", 0o600),
    ])
    def test_visibility_sets_mode(self, tmp_path, visibility, mode):
        adapter = LocalAdapter(root=tmp_path, visibility=visibility)

        adapter.write("a.txt", io.BytesIO(b"x"))

        assert stat.S_IMODE(adapter.path_for("a.txt").stat().st_mode) == mode

    def test_leading_slash_stays_under_root(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path)

        assert adapter.path_for("/etc/passwd") == tmp_path.resolve() / "etc" / "passwd"

    def test_traversal_rejected(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path / "root")

        with pytest.raises(InvalidInputError):
            adapter.write("../escape.txt", io.BytesIO(b"x"))

        assert not (tmp_path / "escape.txt").exists()

    def test_failed_write_leaves_nothing_behind(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path)

        with pytest.raises(OSError, match="connection reset"):
            adapter.write("big.bin", FailingStream(b"x" * 65536))

        assert list(tmp_path.iterdir()) == []
        assert not adapter.exists("big.bin")

    def test_failed_write_keeps_previous_content(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path)
        adapter.write("docs/a.txt", io.BytesIO(b"good"))

        with pytest.raises(OSError):
            adapter.write("docs/a.txt", FailingStream(b"partial"))

        assert adapter.read("docs/a.txt") == b"good"
        assert [path.name for path in (tmp_path / "docs").iterdir()] == ["a.txt"]

    def test_read_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LocalAdapter(root=tmp_path).read("missing.txt")

    def test_delete(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path)
        adapter.write("a.txt", io.BytesIO(b"x"))

        assert adapter.delete("a.txt") is True
        assert adapter.delete("a.txt") is False
        assert not (tmp_path / "a.txt").exists()

    def test_rename(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path)
        adapter.write("a.txt", io.BytesIO(b"x"))

        assert adapter.rename("a.txt", "archive/2024/a.txt") is True
        assert (tmp_path / "archive" / "2024" / "a.txt").read_bytes() == b"x"
        assert not (tmp_path / "a.txt").exists()

    def test_rename_refuses_to_overwrite(self, tmp_path):
        adapter = LocalAdapter(root=tmp_path)
        adapter.write("a.txt", io.BytesIO(b"a"))
        adapter.write("b.txt", io.BytesIO(b"b"))

        assert adapter.rename("a.txt", "b.txt") is False
        assert adapter.read("a.txt") == b"a"
        assert adapter.read("b.txt") == b"b"

    def test_rename_missing_source(self, tmp_path):
        assert LocalAdapter(root=tmp_path).rename("a.txt", "b.txt") is False


class TestAdapterRegistry:
    """Test AdapterRegistry."""

    def test_resolve_local(self, tmp_path):
        adapter = AdapterRegistry().resolve("Local", root=str(tmp_path), visibility="private")

        assert isinstance(adapter, LocalAdapter)
        assert adapter.visibility is Visibility.PRIVATE

    def test_resolve_memory(self):
        assert isinstance(AdapterRegistry().resolve("Memory"), MemoryAdapter)

    def test_resolve_instance_passthrough(self, memory_adapter):
        assert AdapterRegistry().resolve(memory_adapter) is memory_adapter

    def test_resolve_spy_adapter(self, spy_adapter, memory_adapter):
        """Test a spec'd mock wrapping an adapter is accepted as an instance."""
        assert AdapterRegistry().resolve(spy_adapter) is spy_adapter

        spy_adapter.write("a.txt", io.BytesIO(b"a"))
        assert memory_adapter.read("a.txt") == b"a"

    def test_unknown_name_rejected(self):
        with pytest.raises(ConfigurationError, match='Adapter "S3" could not be loaded'):
            AdapterRegistry().resolve("S3")

    def test_class_rejected(self):
        with pytest.raises(ConfigurationError):
            AdapterRegistry().resolve(MemoryAdapter)

    def test_non_adapter_rejected(self):
        with pytest.raises(ConfigurationError):
            AdapterRegistry().resolve(object())

    def test_bad_arguments_rejected(self):
        with pytest.raises(ConfigurationError, match="rejected its arguments"):
            AdapterRegistry().resolve("Memory", bucket="files")

    def test_register_custom_adapter(self):
        registry = AdapterRegistry()
        registry.register("Scratch", MemoryAdapter)

        assert "Scratch" in registry.names()
        assert isinstance(registry.resolve("Scratch"), MemoryAdapter)
