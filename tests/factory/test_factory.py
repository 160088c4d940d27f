"""
Tests for factory classes.
"""

import pytest

from notecanvas.config import VaultConfig
from notecanvas.core.factory import FileStoreFactory
from notecanvas.core.file_store import InMemoryFileStore, LocalFileStore
from notecanvas.utils.exceptions import ConfigurationError


class TestFileStoreFactory:
    """Tests for FileStoreFactory."""

    def test_create_local(self, tmp_path):
        """Test creating the filesystem store."""
        store = FileStoreFactory.create(VaultConfig(backend="local", root=str(tmp_path)))

        assert isinstance(store, LocalFileStore)
        assert store.root == tmp_path.resolve()

    def test_create_memory(self):
        """Test creating the in-memory store."""
        store = FileStoreFactory.create(VaultConfig(backend="memory"))
        assert isinstance(store, InMemoryFileStore)

    def test_unsupported_backend(self):
        """Test unknown backends raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            FileStoreFactory.create(VaultConfig(backend="s3"))

        assert exc_info.value.context == {"backend": "s3"}
