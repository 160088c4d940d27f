"""
Factory for creating document stores.
"""

from notecanvas.config import VaultConfig
from notecanvas.core.file_store.base import FileStore
from notecanvas.core.file_store.local import LocalFileStore
from notecanvas.core.file_store.memory import InMemoryFileStore
from notecanvas.utils.exceptions import ConfigurationError


class FileStoreFactory:
    """Factory for creating document stores from configuration."""

    @staticmethod
    def create(config: VaultConfig) -> FileStore:
        """
        Create file store from configuration.

        Args:
            config: Vault configuration

        Returns:
            FileStore instance

        Raises:
            ConfigurationError: If backend is not supported
        """
        if config.backend == "local":
            return LocalFileStore(root=config.root)
        elif config.backend == "memory":
            return InMemoryFileStore()
        else:
            raise ConfigurationError(
                f"Unsupported vault backend: {config.backend}",
                context={"backend": config.backend},
            )
