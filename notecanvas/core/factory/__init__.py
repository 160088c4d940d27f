"""
Factory modules for creating notecanvas components.
"""

from notecanvas.core.factory.file_store_factory import FileStoreFactory

__all__ = ["FileStoreFactory"]
