"""ORM models used by the application infrastructure."""

from .storage_entry import StorageEntryModel

__all__ = ["StorageEntryModel"]
