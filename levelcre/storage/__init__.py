"""Resource store backends."""

from levelcre.storage.base import ResourceStore
from levelcre.storage.database import DatabaseStore
from levelcre.storage.memory import MemoryStore

__all__ = ["DatabaseStore", "MemoryStore", "ResourceStore"]
