"""Design repository backends."""

from glowline.core.persistence.backends.fs import FileDesignRepository
from glowline.core.persistence.backends.memory import InMemoryDesignRepository

__all__ = ["FileDesignRepository", "InMemoryDesignRepository"]
