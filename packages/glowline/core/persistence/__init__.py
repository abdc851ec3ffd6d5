"""Saved design storage."""

from glowline.core.persistence.backends import FileDesignRepository, InMemoryDesignRepository
from glowline.core.persistence.models import SavedDesign
from glowline.core.persistence.protocols import DesignRepository

__all__ = [
    "DesignRepository",
    "FileDesignRepository",
    "InMemoryDesignRepository",
    "SavedDesign",
]
