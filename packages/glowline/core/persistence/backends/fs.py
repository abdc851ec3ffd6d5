"""Filesystem design repository.

Layout: ``<root>/<user_id>/<design_id>.json``. Writes go to a temporary
file first and are moved into place, so a crash never leaves a partial
record. Unreadable or invalid records load as misses.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from glowline.core.persistence.models import SavedDesign

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_key(value: str, what: str) -> str:
    if not _SAFE_KEY.match(value) or value in (".", ".."):
        raise ValueError(f"Invalid {what}: {value!r}")
    return value


class FileDesignRepository:
    """JSON-file repository rooted at ``root``.

    Args:
        root: Directory holding one sub-directory per user.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _user_dir(self, user_id: str) -> Path:
        return self.root / _check_key(user_id, "user id")

    def _path(self, user_id: str, design_id: str) -> Path:
        return self._user_dir(user_id) / f"{_check_key(design_id, 'design id')}.json"

    def save(self, design: SavedDesign) -> None:
        """Write ``design`` atomically.

        Raises:
            ValueError: If the user or design id is not filesystem safe.
            OSError: On write failure.
        """
        path = self._path(design.user_id, design.id)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(design.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(path)
        logger.debug("Saved design %s for %s", design.id, design.user_id)

    def load(self, user_id: str, design_id: str) -> SavedDesign | None:
        path = self._path(user_id, design_id)
        try:
            return SavedDesign.model_validate_json(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (ValidationError, ValueError) as e:
            logger.warning("Ignoring unreadable design record %s: %s", path, e)
            return None

    def delete(self, user_id: str, design_id: str) -> bool:
        path = self._path(user_id, design_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def list(self, user_id: str) -> list[SavedDesign]:
        user_dir = self._user_dir(user_id)
        if not user_dir.is_dir():
            return []
        designs = []
        for path in sorted(user_dir.glob("*.json")):
            design = self.load(user_id, path.stem)
            if design is not None:
                designs.append(design)
        return designs


__all__ = ["FileDesignRepository"]
