from __future__ import annotations
from typing import List, Optional
from pydantic import ValidationError as PydanticValidationError

from ..errors import AlreadyExists, CorruptRecord, NotFound
from ..models import DoomVersion, dump
from ..logging_setup import get_logger
from .json_io import load_json, save_json
from .layout import DataLayout

log = get_logger("doom.launcher.versions")


class VersionStore:
    """Read access to doomVersions.json; append is only used by bundle imports."""

    def __init__(self, layout: DataLayout):
        self.layout = layout

    def _read_raw(self) -> list:
        path = self.layout.versions_json
        if not path.exists():
            return []
        data = load_json(path)
        if not isinstance(data, list):
            raise CorruptRecord(f"{path.name} must contain a JSON array")
        return data

    def list(self) -> List[DoomVersion]:
        try:
            raw = self._read_raw()
        except CorruptRecord as e:
            log.error("Versions unreadable, returning empty list: %s", e)
            return []

        versions: List[DoomVersion] = []
        for item in raw:
            try:
                versions.append(DoomVersion.model_validate(item))
            except PydanticValidationError as e:
                log.warning("Skipping invalid version entry: %s", e)
        return versions

    def find(self, version_id: str) -> Optional[DoomVersion]:
        return next((v for v in self.list() if v.id == str(version_id)), None)

    def get(self, version_id: str) -> DoomVersion:
        version = self.find(version_id)
        if version is None:
            raise NotFound(f"Doom version {version_id} not found")
        return version

    def get_by_slug(self, slug: str) -> DoomVersion:
        version = next((v for v in self.list() if v.slug == slug), None)
        if version is None:
            raise NotFound(f"Doom version '{slug}' not found")
        return version

    def add(self, version: DoomVersion) -> DoomVersion:
        """Append a version under a fresh numeric id; slugs stay unique."""
        raw = self._read_raw()
        existing = self.list()
        if any(v.slug == version.slug for v in existing):
            raise AlreadyExists(f"Doom version slug already exists: {version.slug}")

        next_id = max((int(v.id) for v in existing if v.id.isdigit()), default=0) + 1
        created = version.model_copy(update={"id": str(next_id)})
        raw.append(dump(created))
        save_json(self.layout.versions_json, raw)
        log.info("Added doom version %s (id=%s)", created.slug, created.id)
        return created
