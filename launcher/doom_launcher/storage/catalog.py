from __future__ import annotations
import time
from typing import Any, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError

from ..errors import CorruptRecord, ValidationError
from ..models import CATALOG_MOD_ID, FileType, ModFile, base_name, dump
from ..logging_setup import get_logger
from .json_io import load_json, save_json
from .layout import DataLayout

log = get_logger("doom.launcher.catalog")


def next_timestamp_id(existing_ids) -> str:
    """Millisecond timestamp id, bumped past every numeric id already in use."""
    now_ms = int(time.time() * 1000)
    highest = max((int(i) for i in existing_ids if str(i).isdigit()), default=0)
    return str(max(now_ms, highest + 1))


class ModFileCatalog:
    """
    Shared pool of mod files, stored as one JSON array.

    Entries are keyed by their exact file path; the catalog only grows.
    """

    def __init__(self, layout: DataLayout):
        self.layout = layout

    def _read_raw(self) -> List[Dict[str, Any]]:
        path = self.layout.catalog_json
        if not path.exists():
            return []
        data = load_json(path)
        if not isinstance(data, list):
            raise CorruptRecord(f"{path.name} must contain a JSON array")
        return data

    @staticmethod
    def _raw_path(item: Dict[str, Any]) -> Optional[str]:
        if not isinstance(item, dict):
            return None
        return item.get("filePath") or item.get("path")

    def list(self) -> List[ModFile]:
        try:
            raw = self._read_raw()
        except CorruptRecord as e:
            log.error("Catalog unreadable, returning empty list: %s", e)
            return []

        entries: List[ModFile] = []
        for i, item in enumerate(raw):
            try:
                entries.append(ModFile.model_validate(item))
            except PydanticValidationError as e:
                log.warning("Skipping catalog entry #%d: %s", i, e)
        return entries

    def by_type(self, file_type: str) -> List[ModFile]:
        wanted = FileType.parse(file_type)
        return [f for f in self.list() if f.file_type == wanted]

    def find_by_path(self, file_path: str) -> Optional[ModFile]:
        for item in self._read_raw():
            if self._raw_path(item) == file_path:
                return ModFile.model_validate(item)
        return None

    def add_if_absent(self, file: ModFile) -> ModFile:
        """
        Append `file` unless an entry with the same path exists.

        Returns the existing entry unchanged when the path is already known,
        otherwise the newly created entry (generated id and name).
        """
        path = (file.file_path or "").strip()
        if not path:
            raise ValidationError("filePath is required")

        existing = self.find_by_path(path)
        if existing is not None:
            log.debug("Catalog already contains %s", path)
            return existing

        raw = self._read_raw()

        file_name = base_name(path)
        name = file.name.strip() if file.name and file.name.strip() else file_name
        entry = file.model_copy(update={
            "id": next_timestamp_id(item.get("id") for item in raw if isinstance(item, dict)),
            "name": name,
            "file_name": file_name,
            "file_path": path,
            "file_type": file.file_type or FileType.from_path(path),
            "mod_id": CATALOG_MOD_ID,
        })
        raw.append(dump(entry))
        save_json(self.layout.catalog_json, raw)
        log.info("Added %s to catalog (id=%s, %d entries)", path, entry.id, len(raw))
        return entry
