from __future__ import annotations
from typing import List, Optional
from pydantic import ValidationError as PydanticValidationError

from ..errors import CorruptRecord, NotFound, ValidationError
from ..models import Mod, dump
from ..logging_setup import get_logger
from .catalog import next_timestamp_id
from .json_io import load_json, save_json
from .layout import DataLayout

log = get_logger("doom.launcher.mods")


class ModRecordStore:
    """
    One JSON document per mod (mods/{id}.json) with the file list embedded.

    Writes are last-write-wins; there is no merge with an existing record.
    """

    def __init__(self, layout: DataLayout):
        self.layout = layout

    @staticmethod
    def _check_id(mod_id: str) -> str:
        s = str(mod_id).strip()
        if not s or "/" in s or "\\" in s or ".." in s:
            raise ValidationError(f"Invalid mod id: {mod_id!r}")
        return s

    def _existing_ids(self) -> List[str]:
        if not self.layout.mods_dir.exists():
            return []
        return [p.stem for p in self.layout.mods_dir.glob("*.json")]

    def save(self, mod: Mod) -> Mod:
        """Assign an id if missing and write the full record, files included."""
        if not mod.id:
            mod = mod.model_copy(update={"id": next_timestamp_id(self._existing_ids())})
        mod_id = self._check_id(mod.id)

        files = [f.model_copy(update={"mod_id": mod_id}) for f in mod.files]
        mod = mod.model_copy(update={"id": mod_id, "files": files})

        save_json(self.layout.mod_json(mod_id), dump(mod))
        log.info("Saved mod %s (%s) with %d file(s)", mod_id, mod.title or "untitled", len(files))
        return mod

    def _read(self, mod_id: str) -> Mod:
        path = self.layout.mod_json(mod_id)
        if not path.exists():
            raise NotFound(f"Mod {mod_id} not found")
        data = load_json(path)
        if not isinstance(data, dict):
            raise CorruptRecord(f"Mod {mod_id}: record is not a JSON object")
        try:
            mod = Mod.model_validate(data)
        except PydanticValidationError as e:
            raise CorruptRecord(f"Mod {mod_id}: {e}") from e
        if not mod.id:
            mod.id = mod_id
        return mod

    def get(self, mod_id: str) -> Mod:
        return self._read(self._check_id(mod_id))

    def delete(self, mod_id: str) -> bool:
        path = self.layout.mod_json(self._check_id(mod_id))
        if not path.exists():
            log.warning("Mod record does not exist: %s", path)
            return False
        path.unlink()
        log.info("Deleted mod %s", mod_id)
        return True

    def list(self, version_id: Optional[str] = None, search: Optional[str] = None) -> List[Mod]:
        """All readable mods; unreadable records are logged and skipped."""
        mods: List[Mod] = []
        if not self.layout.mods_dir.exists():
            return mods

        for path in sorted(self.layout.mods_dir.glob("*.json")):
            try:
                mods.append(self._read(path.stem))
            except (CorruptRecord, NotFound, OSError) as e:
                log.error("Skipping mod record %s: %s", path.name, e)

        if version_id:
            mods = [m for m in mods if m.doom_version_id == str(version_id)]
        if search:
            needle = search.lower()
            mods = [m for m in mods if needle in m.title.lower()]
        return mods
