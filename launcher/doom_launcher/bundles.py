"""
Game configuration bundles: one doom version plus all of its mods (files
embedded) in a single shareable JSON document.

Ids are renumbered on export and reassigned on import so bundles move
between installations without colliding.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from jsonschema import validate, ValidationError as SchemaValidationError
from pydantic import ValidationError as PydanticValidationError

from .errors import NotFound, ValidationError
from .models import DoomVersion, Mod, dump
from .storage import DataLayout, ModRecordStore, VersionStore
from .storage.json_io import load_json, save_json
from .logging_setup import get_logger

log = get_logger("doom.launcher.bundles")

BUNDLE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["doomVersion", "mods"],
    "properties": {
        "doomVersion": {
            "type": "object",
            "required": ["name", "slug"],
            "properties": {
                "name": {"type": "string"},
                "slug": {"type": "string", "minLength": 1},
                "args": {"type": ["string", "null"]},
                "defaultIwad": {"type": ["string", "null"]},
            },
        },
        "mods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "files": {"type": "array", "items": {"type": "object"}},
                },
            },
        },
        # older exports kept files in a flat list referencing their mod by modId
        "modFiles": {"type": "array", "items": {"type": "object"}},
    },
}


def validate_bundle(data: Any) -> None:
    try:
        validate(instance=data, schema=BUNDLE_SCHEMA)
    except SchemaValidationError as e:
        location = "/".join(str(p) for p in e.path)
        raise ValidationError(f"Invalid game config: {e.message} (at {location or '/'})") from e


class GameConfigBundles:
    def __init__(self, layout: DataLayout, versions: VersionStore, mods: ModRecordStore):
        self.layout = layout
        self.versions = versions
        self.mods = mods

    def export_config(self, slug: str, dest: Optional[Path] = None) -> Path:
        """Write the bundle for version `slug`; default destination is exports/<slug>_config.json."""
        version = self.versions.get_by_slug(slug)
        mods = self.mods.list(version_id=version.id)

        exported_mods: List[Dict[str, Any]] = []
        for i, mod in enumerate(mods, start=1):
            data = dump(mod)
            data["id"] = str(i)
            data["doomVersionId"] = "1"
            data["files"] = [
                {**dump(f), "id": str(j), "modId": str(i)}
                for j, f in enumerate(mod.files, start=1)
            ]
            exported_mods.append(data)

        bundle = {"doomVersion": {**dump(version), "id": "1"}, "mods": exported_mods}
        out = Path(dest) if dest else self.layout.exports_dir / f"{version.slug}_config.json"
        save_json(out, bundle)
        log.info("Exported %s with %d mod(s) to %s", version.slug, len(exported_mods), out)
        return out

    @staticmethod
    def _mods_with_files(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        mods = [dict(m) for m in data.get("mods", [])]
        legacy_files = data.get("modFiles")
        if legacy_files:
            for m in mods:
                if not m.get("files"):
                    m["files"] = [f for f in legacy_files if str(f.get("modId")) == str(m.get("id"))]
        return mods

    def import_config(self, file_path: Path, merge: bool = False) -> Tuple[DoomVersion, int]:
        """
        Import a bundle. With `merge`, mods attach to an existing version of the
        same slug; otherwise the version is added and a slug clash raises AlreadyExists.
        Returns the target version and the number of mods imported.
        """
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise NotFound(f"Game config not found: {path}")
        data = load_json(path)
        validate_bundle(data)

        try:
            incoming = DoomVersion.model_validate({**data["doomVersion"], "id": "0"})
            mods = [
                Mod.model_validate({**raw_mod, "id": None, "doomVersionId": None})
                for raw_mod in self._mods_with_files(data)
            ]
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid game config: {e}") from e

        target = next((v for v in self.versions.list() if v.slug == incoming.slug), None) if merge else None
        if target is None:
            target = self.versions.add(incoming)

        for mod in mods:
            self.mods.save(mod.model_copy(update={"doom_version_id": target.id}))
        count = len(mods)

        log.info("Imported %d mod(s) into %s (id=%s) from %s", count, target.slug, target.id, path)
        return target, count
