"""
Directory layout of the launcher data directory.

    <data_dir>/
    ├── settings.json            (AppSettings)
    ├── doomVersions.json        (list of DoomVersion)
    ├── modFileCatalogue.json    (shared ModFile catalog)
    ├── mods/
    │   ├── 1712345678901.json   (one Mod record per file, keyed by id)
    │   └── ...
    ├── exports/                 (game configuration bundles)
    └── logs/
"""

from __future__ import annotations
from pathlib import Path
from ..models import AppSettings, dump
from ..logging_setup import get_logger
from .json_io import save_json

log = get_logger("doom.launcher.layout")

DEFAULT_DOOM_VERSIONS = [
    {"id": "1", "name": "Doom", "slug": "doom", "args": "-iwad DOOM.WAD", "icon": "doom.png",
     "executable": "gzdoom", "parameters": "", "defaultIwad": "DOOM.WAD"},
    {"id": "2", "name": "Doom II", "slug": "doom2", "args": "-iwad DOOM2.WAD", "icon": "doom2.png",
     "executable": "gzdoom", "parameters": "", "defaultIwad": "DOOM2.WAD"},
    {"id": "3", "name": "Final Doom: TNT", "slug": "tnt", "args": "-iwad TNT.WAD", "icon": "tnt.png",
     "executable": "gzdoom", "parameters": "", "defaultIwad": "TNT.WAD"},
    {"id": "4", "name": "Final Doom: Plutonia", "slug": "plutonia", "args": "-iwad PLUTONIA.WAD", "icon": "plutonia.png",
     "executable": "gzdoom", "parameters": "", "defaultIwad": "PLUTONIA.WAD"},
    {"id": "5", "name": "FreeDoom Phase 1", "slug": "freedoom1", "args": "-iwad freedoom1.wad", "icon": "freedoom1.png",
     "executable": "gzdoom", "parameters": "", "defaultIwad": "freedoom1.wad"},
    {"id": "6", "name": "FreeDoom Phase 2", "slug": "freedoom2", "args": "-iwad freedoom2.wad", "icon": "freedoom2.png",
     "executable": "gzdoom", "parameters": "", "defaultIwad": "freedoom2.wad"},
]


class DataLayout:
    """Central place for every path inside the data directory."""

    def __init__(self, root: Path):
        self.root = Path(root).expanduser()

    @property
    def settings_json(self) -> Path:
        return self.root / "settings.json"

    @property
    def versions_json(self) -> Path:
        return self.root / "doomVersions.json"

    @property
    def catalog_json(self) -> Path:
        return self.root / "modFileCatalogue.json"

    @property
    def mods_dir(self) -> Path:
        return self.root / "mods"

    def mod_json(self, mod_id: str) -> Path:
        """mods/{id}.json - one record per mod."""
        return self.mods_dir / f"{mod_id}.json"

    @property
    def exports_dir(self) -> Path:
        return self.root / "exports"

    @property
    def logs_dir(self) -> Path:
        return self.root / "logs"

    # === Directory Management ===
    def ensure_structure(self) -> None:
        """Create directories and seed settings, versions and catalog on first run."""
        for d in (self.root, self.mods_dir, self.exports_dir, self.logs_dir):
            d.mkdir(parents=True, exist_ok=True)

        if not self.settings_json.exists():
            save_json(self.settings_json, dump(AppSettings()))
            log.info("Initialized: %s", self.settings_json)

        if not self.versions_json.exists():
            save_json(self.versions_json, DEFAULT_DOOM_VERSIONS)
            log.info("Initialized: %s", self.versions_json)

        if not self.catalog_json.exists():
            save_json(self.catalog_json, [])
            log.info("Initialized: %s", self.catalog_json)

    def validate_structure(self) -> tuple[bool, list[str]]:
        errors = []
        for p in (self.settings_json, self.versions_json, self.catalog_json):
            if not p.exists():
                errors.append(f"Missing: {p}")
        if not self.mods_dir.is_dir():
            errors.append(f"Missing mods dir: {self.mods_dir}")
        return (len(errors) == 0, errors)
