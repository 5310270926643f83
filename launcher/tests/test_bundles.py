"""
Tests for game config export/import.
"""

import json

import pytest

from doom_launcher.bundles import GameConfigBundles, validate_bundle
from doom_launcher.errors import AlreadyExists, NotFound, ValidationError
from doom_launcher.models import Mod, ModFile
from doom_launcher.storage import DataLayout, ModRecordStore, VersionStore
from doom_launcher.storage.json_io import load_json


@pytest.fixture
def layout(tmp_path):
    layout = DataLayout(tmp_path / "data")
    layout.ensure_structure()
    return layout


@pytest.fixture
def mods(layout):
    return ModRecordStore(layout)


@pytest.fixture
def versions(layout):
    return VersionStore(layout)


@pytest.fixture
def bundles(layout, versions, mods):
    return GameConfigBundles(layout, versions, mods)


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestExport:
    def test_export_renumbers_ids(self, bundles, mods, layout):
        mods.save(Mod(title="Sunlust", doom_version_id="2", files=[ModFile(file_path="/s.wad"), ModFile(file_path="/s.deh")]))
        mods.save(Mod(title="Sigil", doom_version_id="1"))

        out = bundles.export_config("doom2")

        assert out == layout.exports_dir / "doom2_config.json"
        data = load_json(out)
        assert data["doomVersion"]["slug"] == "doom2"
        assert data["doomVersion"]["id"] == "1"
        assert len(data["mods"]) == 1
        exported = data["mods"][0]
        assert exported["id"] == "1"
        assert [f["id"] for f in exported["files"]] == ["1", "2"]
        assert {f["modId"] for f in exported["files"]} == {"1"}

    def test_export_custom_destination(self, bundles, tmp_path):
        out = bundles.export_config("tnt", tmp_path / "share" / "tnt.json")
        assert out.exists()

    def test_export_unknown_slug(self, bundles):
        with pytest.raises(NotFound):
            bundles.export_config("heretic")


class TestImport:
    def test_import_adds_version_and_mods(self, bundles, versions, mods, tmp_path):
        path = _write(tmp_path / "sigil.json", {
            "doomVersion": {"id": "1", "name": "Sigil", "slug": "sigil", "args": "-iwad DOOM.WAD"},
            "mods": [{"id": "1", "title": "Sigil II", "files": [{"filePath": "/sigil2.wad"}]}],
        })

        version, count = bundles.import_config(path)

        assert version.id == "7"
        assert count == 1
        imported = mods.list(version_id="7")
        assert [m.title for m in imported] == ["Sigil II"]
        assert imported[0].id != "1"
        assert imported[0].files[0].mod_id == imported[0].id

    def test_import_slug_clash(self, bundles, tmp_path):
        path = _write(tmp_path / "doom2.json", {"doomVersion": {"name": "Doom II", "slug": "doom2"}, "mods": []})
        with pytest.raises(AlreadyExists):
            bundles.import_config(path)

    def test_import_merge_into_existing(self, bundles, mods, tmp_path):
        path = _write(tmp_path / "doom2.json", {
            "doomVersion": {"name": "Doom II", "slug": "doom2"},
            "mods": [{"title": "Eviternity"}, {"title": "Sunlust"}],
        })

        version, count = bundles.import_config(path, merge=True)

        assert version.id == "2"
        assert count == 2
        assert {m.title for m in mods.list(version_id="2")} == {"Eviternity", "Sunlust"}

    def test_import_legacy_flat_file_list(self, bundles, mods, tmp_path):
        path = _write(tmp_path / "old.json", {
            "doomVersion": {"name": "Old", "slug": "old"},
            "mods": [{"id": 1, "name": "Legacy"}],
            "modFiles": [{"id": 1, "modId": 1, "path": "/legacy.wad"}, {"id": 2, "modId": 9, "path": "/other.wad"}],
        })

        version, _ = bundles.import_config(path)

        [mod] = mods.list(version_id=version.id)
        assert mod.title == "Legacy"
        assert [f.file_path for f in mod.files] == ["/legacy.wad"]

    def test_export_then_import_under_new_slug(self, bundles, mods, tmp_path):
        mods.save(Mod(title="Sunlust", doom_version_id="2", files=[ModFile(file_path="/s.wad", load_order=1)]))
        out = bundles.export_config("doom2")
        data = load_json(out)
        data["doomVersion"]["slug"] = "doom2-copy"
        _write(out, data)

        version, count = bundles.import_config(out)

        [copy] = mods.list(version_id=version.id)
        assert count == 1
        assert copy.files[0].file_path == "/s.wad"
        assert copy.files[0].load_order == 1

    def test_missing_file(self, bundles, tmp_path):
        with pytest.raises(NotFound):
            bundles.import_config(tmp_path / "nope.json")


class TestValidateBundle:
    @pytest.mark.parametrize("data", [
        [],
        {"mods": []},
        {"doomVersion": {"name": "x"}, "mods": []},
        {"doomVersion": {"name": "x", "slug": ""}, "mods": []},
        {"doomVersion": {"name": "x", "slug": "x"}, "mods": "nope"},
    ])
    def test_rejects(self, data):
        with pytest.raises(ValidationError, match="Invalid game config"):
            validate_bundle(data)

    def test_accepts_minimal(self):
        validate_bundle({"doomVersion": {"name": "x", "slug": "x"}, "mods": []})
