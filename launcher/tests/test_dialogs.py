"""
Tests for the file picker hosts.
"""

from unittest.mock import Mock, patch

from doom_launcher.dialogs import StubDialogHost, ZenityDialogHost, select_dialog_host
from doom_launcher.settings import Settings


def test_stub_answers():
    host = StubDialogHost()
    assert host.open_dialog({}) == {"canceled": False, "filePaths": ["/mock/path/example.wad"]}
    assert host.save_dialog({"title": "Export"}) == {"canceled": False, "filePath": "/mock/path/saved-file.txt"}


def test_select_dialog_host(tmp_path):
    assert isinstance(select_dialog_host(Settings(data_dir=tmp_path, dialog_host="native")), ZenityDialogHost)
    assert isinstance(select_dialog_host(Settings(data_dir=tmp_path, dialog_host="stub")), StubDialogHost)
    assert isinstance(select_dialog_host(Settings(data_dir=tmp_path, dialog_host="bogus")), StubDialogHost)


class TestZenityDialogHost:
    def _completed(self, stdout="", returncode=0):
        return Mock(stdout=stdout, returncode=returncode)

    def test_open_multiple_with_filters(self):
        with patch("doom_launcher.dialogs.subprocess.run", return_value=self._completed("/a.wad|/b.pk3\n")) as run:
            result = ZenityDialogHost().open_dialog({
                "title": "Pick mods",
                "properties": ["openFile", "multiSelections"],
                "filters": [{"name": "Doom files", "extensions": ["wad", "pk3"]}],
            })

        assert result == {"canceled": False, "filePaths": ["/a.wad", "/b.pk3"]}
        cmd = run.call_args[0][0]
        assert cmd[:2] == ["zenity", "--file-selection"]
        assert "--title=Pick mods" in cmd
        assert "--multiple" in cmd
        assert "--file-filter=Doom files | *.wad *.pk3" in cmd

    def test_open_directory(self):
        with patch("doom_launcher.dialogs.subprocess.run", return_value=self._completed("/saves")) as run:
            result = ZenityDialogHost().open_dialog({"properties": ["openDirectory"]})

        assert result["filePaths"] == ["/saves"]
        assert "--directory" in run.call_args[0][0]

    def test_cancel(self):
        with patch("doom_launcher.dialogs.subprocess.run", return_value=self._completed(returncode=1)):
            assert ZenityDialogHost().open_dialog({}) == {"canceled": True, "filePaths": []}

    def test_missing_binary_is_cancel(self):
        with patch("doom_launcher.dialogs.subprocess.run", side_effect=FileNotFoundError):
            assert ZenityDialogHost().save_dialog({}) == {"canceled": True, "filePath": ""}

    def test_save(self):
        with patch("doom_launcher.dialogs.subprocess.run", return_value=self._completed("/out/doom2_config.json\n")) as run:
            result = ZenityDialogHost().save_dialog({"defaultPath": "doom2_config.json"})

        assert result == {"canceled": False, "filePath": "/out/doom2_config.json"}
        cmd = run.call_args[0][0]
        assert "--save" in cmd
        assert "--filename=doom2_config.json" in cmd
