"""
Tests for executable resolution and detached spawning.
"""

import subprocess
from unittest.mock import Mock, patch

import pytest

from doom_launcher.errors import ConfigurationError, LaunchError
from doom_launcher.process_runner import ProcessLauncher, resolve_executable


class TestResolveExecutable:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_unset(self, value):
        with pytest.raises(ConfigurationError, match="not set"):
            resolve_executable(value)

    def test_existing_file(self, tmp_path):
        exe = tmp_path / "gzdoom"
        exe.write_text("#!/bin/sh\n")
        assert resolve_executable(str(exe)) == str(exe)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            resolve_executable(str(tmp_path / "nope" / "gzdoom"))

    def test_bare_name_uses_path_lookup(self):
        with patch("doom_launcher.process_runner.shutil.which", return_value="/usr/games/gzdoom") as which:
            assert resolve_executable("gzdoom") == "/usr/games/gzdoom"
        which.assert_called_once_with("gzdoom")

    def test_bare_name_not_on_path(self):
        with patch("doom_launcher.process_runner.shutil.which", return_value=None):
            with pytest.raises(ConfigurationError):
                resolve_executable("gzdoom-not-installed")


class TestProcessLauncher:
    def test_spawn_is_detached_and_silent(self):
        proc = Mock(pid=4242)
        with patch("doom_launcher.process_runner.subprocess.Popen", return_value=proc) as popen:
            pid = ProcessLauncher().spawn("/usr/bin/gzdoom", ["-iwad", "DOOM2.WAD"])

        assert pid == 4242
        args, kwargs = popen.call_args
        assert args[0] == ["/usr/bin/gzdoom", "-iwad", "DOOM2.WAD"]
        assert kwargs["stdout"] is subprocess.DEVNULL
        assert kwargs["stderr"] is subprocess.DEVNULL
        assert kwargs.get("start_new_session") or kwargs.get("creationflags")
        proc.wait.assert_not_called()

    def test_spawn_failure_raises_launch_error(self):
        with patch("doom_launcher.process_runner.subprocess.Popen", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(LaunchError, match="Permission denied"):
                ProcessLauncher().spawn("/usr/bin/gzdoom", [])

    def test_launch_reports_success(self):
        with patch("doom_launcher.process_runner.subprocess.Popen", return_value=Mock(pid=7)):
            result = ProcessLauncher().launch("/usr/bin/gzdoom", ["-file", "/a.wad"])

        assert result.success is True
        assert "7" in result.message

    def test_launch_reports_failure_without_raising(self):
        with patch("doom_launcher.process_runner.subprocess.Popen", side_effect=FileNotFoundError(2, "No such file")):
            result = ProcessLauncher().launch("/usr/bin/gzdoom", [])

        assert result.success is False
        assert "No such file" in result.message
