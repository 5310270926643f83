"""
Tests for the doom-launcher command line and logging setup.
"""

import json
import logging
from unittest.mock import Mock, patch

import pytest

from doom_launcher import cli
from doom_launcher.logging_setup import setup_logging
from doom_launcher.models import Mod
from doom_launcher.orchestrator import Orchestrator
from doom_launcher.settings import Settings


@pytest.fixture
def home(tmp_path, monkeypatch):
    data = tmp_path / "home"
    monkeypatch.setenv("DOOM_LAUNCHER_HOME", str(data))
    with patch("doom_launcher.cli.setup_logging"):
        yield data


@pytest.fixture
def mod_id(home):
    orch = Orchestrator(Settings())
    orch.prepare_environment()
    return orch.mods.save(Mod(title="Sunlust", doom_version_id="2")).id


def test_settings_from_env(home):
    assert Settings().data_dir == home


def test_init_seeds_data_dir(home, capsys):
    assert cli.main(["init"]) == 0
    assert (home / "doomVersions.json").exists()
    assert (home / "settings.json").exists()
    assert str(home) in capsys.readouterr().out


def test_plan_prints_json(home, mod_id, capsys, tmp_path):
    exe = tmp_path / "gzdoom"
    exe.write_text("")
    Orchestrator(Settings()).app_settings.update({"gzDoomPath": str(exe)})

    assert cli.main(["plan", mod_id, "--skill", "2"]) == 0

    plan = json.loads(capsys.readouterr().out)
    assert plan["mod_id"] == mod_id
    assert plan["argv"][:2] == ["-iwad", "DOOM2.WAD"]
    assert plan["argv"][-2:] == ["-skill", "2"]


def test_plan_unknown_mod(home, capsys):
    assert cli.main(["plan", "424242"]) == 1
    assert "not found" in capsys.readouterr().out


def test_launch_without_executable(home, mod_id, capsys):
    Orchestrator(Settings()).app_settings.update({"gzDoomPath": ""})

    with patch("doom_launcher.process_runner.subprocess.Popen") as popen:
        assert cli.main(["launch", mod_id]) == 1

    popen.assert_not_called()
    assert "not set" in capsys.readouterr().out


def test_launch_spawns(home, mod_id, tmp_path):
    exe = tmp_path / "gzdoom"
    exe.write_text("")
    Orchestrator(Settings()).app_settings.update({"gzDoomPath": str(exe)})

    with patch("doom_launcher.process_runner.subprocess.Popen", return_value=Mock(pid=5)) as popen:
        assert cli.main(["launch", mod_id, "--warp", "MAP01", "--args", "-fast"]) == 0

    assert popen.call_args[0][0][-3:] == ["-fast", "-warp", "MAP01"]


def test_api_runs_uvicorn(home):
    with patch("doom_launcher.cli.uvicorn.run") as run:
        assert cli.main(["api", "--port", "9001"]) == 0

    _, kwargs = run.call_args
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9001


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    launcher = logging.getLogger("doom.launcher")
    saved = (root.handlers[:], root.level, launcher.handlers[:])
    yield
    for handler in launcher.handlers:
        handler.close()
    root.handlers[:], launcher.handlers[:] = saved[0], saved[2]
    root.setLevel(saved[1])


def test_logging_setup_writes_file(tmp_path, restore_logging):
    settings = Settings(data_dir=tmp_path, log_json=True)
    setup_logging(settings)

    logging.getLogger("doom.launcher.test").info("hello %s", "doom")
    for handler in logging.getLogger("doom.launcher").handlers:
        handler.flush()

    line = (tmp_path / "logs" / "launcher.log").read_text(encoding="utf-8").strip().splitlines()[-1]
    record = json.loads(line)
    assert record["msg"] == "hello doom"
    assert record["logger"] == "doom.launcher.test"
