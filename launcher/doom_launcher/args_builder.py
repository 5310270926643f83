"""
Launch argument assembly.

argv layout (order matters, later flags override earlier ones in most ports):

    [-iwad <defaultIwad>] <version args> [-file <paths...>] [-savedir <dir>] <mod params> <launch options>

Everything here is pure: no disk access, no process state.
"""

from __future__ import annotations
import os
import shlex
from typing import List, Optional
from .models import AppSettings, DoomVersion, LaunchOptions, Mod
from .load_order import resolve


def _tokens(value: Optional[str]) -> List[str]:
    return value.split() if value else []


def _absolute(path: str) -> str:
    return os.path.abspath(os.path.expanduser(path.strip()))


def base_args(version: Optional[DoomVersion]) -> List[str]:
    """Version args, with -iwad <defaultIwad> in front unless the args already select an IWAD."""
    if version is None:
        return []
    args = _tokens(version.args)
    iwad = (version.default_iwad or "").strip()
    if iwad and not any(a.lower() == "-iwad" for a in args):
        args = ["-iwad", iwad] + args
    return args


def file_args(mod: Mod) -> List[str]:
    paths = [_absolute(f.file_path) for f in resolve(mod.files)]
    if not paths:
        return []
    return ["-file"] + paths


def savedir_args(mod: Mod, settings: AppSettings) -> List[str]:
    save_dir = (mod.save_directory or "").strip() or (settings.savegames_path or "").strip()
    if not save_dir:
        return []
    return ["-savedir", os.path.expanduser(save_dir)]


def option_args(options: Optional[LaunchOptions]) -> List[str]:
    if options is None:
        return []
    args = _tokens(options.custom_args)
    if options.skill:
        args += ["-skill", str(options.skill)]
    if options.warp and options.warp.strip():
        args += ["-warp"] + options.warp.split()
    return args


def build(mod: Mod, version: Optional[DoomVersion], settings: AppSettings,
          options: Optional[LaunchOptions] = None) -> List[str]:
    """Compose the full argument vector for launching `mod` on top of `version`."""
    return (
        base_args(version)
        + file_args(mod)
        + savedir_args(mod, settings)
        + _tokens(mod.launch_parameters)
        + option_args(options)
    )


def format_command(executable: str, argv: List[str]) -> str:
    """Shell-quoted command line, for logs and dry-run plans only."""
    return shlex.join([executable] + list(argv))
