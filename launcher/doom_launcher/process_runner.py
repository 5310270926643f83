from __future__ import annotations
import os
import shutil
import subprocess
import sys
from typing import List, Optional
from .errors import ConfigurationError, LaunchError
from .models import LaunchResult
from .args_builder import format_command
from .logging_setup import get_logger

log = get_logger("doom.launcher.proc")


def resolve_executable(path: Optional[str]) -> str:
    """
    Absolute path of the engine binary.

    Accepts an explicit path or a bare command name looked up on PATH.
    Raises ConfigurationError when unset or when nothing exists there.
    """
    if not path or not path.strip():
        raise ConfigurationError("GZDoom executable path is not set. Please configure it in settings.")
    candidate = os.path.expanduser(path.strip())
    if os.path.isfile(candidate):
        return os.path.abspath(candidate)
    if os.sep not in candidate and "/" not in candidate:
        found = shutil.which(candidate)
        if found:
            return found
    raise ConfigurationError(f"GZDoom executable not found at path: {path}")


def _detach_kwargs() -> dict:
    if sys.platform == "win32":
        flags = getattr(subprocess, "DETACHED_PROCESS", 0) | getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0)
        return {"creationflags": flags}
    return {"start_new_session": True}


class ProcessLauncher:
    """Fire-and-forget spawner: the game outlives the launcher and nothing is captured."""

    def spawn(self, executable: str, argv: List[str]) -> int:
        cmd = [executable] + list(argv)
        log.info("Starting %s", format_command(executable, argv))
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                close_fds=True,
                **_detach_kwargs(),
            )
        except OSError as e:
            log.error("Failed to start %s: %s", executable, e)
            raise LaunchError(f"Failed to start {executable}: {e.strerror or e}") from e
        log.info("Started %s (pid=%s)", os.path.basename(executable), proc.pid)
        return proc.pid

    def launch(self, executable: str, argv: List[str]) -> LaunchResult:
        try:
            pid = self.spawn(executable, argv)
        except LaunchError as e:
            return LaunchResult(success=False, message=str(e))
        return LaunchResult(success=True, message=f"Game launched (pid {pid})")
