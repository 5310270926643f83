"""
File picker capability behind /api/dialog/*.

Two hosts:
- StubDialogHost: fixed mock answers, for headless/browser use and tests
- ZenityDialogHost: native GTK picker through the `zenity` binary

The host is picked once at startup from Settings.dialog_host.
"""

from __future__ import annotations
import subprocess
from typing import Any, Dict, List, Optional
from .settings import Settings
from .logging_setup import get_logger

log = get_logger("doom.launcher.dialogs")


class DialogHost:
    """Interface: open_dialog -> {canceled, filePaths}, save_dialog -> {canceled, filePath}."""

    def open_dialog(self, options: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def save_dialog(self, options: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class StubDialogHost(DialogHost):
    def open_dialog(self, options: Dict[str, Any]) -> Dict[str, Any]:
        log.info("Mock open dialog with options: %s", options)
        return {"canceled": False, "filePaths": ["/mock/path/example.wad"]}

    def save_dialog(self, options: Dict[str, Any]) -> Dict[str, Any]:
        log.info("Mock save dialog with options: %s", options)
        return {"canceled": False, "filePath": "/mock/path/saved-file.txt"}


class ZenityDialogHost(DialogHost):
    def __init__(self, binary: str = "zenity"):
        self.binary = binary

    def _run(self, args: List[str]) -> Optional[str]:
        try:
            result = subprocess.run([self.binary] + args, capture_output=True, text=True)
        except FileNotFoundError:
            log.warning("%s not available, treating dialog as canceled", self.binary)
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    @staticmethod
    def _common_args(options: Dict[str, Any]) -> List[str]:
        args = ["--file-selection"]
        if options.get("title"):
            args.append(f"--title={options['title']}")
        if options.get("defaultPath"):
            args.append(f"--filename={options['defaultPath']}")
        for flt in options.get("filters") or []:
            exts = " ".join(f"*.{e}" for e in flt.get("extensions", []))
            if exts:
                args.append(f"--file-filter={flt.get('name', 'Files')} | {exts}")
        return args

    def open_dialog(self, options: Dict[str, Any]) -> Dict[str, Any]:
        args = self._common_args(options)
        properties = options.get("properties") or []
        if "openDirectory" in properties:
            args.append("--directory")
        if "multiSelections" in properties:
            args += ["--multiple", "--separator=|"]
        out = self._run(args)
        if not out:
            return {"canceled": True, "filePaths": []}
        return {"canceled": False, "filePaths": out.split("|")}

    def save_dialog(self, options: Dict[str, Any]) -> Dict[str, Any]:
        out = self._run(self._common_args(options) + ["--save"])
        if not out:
            return {"canceled": True, "filePath": ""}
        return {"canceled": False, "filePath": out}


def select_dialog_host(settings: Settings) -> DialogHost:
    kind = (settings.dialog_host or "stub").lower()
    if kind == "native":
        return ZenityDialogHost()
    if kind != "stub":
        log.warning("Unknown dialog host %r, using stub", settings.dialog_host)
    return StubDialogHost()
