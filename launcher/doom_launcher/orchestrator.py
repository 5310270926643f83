from __future__ import annotations
from typing import Optional
from .settings import Settings
from .logging_setup import get_logger
from .errors import ConfigurationError
from .models import DoomVersion, LaunchOptions, LaunchResult, Mod
from .storage import DataLayout, ModFileCatalog, ModRecordStore, SettingsStore, VersionStore
from .args_builder import build, file_args, format_command
from .process_runner import ProcessLauncher, resolve_executable
from .planner import LaunchPlan

log = get_logger("doom.launcher.orch")

class Orchestrator:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.layout = DataLayout(settings.data_dir)
        self.mods = ModRecordStore(self.layout)
        self.catalog = ModFileCatalog(self.layout)
        self.versions = VersionStore(self.layout)
        self.app_settings = SettingsStore(self.layout)
        self.runner = ProcessLauncher()

    def prepare_environment(self) -> None:
        self.layout.ensure_structure()

    def _version_for(self, mod: Mod) -> Optional[DoomVersion]:
        if not mod.doom_version_id:
            return None
        version = self.versions.find(mod.doom_version_id)
        if version is None:
            log.warning("Mod %s references unknown doom version %s; launching without base args",
                        mod.id, mod.doom_version_id)
        return version

    def plan(self, mod_id: str, options: Optional[LaunchOptions] = None) -> LaunchPlan:
        """Dry run: everything launch() would do, except spawning."""
        mod = self.mods.get(mod_id)
        app_settings = self.app_settings.load()
        version = self._version_for(mod)
        argv = build(mod, version, app_settings, options)

        notes = []
        if mod.doom_version_id and version is None:
            notes.append(f"doom version {mod.doom_version_id} not found; base args omitted")
        skipped = [f for f in mod.files if not f.has_path]
        if skipped:
            notes.append(f"{len(skipped)} file(s) without filePath skipped")

        executable: Optional[str] = None
        try:
            executable = resolve_executable(app_settings.gz_doom_path)
        except ConfigurationError as e:
            notes.append(str(e))

        return LaunchPlan(
            ok=executable is not None,
            mod_id=mod.id,
            executable=executable,
            argv=argv,
            command=format_command(executable, argv) if executable else None,
            files=file_args(mod)[1:],
            notes=notes,
        )

    def launch(self, mod_id: str, options: Optional[LaunchOptions] = None) -> LaunchResult:
        """
        Launch a mod. Unknown ids raise NotFound; configuration and spawn
        problems come back as LaunchResult(success=False).
        """
        mod = self.mods.get(mod_id)
        app_settings = self.app_settings.load()
        try:
            executable = resolve_executable(app_settings.gz_doom_path)
        except ConfigurationError as e:
            log.error("Cannot launch mod %s: %s", mod_id, e)
            return LaunchResult(success=False, message=str(e))

        argv = build(mod, self._version_for(mod), app_settings, options)
        result = self.runner.launch(executable, argv)
        if not result.success:
            log.error("Launch of mod %s failed: %s", mod_id, result.message)
        return result
