from __future__ import annotations
from typing import Any, Dict
from pydantic import ValidationError as PydanticValidationError

from ..errors import CorruptRecord, ValidationError
from ..models import AppSettings
from ..logging_setup import get_logger
from .json_io import load_json, save_json
from .layout import DataLayout

log = get_logger("doom.launcher.settings")


class SettingsStore:
    """settings.json: created with defaults on first read, updated by merge-then-write."""

    def __init__(self, layout: DataLayout):
        self.layout = layout

    def _write(self, settings: AppSettings) -> None:
        save_json(self.layout.settings_json, settings.model_dump(mode="json", by_alias=True))

    def load(self) -> AppSettings:
        path = self.layout.settings_json
        if not path.exists():
            defaults = AppSettings()
            self._write(defaults)
            log.info("Created default settings at %s", path)
            return defaults

        try:
            data = load_json(path)
            if not isinstance(data, dict):
                raise CorruptRecord("settings.json is not a JSON object")
            return AppSettings.model_validate(data)
        except (CorruptRecord, PydanticValidationError) as e:
            log.error("Settings unreadable, using defaults: %s", e)
            return AppSettings()

    def update(self, partial: Dict[str, Any]) -> AppSettings:
        """Overlay the fields present in `partial` on the current settings and write the result."""
        try:
            incoming = AppSettings.model_validate(partial or {})
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        changes = incoming.model_dump(include=incoming.model_fields_set)
        updated = self.load().model_copy(update=changes)
        self._write(updated)
        log.info("Saved settings: %s", sorted(changes))
        return updated
