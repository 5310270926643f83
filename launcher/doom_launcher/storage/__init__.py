"""
JSON-file storage: data layout, mod records, shared file catalog,
doom versions and user settings.
"""

from .layout import DataLayout
from .catalog import ModFileCatalog
from .mods import ModRecordStore
from .versions import VersionStore
from .settings_store import SettingsStore

__all__ = [
    "DataLayout",
    "ModFileCatalog",
    "ModRecordStore",
    "VersionStore",
    "SettingsStore",
]
