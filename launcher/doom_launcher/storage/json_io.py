from __future__ import annotations
import json
from pathlib import Path
from typing import Any
from ..errors import CorruptRecord
from ..logging_setup import get_logger

log = get_logger("doom.launcher.storage")

def load_json(path: Path) -> Any:
    """Parse a JSON document; a file that exists but does not parse raises CorruptRecord."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        log.error("Failed to parse %s: %s", path, e)
        raise CorruptRecord(f"{path.name} is not valid JSON: {e}") from e

def save_json(path: Path, data: Any) -> None:
    """Write a JSON document atomically (temp file + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(path.suffix + ".tmp")
    temp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    temp_path.replace(path)
    log.debug("Saved %s", path)
