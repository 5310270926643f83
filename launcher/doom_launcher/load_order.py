from __future__ import annotations
import os
from typing import Iterable, List, Set
from .models import ModFile
from .logging_setup import get_logger

log = get_logger("doom.launcher.load_order")


def _order_key(f: ModFile) -> int:
    return f.load_order if f.load_order is not None else 0


def resolve(files: Iterable[ModFile]) -> List[ModFile]:
    """
    Return the files in load order.

    Stable sort by loadOrder ascending (missing counts as 0), so entries with
    equal load order keep their input order and resolving a resolved list is a
    no-op. Files without a path are dropped since the engine cannot load them;
    a path listed twice is kept only at its first position in load order.
    The input is not modified.
    """
    usable: List[ModFile] = []
    for f in files:
        if not f.has_path:
            log.warning("Mod file %s (%s) has no filePath, skipping", f.id, f.name or "unnamed")
            continue
        usable.append(f)

    ordered: List[ModFile] = []
    seen: Set[str] = set()
    for f in sorted(usable, key=_order_key):
        # same form args_builder hands to -file, so "a.wad" and "./a.wad" collide
        path = os.path.abspath(os.path.expanduser(f.file_path.strip()))
        if path in seen:
            log.warning("Mod file %s listed more than once, keeping first occurrence", path)
            continue
        seen.add(path)
        ordered.append(f)
    return ordered
