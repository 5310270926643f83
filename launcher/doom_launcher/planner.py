from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

@dataclass
class LaunchPlan:
    ok: bool
    mod_id: str
    executable: Optional[str]
    argv: List[str]
    command: Optional[str]
    files: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
