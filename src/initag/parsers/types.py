from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from initag.core.models import LineKind


@dataclass(frozen=True)
class ParsedLine:
    """ One classified input line. `key`/`value` are set for assignments only."""
    kind: LineKind
    line: int
    text: str
    key: Optional[str] = None
    value: Optional[str] = None
