from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Document:

    id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.id is None or str(self.id) == "":
            raise ValueError("Document id cannot be empty")

    def to_source(self) -> Dict[str, Any]:
        return dict(self.data)


@dataclass(frozen=True)
class SearchHit:

    id: str
    score: float = 0.0
    source: Dict[str, Any] = field(default_factory=dict)
