from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class CheckOutcome:
    name: str
    url: str
    success: bool
    error: str | None = None
    status_code: int | None = None
    response_time_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
