from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from app.checks.results import CheckOutcome


def serialize_ts(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class RunSummary:
    timestamp: str
    total_checked: int
    successful: int
    failed: int
    results: list[CheckOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[CheckOutcome]:
        return [r for r in self.results if not r.success]

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "total_checked": self.total_checked,
            "successful": self.successful,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }


def summarize(
    outcomes: Iterable[CheckOutcome],
    now: datetime | None = None,
) -> RunSummary:
    results = list(outcomes)
    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful

    return RunSummary(
        timestamp=serialize_ts(now or datetime.now(timezone.utc)) or "",
        total_checked=len(results),
        successful=successful,
        failed=failed,
        results=results,
    )
