from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Sequence

from app.checks.results import CheckOutcome

ALERT_TS_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


@dataclass
class AlertEntry:
    name: str
    error: str
    url: str
    response_time_ms: int


@dataclass
class AlertMessage:
    headline: str
    timestamp: str
    entries: list[AlertEntry] = field(default_factory=list)


def format_headline(count: int) -> str:
    if count == 1:
        return "1 domain is down"
    return f"{count} domains are down"


def build_alert(
    failures: Sequence[CheckOutcome], now: datetime | None = None
) -> AlertMessage | None:
    if not failures:
        return None

    ts = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    entries = [
        AlertEntry(
            name=f.name,
            error=f.error or "Unknown error",
            url=f.url,
            response_time_ms=f.response_time_ms or 0,
        )
        for f in failures
    ]
    return AlertMessage(
        headline=format_headline(len(failures)),
        timestamp=ts.strftime(ALERT_TS_FORMAT),
        entries=entries,
    )


def _mrkdwn(text: str) -> Dict[str, str]:
    return {"type": "mrkdwn", "text": text}


def to_slack_payload(alert: AlertMessage) -> Dict[str, Any]:
    """Render an alert as a Slack incoming-webhook body (Block Kit)."""
    blocks: list[Dict[str, Any]] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f"Uptime Alert: {alert.headline}"},
        },
        {"type": "section", "text": _mrkdwn(f"*Check Time:* {alert.timestamp}")},
        {"type": "divider"},
    ]

    for entry in alert.entries:
        blocks.append(
            {
                "type": "section",
                "fields": [
                    _mrkdwn(f"*Domain:*\n{entry.name}"),
                    _mrkdwn(f"*Error:*\n{entry.error}"),
                    _mrkdwn(f"*URL:*\n<{entry.url}|{entry.url}>"),
                    _mrkdwn(f"*Response Time:*\n{entry.response_time_ms}ms"),
                ],
            }
        )

    # Fallback text for notifications and clients without block support
    return {"text": f"🚨 *Uptime Alert: {alert.headline}*", "blocks": blocks}
