from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import requests

from app.checks.results import CheckOutcome
from app.formatting import build_alert, to_slack_payload


class NotifyError(RuntimeError):
    pass


@dataclass
class SlackConfig:
    webhook_url: str
    timeout_s: float = 5


class SlackNotifier:
    def __init__(self, cfg: SlackConfig) -> None:
        self.cfg = cfg

    def notify(self, failures: Sequence[CheckOutcome]) -> None:
        alert = build_alert(failures)
        if alert is None:
            return

        try:
            resp = requests.post(
                self.cfg.webhook_url,
                json=to_slack_payload(alert),
                timeout=self.cfg.timeout_s,
            )
        except requests.RequestException as exc:
            raise NotifyError(
                f"Slack webhook request failed: {exc.__class__.__name__}: {exc}"
            ) from exc

        if not 200 <= resp.status_code < 300:
            snippet = resp.text[:240].replace("\n", "\\n")
            raise NotifyError(
                f"Slack webhook returned HTTP {resp.status_code}: {snippet}"
            )
