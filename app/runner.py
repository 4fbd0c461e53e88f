from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import requests

from app.checks.http_check import check
from app.checks.results import CheckOutcome
from app.config import settings
from app.models import Target
from app.notifier import NotifyError, SlackConfig, SlackNotifier
from app.ops_logic import RunSummary, summarize

logger = logging.getLogger(__name__)


async def run_all(
    targets: Sequence[Target], session: requests.Session
) -> list[CheckOutcome]:
    """
    Check every target at once and collect outcomes in completion order.

    A check that crashes instead of returning an outcome is logged and left
    out of the results.
    """
    if not targets:
        return []

    # One worker per target so no check waits for a free thread.
    executor = ThreadPoolExecutor(max_workers=len(targets), thread_name_prefix="check")
    out: list[CheckOutcome] = []
    dropped = 0
    try:
        tasks = [asyncio.create_task(check(session, t, executor)) for t in targets]
        for fut in asyncio.as_completed(tasks):
            try:
                out.append(await fut)
            except Exception:
                dropped += 1
                logger.exception("Check task failed")
    finally:
        # Requests that overran their deadline finish on their own.
        executor.shutdown(wait=False)

    if dropped:
        logger.warning("%d of %d checks did not complete", dropped, len(tasks))
    return out


def build_notifier() -> SlackNotifier | None:
    if not settings.SLACK_WEBHOOK_URL:
        return None
    return SlackNotifier(
        SlackConfig(
            webhook_url=settings.SLACK_WEBHOOK_URL,
            timeout_s=settings.SLACK_TIMEOUT_SECONDS,
        )
    )


async def _notify_failures(
    notifier: SlackNotifier | None, failures: list[CheckOutcome]
) -> None:
    if not failures:
        return
    if notifier is None:
        logger.warning("SLACK_WEBHOOK_URL not set, skipping notification")
        return

    try:
        await asyncio.to_thread(notifier.notify, failures)
    except NotifyError as exc:
        # Delivery problems never fail the run.
        logger.error("Failed to send Slack notification: %s", exc)


async def run_once(
    targets: Sequence[Target],
    session: requests.Session,
    notifier: SlackNotifier | None = None,
) -> RunSummary:
    outcomes = await run_all(targets, session)
    summary = summarize(outcomes)
    logger.info(
        "Checked %d targets: %d up, %d down",
        summary.total_checked,
        summary.successful,
        summary.failed,
    )
    await _notify_failures(notifier, summary.failures)
    return summary
