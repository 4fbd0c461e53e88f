from __future__ import annotations

import asyncio
import time
from concurrent.futures import Executor

import requests

from app.checks.results import CheckOutcome
from app.models import Target

# Raised before anything goes on the wire.
_REQUEST_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidHeader,
    requests.exceptions.URLRequired,
)


def build_session(user_agent: str) -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    return session


def classify_error(exc: BaseException) -> str:
    # ConnectTimeout is also a ConnectionError, so timeouts go first.
    if isinstance(exc, (requests.Timeout, asyncio.TimeoutError)):
        return "Timeout"
    if isinstance(exc, requests.ConnectionError):
        return "Connection failed"
    if isinstance(exc, _REQUEST_ERRORS):
        return "Request failed"
    return f"Error: {exc}"


def _get_status(session: requests.Session, url: str, timeout_s: int) -> int:
    # Only the status line and headers are needed; the body is never read.
    with session.get(url, timeout=timeout_s, stream=True) as r:
        return r.status_code


async def check(
    session: requests.Session,
    target: Target,
    executor: Executor | None = None,
) -> CheckOutcome:
    """
    Check one target and return its outcome; never raises.

    requests applies its timeout per socket operation, so the whole request
    is also bounded by target.timeout_seconds here. A request still running
    past that deadline is reported as a timeout while its worker thread
    finishes in the background.
    """
    loop = asyncio.get_running_loop()
    start = time.perf_counter()
    try:
        status = await asyncio.wait_for(
            loop.run_in_executor(
                executor, _get_status, session, target.url, target.timeout_seconds
            ),
            timeout=target.timeout_seconds,
        )
        latency_ms = int((time.perf_counter() - start) * 1000)
        ok = 200 <= status < 300
        return CheckOutcome(
            name=target.name,
            url=target.url,
            success=ok,
            error=None if ok else f"HTTP {status}",
            status_code=status,
            response_time_ms=latency_ms,
        )
    except Exception as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        return CheckOutcome(
            name=target.name,
            url=target.url,
            success=False,
            error=classify_error(e),
            response_time_ms=latency_ms,
        )
