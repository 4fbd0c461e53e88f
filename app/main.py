import logging

from fastapi import FastAPI, HTTPException

from app.api_schemas import (
    ConfigResponse,
    HealthResponse,
    RegistryResponse,
    RunSummaryResponse,
)
from app.checks.http_check import build_session
from app.config import settings
from app.registry import ConfigError, load_registry
from app.runner import build_notifier, run_once

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Watchtower",
    version="1.0.0",
    description=(
        "Uptime monitor that loads targets from domains.json, checks them "
        "concurrently over HTTP and posts a Slack alert when any are down."
    ),
)


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by probes and orchestration.",
)
def health():
    return {"status": "ok"}


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["system"],
    summary="Current Effective Config",
    description="Returns non-secret runtime config values.",
)
def config():
    return {
        "domains_config_path": settings.DOMAINS_CONFIG_PATH,
        "user_agent": settings.WATCHTOWER_USER_AGENT,
        "slack_configured": bool(settings.SLACK_WEBHOOK_URL),
    }


def _load_targets():
    try:
        return load_registry()
    except ConfigError as exc:
        logger.error("Could not load targets: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get(
    "/api/registry",
    response_model=RegistryResponse,
    tags=["registry"],
    summary="Monitored Targets",
    description="Returns the targets parsed from the domains config, defaults applied.",
)
def registry():
    targets = _load_targets()
    return {
        "domains": [t.model_dump() for t in targets],
        "count": len(targets),
    }


@app.get(
    "/",
    response_model=RunSummaryResponse,
    tags=["checks"],
    include_in_schema=False,
)
@app.get(
    "/api/check",
    response_model=RunSummaryResponse,
    tags=["checks"],
    summary="Run Uptime Checks",
    description=(
        "Checks every target once, alerts Slack if any are down, and returns "
        "the run summary. Individual check failures still return 200."
    ),
)
async def run_checks():
    targets = _load_targets()
    with build_session(settings.WATCHTOWER_USER_AGENT) as session:
        summary = await run_once(targets, session, notifier=build_notifier())
    return summary.to_dict()
