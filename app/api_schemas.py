from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(description="Health status")


class ConfigResponse(BaseModel):
    domains_config_path: str
    user_agent: str
    slack_configured: bool = Field(
        description="Whether SLACK_WEBHOOK_URL is set; the URL itself is not exposed"
    )


class TargetResponse(BaseModel):
    name: str
    url: str
    timeout_seconds: int


class RegistryResponse(BaseModel):
    domains: list[TargetResponse]
    count: int


class CheckOutcomeResponse(BaseModel):
    name: str
    url: str
    success: bool
    error: str | None = None
    status_code: int | None = None
    response_time_ms: int | None = None


class RunSummaryResponse(BaseModel):
    timestamp: str = Field(description="RFC 3339 time the run was summarized")
    total_checked: int = Field(ge=0)
    successful: int = Field(ge=0)
    failed: int = Field(ge=0)
    results: list[CheckOutcomeResponse]
