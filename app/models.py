from __future__ import annotations

from typing import List
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Target(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    url: str
    timeout_seconds: int = Field(default=10, ge=1)

    @field_validator("url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(f"not an http(s) URL: {value!r}")
        return value


class TargetsConfig(BaseModel):
    domains: List[Target]
