from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from app.config import settings
from app.models import Target, TargetsConfig

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    pass


def load_registry(path: Path | str | None = None) -> list[Target]:
    """
    Load the monitored targets from a domains document.

    The safe YAML loader also parses plain JSON, so both domains.json and
    domains.yml work. Any problem reading or validating the file raises
    ConfigError, which is the only failure that aborts a run.
    """
    path = Path(path or settings.DOMAINS_CONFIG_PATH)
    if not path.exists():
        raise ConfigError(f"Missing domains config at {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc

    try:
        cfg = TargetsConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {path.name}: {exc}") from exc

    # Names are labels only; duplicates are allowed but almost always a typo.
    seen = set()
    for t in cfg.domains:
        if t.name in seen:
            logger.warning("Duplicate target name in %s: %s", path.name, t.name)
        seen.add(t.name)

    return list(cfg.domains)
