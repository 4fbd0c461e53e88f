import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DOMAINS_PATH = Path(__file__).resolve().parents[1] / "domains.json"


class Settings:
    SLACK_WEBHOOK_URL: str = os.getenv("SLACK_WEBHOOK_URL")
    SLACK_TIMEOUT_SECONDS: float = float(os.getenv("SLACK_TIMEOUT_SECONDS", "5"))
    DOMAINS_CONFIG_PATH: str = (
        os.getenv("DOMAINS_CONFIG_PATH") or str(DEFAULT_DOMAINS_PATH)
    )
    WATCHTOWER_USER_AGENT: str = os.getenv("WATCHTOWER_USER_AGENT", "Watchtower/1.0")


settings = Settings()
