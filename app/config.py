# file: config.py

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CREDENTIALS_FILE = "serviceAccountKey.json"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    firebase_credentials: Optional[str] = None
    firebase_project_id: Optional[str] = None
    fcm_dry_run: bool = False
    log_level: str = "INFO"


def get_settings() -> Settings:
    """
    Reads settings from the environment (and .env).
    Falls back to serviceAccountKey.json in the working directory when no
    credentials path is set and that file exists; otherwise Firebase uses
    application-default credentials.
    """
    credentials_path = os.getenv("FIREBASE_CREDENTIALS")
    if not credentials_path and Path(DEFAULT_CREDENTIALS_FILE).exists():
        credentials_path = DEFAULT_CREDENTIALS_FILE

    return Settings(
        firebase_credentials=credentials_path or None,
        firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
        fcm_dry_run=_env_flag("FCM_DRY_RUN"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
