# calc_client/settings.py
from __future__ import annotations
from typing import Optional, Dict, Any
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path
import os
import tomllib
from dotenv import load_dotenv

# Project root: .../calc-client
BASE_DIR = Path(__file__).resolve().parents[1]
CONFIG_PATH = BASE_DIR / "config" / "app.toml"

# Force-load .env from project root, then fall back to CWD
load_dotenv(BASE_DIR / ".env")
load_dotenv()  # no-op if already loaded

class Settings(BaseSettings):
    # service
    api_base_url: str = Field(default="http://localhost:8080")  # reads API_BASE_URL
    request_timeout: Optional[float] = None  # seconds; None leaves it to the transport

    # background calls; results are picked up every refresh_interval seconds
    max_workers: int = Field(default=4, ge=1)
    refresh_interval: float = Field(default=1.0, gt=0)

    # app
    log_level: str = Field(default="INFO")
    page_title: str = Field(default="Expression Calculator")

    # pydantic v2 settings config
    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        env_file=[str(BASE_DIR / ".env"), ".env"],  # try both absolute and CWD .env
        env_file_encoding="utf-8",
    )

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

def load_settings(cfg_path: Path = CONFIG_PATH) -> Settings:
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        with cfg_path.open("rb") as f:
            data = tomllib.load(f)
    # TOML defaults, env (and .env, already loaded above) wins
    toml_defaults = {
        k: v for k, v in data.get("app", {}).items()
        if k.upper() not in _env_keys()
    }
    return Settings(**toml_defaults)

def _env_keys() -> set:
    return {k.upper() for k in os.environ}
