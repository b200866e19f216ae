"""Server configuration.

Values come from environment variables first, then from the ``[server]`` table
of ``~/.config/modernizer/config.toml`` (or the file named by
``MODERNIZER_CONFIG``), then from the defaults below.
"""

from __future__ import annotations

import logging
import os
import tomllib
from functools import lru_cache

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/modernizer/config.toml"

DEFAULT_ALLOWED_EXTENSIONS = [
    ".py", ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".java", ".go", ".rb",
    ".rs", ".php", ".cs", ".c", ".h", ".cpp", ".hpp", ".kt", ".swift", ".scala",
    ".sql", ".sh", ".html", ".css", ".vue", ".json", ".yaml", ".yml", ".txt",
]


class Settings(BaseModel):
    gemini_model: str = "gemini-2.0-flash"
    demo_key: str = "demo-key-for-hackathon"
    max_upload_bytes: int = 1024 * 1024
    allowed_extensions: list[str] = DEFAULT_ALLOWED_EXTENSIONS
    cors_origins: list[str] = ["*"]
    help_url: str = "https://makersuite.google.com/app/apikey"


def _load_config_file() -> dict:
    config_path = os.path.expanduser(os.environ.get("MODERNIZER_CONFIG", DEFAULT_CONFIG_PATH))
    if not os.path.exists(config_path):
        return {}
    try:
        with open(config_path, "rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
        return {}
    return config.get("server", {})


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build the settings once per process."""
    values = _load_config_file()

    env = os.environ
    if "MODERNIZER_GEMINI_MODEL" in env:
        values["gemini_model"] = env["MODERNIZER_GEMINI_MODEL"]
    if "MODERNIZER_DEMO_KEY" in env:
        values["demo_key"] = env["MODERNIZER_DEMO_KEY"]
    if "MODERNIZER_MAX_UPLOAD_BYTES" in env:
        values["max_upload_bytes"] = env["MODERNIZER_MAX_UPLOAD_BYTES"]
    if "MODERNIZER_ALLOWED_EXTENSIONS" in env:
        values["allowed_extensions"] = _split(env["MODERNIZER_ALLOWED_EXTENSIONS"])
    if "MODERNIZER_CORS_ORIGINS" in env:
        values["cors_origins"] = _split(env["MODERNIZER_CORS_ORIGINS"])

    return Settings(**values)
