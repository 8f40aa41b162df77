# config.py

"""
Configuration for the Deep Search tool.
Tunables live here as module constants; per-deployment settings come from
the environment (or a .env file) through load_settings().
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from deep_search.errors import ConfigError

# 🔎 Tool argument limits
DEFAULT_RESULTS = 3
MAX_RESULTS = 10
DEFAULT_DEPTH = 1
MAX_DEPTH = 3

# 🌐 Search provider
BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"
SEARCH_TIMEOUT_S = 15

# 🚀 Browser
PAGE_TIMEOUT_MS = 30000   # Navigation/default timeout per page
WAIT_UNTIL = "networkidle"   # Wait for network quiescence before extracting
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
]

# 📝 Report
CONTENT_CHAR_BUDGET = 1000   # Characters of main text shown per page


class Settings(BaseModel):
    brave_api_key: str = Field(min_length=1)
    headless: bool = True
    page_timeout_ms: int = Field(default=PAGE_TIMEOUT_MS, gt=0)
    debug_mode: bool = False
    block_assets: bool = False


def _env(name: str, *fallbacks: str):
    for key in (name,) + fallbacks:
        value = os.environ.get(key)
        if value is not None and value.strip() != "":
            return value.strip()
    return None


def load_settings(dotenv: bool = True) -> Settings:
    """
    Read and validate settings from the environment.
    Raises ConfigError when BRAVE_API_KEY is missing or a value does not parse.
    """
    if dotenv:
        load_dotenv()

    raw = {
        "brave_api_key": _env("BRAVE_API_KEY") or "",
        "headless": _env("BROWSER_HEADLESS", "PUPPETEER_HEADLESS"),
        "page_timeout_ms": _env("PAGE_TIMEOUT"),
        "debug_mode": _env("DEBUG_MODE"),
        "block_assets": _env("BLOCK_ASSETS"),
    }
    try:
        return Settings(**{k: v for k, v in raw.items() if v is not None})
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ConfigError(f"Environment validation failed ({fields}): {e}") from e
