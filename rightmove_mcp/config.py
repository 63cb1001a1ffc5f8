"""
Runtime settings for the Rightmove tool server.

The core never reads the environment itself: a ``Settings`` value is built
once at startup (``Settings.from_env()``) and handed to the URL builder,
the HTTP client and the tool router.

Environment overrides (all optional):
  RIGHTMOVE_BASE_URL=https://www.rightmove.co.uk
  RM_TIMEOUT=30           # seconds per GET
  RM_MAX_RETRIES=2        # transport-level retries on 429/5xx
  RM_BACKOFF=0.5          # urllib3 backoff factor
  RM_PAGE_SIZE=24         # results per search page (pagination step)
  RM_USER_AGENT=...       # override the browser-like User-Agent
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

DEFAULT_BASE_URL = "https://www.rightmove.co.uk"
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 2
DEFAULT_BACKOFF_FACTOR = 0.5
DEFAULT_PAGE_SIZE = 24

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


def as_int(val, default=None):
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


def as_float(val, default=None):
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    page_size: int = DEFAULT_PAGE_SIZE
    user_agent: str = DEFAULT_USER_AGENT
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))

    def __post_init__(self) -> None:
        # urljoin and f-string paths both expect no trailing slash
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        page_size = as_int(env.get("RM_PAGE_SIZE"), DEFAULT_PAGE_SIZE)
        if not page_size or page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        timeout = as_int(env.get("RM_TIMEOUT"), DEFAULT_TIMEOUT)
        if not timeout or timeout < 1:
            timeout = DEFAULT_TIMEOUT
        return cls(
            base_url=(env.get("RIGHTMOVE_BASE_URL") or DEFAULT_BASE_URL).strip(),
            timeout=timeout,
            max_retries=max(0, as_int(env.get("RM_MAX_RETRIES"), DEFAULT_MAX_RETRIES)),
            backoff_factor=as_float(env.get("RM_BACKOFF"), DEFAULT_BACKOFF_FACTOR),
            page_size=page_size,
            user_agent=(env.get("RM_USER_AGENT") or DEFAULT_USER_AGENT).strip(),
        )
