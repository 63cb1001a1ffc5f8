"""Single-shot HTML fetcher with a browser-like header set.

A fresh ``requests.Session`` is built per call so concurrent tool calls
never share connection state. Transport-level retries (429/5xx) are
delegated to urllib3's ``Retry``; anything that still fails surfaces as
``TransportFailure`` with the underlying message kept as-is.
"""

from __future__ import annotations

import logging
from typing import Dict

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import Settings
from .errors import TransportFailure


class HttpClient:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def headers(self) -> Dict[str, str]:
        hdrs = dict(self.settings.headers)
        hdrs["User-Agent"] = self.settings.user_agent
        return hdrs

    def _session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(self.headers())
        retries = Retry(
            total=self.settings.max_retries,
            backoff_factor=self.settings.backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def get_html(self, url: str) -> str:
        logging.info(f"GET {url}")
        with self._session() as session:
            # urllib3 raises ValueError for unusable timeouts and URLs
            try:
                resp = session.get(url, timeout=self.settings.timeout, allow_redirects=True)
            except (requests.RequestException, ValueError) as e:
                logging.warning(f"Network error on {url}: {e}")
                raise TransportFailure(str(e), url=url) from e

        if not 200 <= resp.status_code < 300:
            logging.warning(f"HTTP {resp.status_code} for {url}")
            raise TransportFailure(
                f"Request failed with status code {resp.status_code}",
                url=url,
                status=resp.status_code,
            )
        logging.debug(f"Fetched {len(resp.text)} chars from {url}")
        return resp.text
