"""
HTTP adapter — GET requests through ``urllib.request``.

Release metadata and release assets are both plain GETs. Error statuses
are returned as responses so the services can report the status code
and reason; only transport failures raise (``URLError`` is an ``OSError``).
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request

from aftman_bootstrap import __version__
from aftman_bootstrap.adapters.base import HttpClient, HttpResponse
from aftman_bootstrap.core.constants import DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"aftman-bootstrap/{__version__}"


class UrllibHttpClient(HttpClient):
    """Standard-library HTTP client.

    Args:
        timeout: Socket timeout in seconds for connect and each read.
        user_agent: ``User-Agent`` header sent with every request.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self.user_agent = user_agent

    def get(self, url: str) -> HttpResponse:
        req = urllib.request.Request(
            url,
            headers={
                "Accept": "application/json, application/octet-stream",
                "User-Agent": self.user_agent,
            },
        )
        logger.debug("GET %s (timeout=%ss)", url, self.timeout)
        try:
            resp = urllib.request.urlopen(req, timeout=self.timeout)
        except urllib.error.HTTPError as e:
            logger.debug("GET %s -> %s %s", url, e.code, e.reason)
            body = e if e.fp is not None else None
            return HttpResponse(e.code, str(e.reason), body)

        logger.debug("GET %s -> %s %s", url, resp.status, resp.reason)
        return HttpResponse(resp.status, resp.reason, resp)
