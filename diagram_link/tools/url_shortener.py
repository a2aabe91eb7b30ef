"""Best-effort URL shortening through the TinyURL create API."""
from __future__ import annotations

import logging

import requests

from diagram_link.utils.config import settings


logger = logging.getLogger(__name__)


def shorten_url(long_url: str) -> str:
    """Return a short alias for `long_url`, or `long_url` itself on any failure.

    One attempt only; the caller's response never depends on the shortener.
    """
    if not settings.shortener_enabled:
        return long_url
    try:
        response = requests.get(
            settings.shortener_url,
            params={"url": long_url},
            timeout=settings.shortener_timeout,
        )
    except requests.RequestException as exc:
        logger.warning("URL shortening failed, using long URL: %s", exc)
        return long_url

    if not response.ok:
        logger.warning("URL shortening failed (%s), using long URL", response.status_code)
        return long_url

    short_url = (response.text or "").strip()
    if not short_url.startswith(("http://", "https://")):
        logger.warning("URL shortener returned an unexpected body, using long URL")
        return long_url
    return short_url
