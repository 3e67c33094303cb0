"""
Shared HTTP client for the metadata service.

Provides a singleton httpx.Client for connection pooling across import runs.
"""
import threading
from typing import Optional

import httpx

from label_translator.core.config import settings
from label_translator.core.logging_config import LogCategory, log_info

_client: Optional[httpx.Client] = None
_client_lock = threading.Lock()


def _default_headers() -> dict[str, str]:
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json; charset=utf-8",
    }
    if settings.metadata_service_token:
        headers["Authorization"] = f"Bearer {settings.metadata_service_token}"
    return headers


def get_http_client() -> httpx.Client:
    """
    Get the shared Client instance.

    Creates a new instance if one doesn't exist or is closed.
    """
    global _client
    if _client is None or _client.is_closed:
        with _client_lock:
            if _client is None or _client.is_closed:
                _client = httpx.Client(
                    timeout=settings.http_timeout_seconds,
                    headers=_default_headers(),
                )
                log_info(
                    "HTTP client created",
                    category=LogCategory.HTTP,
                    timeout=settings.http_timeout_seconds,
                )
    return _client


def close_http_client():
    """Close the shared client if it exists."""
    global _client
    with _client_lock:
        if _client and not _client.is_closed:
            _client.close()
            _client = None
            log_info("HTTP client closed", category=LogCategory.HTTP)

