"""
FILE: focodiario/core/backend.py
PURPOSE: HTTP plumbing shared by the identity and data clients
EXPORTS:
  - create_http_client(config, transport) -> httpx.Client
  - error_message(response) -> str
  - decode_json(response) -> Any
DEPENDENCIES:
  - httpx (HTTP client)
NOTES:
  - Every request carries the project API key in the apikey header
  - Error bodies differ between GoTrue and PostgREST; error_message() reads both
"""

from typing import Any, Optional

import httpx

from .config import FocoConfig
from .exceptions import RemoteError


def create_http_client(
    config: FocoConfig,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Build the one httpx client used for every backend request."""
    config.require_backend()
    return httpx.Client(
        base_url=config.supabase_url,
        headers={
            "apikey": config.supabase_key,
            "Accept": "application/json",
        },
        timeout=config.request_timeout_s,
        transport=transport,
    )


def error_message(response: httpx.Response) -> str:
    """Extract a human-readable message from an error response."""
    try:
        payload = response.json()
    except ValueError:
        snippet = response.text[:240].strip()
        return snippet or f"HTTP {response.status_code}"

    if isinstance(payload, dict):
        for key in ("error_description", "msg", "message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return f"HTTP {response.status_code}"


def decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise RemoteError("Backend returned a non-JSON response", response.status_code) from exc
