"""
Relay client shared by the status helpers and the lifecycle bridge.

The process-wide client is built from settings the first time it is needed.
Embedders and tests replace it with set_client().
"""

from typing import Any, Dict, Optional

import httpx

from mission_control.app.core.config import settings


class RelayClient:
    """Posts {action, args} envelopes to the relay endpoint."""

    def __init__(self, url: str, http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.url = url
        self.http = http or httpx.Client(timeout=timeout)

    def call(self, action: str, args: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return self.http.post(
            self.url,
            json={"action": action, "args": args or {}},
            headers={"Content-Type": "application/json"},
        )


_client: Optional[RelayClient] = None


def get_client() -> RelayClient:
    global _client
    if _client is None:
        _client = RelayClient(settings.RELAY_URL, timeout=settings.RELAY_TIMEOUT)
    return _client


def set_client(client: Optional[RelayClient]) -> None:
    """Install a client for the whole process. None resets to the lazy default."""
    global _client
    _client = client
