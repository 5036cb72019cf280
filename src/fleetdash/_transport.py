"""HTTP transport for the fleet REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from fleetdash._constants import USER_AGENT
from fleetdash.config import DashboardConfig
from fleetdash.exceptions import FleetTransportError

_logger = logging.getLogger(__name__)

_TRACE_LIMIT = 512


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status and body text of a completed round-trip."""

    status: int
    text: str
    endpoint: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Decode the body; an empty body decodes to ``None``."""
        if not self.text.strip():
            return None
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise FleetTransportError(
                f"Invalid JSON from {self.endpoint}: {self.text[:200]}",
                endpoint=self.endpoint,
            ) from exc


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        ...


class HttpTransport:
    """One aiohttp request per call; no retry, no caching."""

    def __init__(self, config: DashboardConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        url = f"{self._config.base_url}{endpoint}"
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("%s %s params=%s", method, url, dict(params) if params else {})

        try:
            async with self._http.request(
                method,
                url,
                params=dict(params) if params else None,
                json=dict(json_body) if json_body is not None else None,
                headers=headers,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise FleetTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> HTTP %d", method, url, status)
        if self._config.api_trace_enabled:
            _logger.debug("Response body from %s: %s", endpoint, text[:_TRACE_LIMIT])

        return HttpResponse(status=status, text=text, endpoint=endpoint)
