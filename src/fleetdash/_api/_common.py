"""Shared helpers for fleet API endpoint modules.

Every operation is a single round-trip: a transport failure, a non-2xx
status, an undecodable body or a malformed record all surface as one
:class:`FetchError` carrying the operation's fixed message.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar
from urllib.parse import quote

from fleetdash._transport import Transport
from fleetdash.exceptions import FetchError, FleetTransportError, RecordShapeError

T = TypeVar("T")


def resource_path(*segments: str) -> str:
    """Join URL-quoted path segments into an endpoint path."""
    return "".join(f"/{quote(str(segment), safe='')}" for segment in segments)


async def call_endpoint(
    *,
    transport: Transport,
    method: str,
    endpoint: str,
    failure_message: str,
    parse: Callable[[Any], T],
    params: Mapping[str, str] | None = None,
    json_body: Mapping[str, Any] | None = None,
) -> T:
    """Perform one request and hand the decoded body to *parse*."""
    try:
        response = await transport.request(method, endpoint, params=params, json_body=json_body)
    except FleetTransportError as exc:
        raise FetchError(failure_message, endpoint=endpoint) from exc

    if not response.ok:
        raise FetchError(failure_message, status_code=response.status, endpoint=endpoint)

    try:
        return parse(response.json())
    except (FleetTransportError, RecordShapeError) as exc:
        raise FetchError(failure_message, status_code=response.status, endpoint=endpoint) from exc
