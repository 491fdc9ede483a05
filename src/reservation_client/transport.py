"""HTTP transport shared by every API operation.

`fetch_json` performs one request against the reservations backend and
unwraps its `{data}` / `{error}` envelope. It is the only place that tells
backend errors, transport failures and cancellation apart.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from types import MappingProxyType
from typing import Any, AsyncIterator, Mapping, Optional

import httpx

from reservation_client.cancellation import AbortSignal, RequestAborted
from reservation_client.schemas import ErrorEnvelope, parse_envelope

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})


class ApiError(Exception):
    """Error reported by the backend through the `error` envelope field."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@asynccontextmanager
async def _client_scope(client: Optional[httpx.AsyncClient]) -> AsyncIterator[httpx.AsyncClient]:
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=None) as owned:
        yield owned


async def _send(
    client: httpx.AsyncClient,
    request: httpx.Request,
    signal: Optional[AbortSignal],
) -> httpx.Response:
    if signal is None:
        return await client.send(request)
    if signal.aborted:
        raise RequestAborted(signal.reason)

    sending = asyncio.ensure_future(client.send(request))
    aborting = asyncio.ensure_future(signal.wait())
    try:
        done, _ = await asyncio.wait({sending, aborting}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (sending, aborting):
            if not task.done():
                task.cancel()

    if sending in done:
        return sending.result()
    raise RequestAborted(signal.reason)


async def fetch_json(
    url: Any,
    *,
    method: str = "GET",
    headers: Mapping[str, str] = DEFAULT_HEADERS,
    body: Optional[str] = None,
    signal: Optional[AbortSignal] = None,
    on_cancel: Any = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    Fetch JSON from the backend and return the envelope's `data`.

    Args:
        url: Absolute request URL
        method: HTTP method
        headers: Request headers, `Content-Type: application/json` by default
        body: JSON-encoded request body, if any
        signal: Optional AbortSignal; aborting it ends the request quietly
        on_cancel: Value returned when the request is aborted
        client: Optional httpx.AsyncClient; a short-lived one is used otherwise

    Returns:
        The `data` field of the response, None for 204 responses, or
        `on_cancel` when the request was aborted

    Raises:
        ApiError: If the response carries an `error` field
        httpx.HTTPError, ValueError: Transport or JSON decoding failures, re-raised after logging
    """
    try:
        async with _client_scope(client) as http:
            request = http.build_request(method, url, headers=dict(headers), content=body)
            response = await _send(http, request, signal)

        if response.status_code == 204:
            return None

        envelope = parse_envelope(response.json())
    except RequestAborted:
        logger.debug(f"{method} {url} aborted")
        return on_cancel
    except Exception as e:
        logger.exception(f"{method} {url} failed: {e}")
        raise

    if isinstance(envelope, ErrorEnvelope):
        logger.info(f"{method} {url} rejected ({response.status_code}): {envelope.error}")
        raise ApiError(envelope.error, status_code=response.status_code)
    return envelope.data
