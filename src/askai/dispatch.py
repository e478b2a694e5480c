"""
Outbound calls to the analysis service.

``AsyncDispatcher`` sends exactly one request per evaluation through a
``Transport`` and hands back the response.  It does not retry, time out or
catch anything: transport failures propagate to the awaiting handle.

Transports:

  MockTransport: answers with a fixed two-row grid after a short delay
  HttpTransport: POSTs the request JSON to a configured endpoint (httpx)
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Dict, Optional, Protocol

import httpx

from askai.config import Settings
from askai.exceptions import MalformedPayloadError, TransportError
from askai.protocol import AskFormulaRequest, AskFormulaResponse, ErrorCode, ResponseError

logger = logging.getLogger(__name__)

MOCK_CONTENT = '[["Data","Title"],["1","2"]]'


class Transport(Protocol):
    """Anything that can deliver a request and return the service's response."""

    async def send(self, request: AskFormulaRequest) -> AskFormulaResponse:
        ...


class MockTransport:
    """Offline stand-in for the service.

    Waits *delay* seconds on the event loop, then answers every request with
    ``response`` (by default an OK status and ``MOCK_CONTENT``).
    """

    def __init__(self, delay: float = 1.0, response: Optional[AskFormulaResponse] = None) -> None:
        self.delay = delay
        self.response = response or AskFormulaResponse(
            error=ResponseError(code=ErrorCode.OK, message=""),
            content=MOCK_CONTENT,
        )

    async def send(self, request: AskFormulaRequest) -> AskFormulaResponse:
        await asyncio.sleep(self.delay)
        return self.response


class HttpTransport:
    """Deliver requests to an HTTP endpoint as JSON.

    A new ``httpx.AsyncClient`` is opened per call unless one is injected,
    so concurrent evaluations never share connection state.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _post(self, client: httpx.AsyncClient, request: AskFormulaRequest) -> httpx.Response:
        response = await client.post(self.endpoint, json=request.to_dict(), headers=self._headers())
        response.raise_for_status()
        return response

    async def send(self, request: AskFormulaRequest) -> AskFormulaResponse:
        logger.debug("POST %s (unit %r, %d rows)", self.endpoint, request.unit_id, len(request.rows))
        try:
            if self._client is not None:
                response = await self._post(self._client, request)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, request)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to '{self.endpoint}' failed: {e}") from e

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(
                f"Response from '{self.endpoint}' is not valid JSON: {e}"
            ) from e

        try:
            return AskFormulaResponse.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise MalformedPayloadError(
                f"Response from '{self.endpoint}' has an unexpected shape: {e}"
            ) from e


class AsyncDispatcher:
    """Send one request, await one response."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    async def dispatch(self, request: AskFormulaRequest) -> AskFormulaResponse:
        logger.debug("Dispatching request for unit %r", request.unit_id)
        response = await self.transport.send(request)
        logger.debug(
            "Received response (error=%s, has_content=%s)",
            response.error.code if response.error is not None else None,
            bool(response.content),
        )
        return response


def get_transport(settings: Optional[Settings] = None) -> Transport:
    """Return the transport selected by *settings* (or the environment)."""
    settings = settings or Settings.from_env()
    if settings.transport == "http":
        return HttpTransport(settings.endpoint, api_key=settings.api_key, timeout=settings.timeout)
    return MockTransport(delay=settings.mock_delay)
