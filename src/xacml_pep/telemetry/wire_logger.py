"""Wire-level debug logging of PEP <-> PDP traffic.

WireLogHooks plugs into httpx event hooks and writes one structured event per
request and per response to the "xacml-pep.debug.wire" logger:

- pdp_request: method, url, headers (Authorization redacted), body
- pdp_response: status, url, headers, body

Nothing is logged (and no body is read early) unless the wire logger is
enabled for DEBUG. Bodies are included only when include_payloads is true.
"""

from __future__ import annotations

__all__ = [
    "WireLogHooks",
    "get_wire_logger",
]

import logging
from typing import Any

import httpx

from xacml_pep.constants import APP_NAME, MAX_LOGGED_BODY_CHARS

_REDACTED_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie", "set-cookie"})


def get_wire_logger() -> logging.Logger:
    """Return the wire logger (DEBUG level enables wire logging)."""
    return logging.getLogger(f"{APP_NAME}.debug.wire")


def _redact_headers(headers: httpx.Headers) -> dict[str, str]:
    return {k: ("[REDACTED]" if k.lower() in _REDACTED_HEADERS else v) for k, v in headers.items()}


def _truncate(content: bytes) -> str:
    text = content.decode("utf-8", errors="replace")
    if len(text) > MAX_LOGGED_BODY_CHARS:
        return text[:MAX_LOGGED_BODY_CHARS] + f"... [{len(text) - MAX_LOGGED_BODY_CHARS} more chars]"
    return text


class WireLogHooks:
    """httpx event hooks for wire logging.

    Usage:
        hooks = WireLogHooks(include_payloads=False)
        client = httpx.Client(event_hooks=hooks.sync_hooks())
    """

    def __init__(self, include_payloads: bool = True, logger: logging.Logger | None = None) -> None:
        self._include_payloads = include_payloads
        self._logger = logger or get_wire_logger()

    @property
    def enabled(self) -> bool:
        return self._logger.isEnabledFor(logging.DEBUG)

    def _request_event(self, request: httpx.Request) -> dict[str, Any]:
        event: dict[str, Any] = {
            "event": "pdp_request",
            "message": f"{request.method} {request.url}",
            "method": request.method,
            "url": str(request.url),
            "headers": _redact_headers(request.headers),
        }
        if self._include_payloads:
            event["body"] = _truncate(request.content)
        return event

    def _response_event(self, response: httpx.Response) -> dict[str, Any]:
        event: dict[str, Any] = {
            "event": "pdp_response",
            "message": f"HTTP {response.status_code} from {response.request.url}",
            "status_code": response.status_code,
            "url": str(response.request.url),
            "headers": _redact_headers(response.headers),
        }
        if self._include_payloads:
            event["body"] = _truncate(response.content)
        return event

    # Sync hooks

    def log_request(self, request: httpx.Request) -> None:
        if self.enabled:
            self._logger.debug(self._request_event(request))

    def log_response(self, response: httpx.Response) -> None:
        if not self.enabled:
            return
        if self._include_payloads:
            response.read()
        self._logger.debug(self._response_event(response))

    def sync_hooks(self) -> dict[str, list[Any]]:
        """Event hooks for httpx.Client."""
        return {"request": [self.log_request], "response": [self.log_response]}

    # Async hooks

    async def alog_request(self, request: httpx.Request) -> None:
        if self.enabled:
            self._logger.debug(self._request_event(request))

    async def alog_response(self, response: httpx.Response) -> None:
        if not self.enabled:
            return
        if self._include_payloads:
            await response.aread()
        self._logger.debug(self._response_event(response))

    def async_hooks(self) -> dict[str, list[Any]]:
        """Event hooks for httpx.AsyncClient."""
        return {"request": [self.alog_request], "response": [self.alog_response]}
