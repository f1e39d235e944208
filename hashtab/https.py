"""Minimal blocking HTTPS client."""

from __future__ import annotations

import http.client
from dataclasses import dataclass

__all__ = ["HTTPRequest", "HTTPResult", "HTTPSError", "HTTPS_PORT", "do_https"]

HTTPS_PORT = 443

# Stage at which a request failed.
_LOCATION_CONNECT = 3
_LOCATION_SEND = 5
_LOCATION_RECEIVE = 6
_LOCATION_READ = 8


@dataclass(frozen=True)
class HTTPRequest:
    """An HTTPS request. ``headers`` is a block of CRLF-separated header lines."""

    user_agent: str
    server_name: str
    method: str = "GET"
    uri: str = "/"
    headers: str = ""
    body: bytes = b""
    timeout: float | None = 60.0


@dataclass(frozen=True)
class HTTPResult:
    """Status code and body of a completed request."""

    http_code: int
    body: bytes = b""

    @property
    def text(self) -> str:
        """The body decoded as UTF-8, with undecodable bytes replaced."""
        return self.body.decode("utf-8", errors="replace")


class HTTPSError(Exception):
    """A request failed before a complete reply was received."""

    def __init__(self, message: str, error_code: int, error_location: int) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.error_location = error_location

    def __str__(self) -> str:
        return f"Error {self.error_code:08X} at {self.error_location}: {self.args[0]}"


def _parse_headers(block: str) -> dict[str, str]:
    headers: dict[str, str] = {}
    for line in block.splitlines():
        if not line.strip():
            continue
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"malformed header line: {line!r}")
        headers[name.strip()] = value.strip()
    return headers


def _fail(exc: BaseException, location: int) -> HTTPSError:
    code = getattr(exc, "errno", None) or 0
    return HTTPSError(str(exc) or type(exc).__name__, code, location)


def do_https(request: HTTPRequest) -> HTTPResult:
    """Perform ``request`` over HTTPS on the default port.

    Raises HTTPSError if connecting, sending, receiving or reading fails.
    Any HTTP status is returned, not raised.
    """
    headers = _parse_headers(request.headers)
    headers.setdefault("User-Agent", request.user_agent)
    body = bytes(request.body) or None

    try:
        connection = http.client.HTTPSConnection(
            request.server_name, HTTPS_PORT, timeout=request.timeout
        )
    except (OSError, ValueError, http.client.HTTPException) as exc:
        raise _fail(exc, _LOCATION_CONNECT) from exc

    try:
        try:
            connection.request(request.method, request.uri, body=body, headers=headers)
        except (OSError, http.client.HTTPException) as exc:
            raise _fail(exc, _LOCATION_SEND) from exc
        try:
            response = connection.getresponse()
        except (OSError, http.client.HTTPException) as exc:
            raise _fail(exc, _LOCATION_RECEIVE) from exc
        status = response.status
        try:
            data = response.read()
        except (OSError, http.client.HTTPException) as exc:
            raise _fail(exc, _LOCATION_READ) from exc
    finally:
        connection.close()

    return HTTPResult(http_code=status, body=data)