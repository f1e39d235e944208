"""Looking up the newest released version from the project's tag list."""

from __future__ import annotations

import json
import re
from collections.abc import Callable

from hashtab.https import HTTPRequest, HTTPResult, HTTPSError, do_https
from hashtab.utl import Version

__all__ = [
    "TAGS_HEADERS",
    "TAGS_SERVER",
    "TAGS_URI",
    "USER_AGENT",
    "UpdateCheckError",
    "get_latest_version",
    "parse_tags_reply",
]

USER_AGENT = "hashtab-update-checker"
TAGS_SERVER = "api.github.com"
TAGS_URI = "/repos/hashtab/hashtab/tags"
TAGS_HEADERS = (
    "Content-Type: application/json\r\nAccept: application/vnd.github.v3+json\r\n"
)

_VERSION = re.compile(r"v\s*(\d+)\.\s*(\d+)\.\s*(\d+)")


class UpdateCheckError(RuntimeError):
    """The latest version could not be determined."""


def _text(body: str | bytes) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def parse_tags_reply(body: str | bytes) -> Version:
    """Extract the version from the first tag of a JSON tag list.

    Tag names look like ``v1.2.3``. Raises UpdateCheckError if the reply
    is not of that shape.
    """
    text = _text(body)
    try:
        root = json.loads(text)
    except ValueError:
        raise UpdateCheckError(f"JSON parse error. Body: {text}") from None

    if (
        not isinstance(root, list)
        or not root
        or not isinstance(root[0], dict)
        or not isinstance(root[0].get("name"), str)
    ):
        raise UpdateCheckError(f"Malformed reply. Body: {text}")

    name = root[0]["name"]
    match = _VERSION.match(name)
    if match is None:
        raise UpdateCheckError(f"Malformed version number: {name}")
    major, minor, patch = (int(part) & 0xFFFF for part in match.groups())
    return Version(major, minor, patch)


def get_latest_version(
    fetch: Callable[[HTTPRequest], HTTPResult] | None = None,
) -> Version:
    """Ask the tag list server for the newest version.

    ``fetch`` performs the request; it defaults to :func:`do_https`.
    Raises UpdateCheckError on transport errors, non-200 replies and
    malformed replies.
    """
    fetch = fetch if fetch is not None else do_https
    request = HTTPRequest(
        user_agent=USER_AGENT,
        server_name=TAGS_SERVER,
        method="GET",
        uri=TAGS_URI,
        headers=TAGS_HEADERS,
    )
    try:
        reply = fetch(request)
    except HTTPSError as exc:
        raise UpdateCheckError(str(exc)) from exc

    if reply.http_code != 200:
        raise UpdateCheckError(
            f"HTTP Status {reply.http_code} received. Server says: {_text(reply.body)}"
        )
    return parse_tags_reply(reply.body)