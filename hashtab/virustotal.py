"""Looking up file hashes in the VirusTotal file report service."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from urllib.parse import quote

from hashtab.https import HTTPRequest, HTTPResult, HTTPSError, do_https
from hashtab.settings import Settings
from hashtab.utl import hash_bytes_to_string

__all__ = [
    "FileReport",
    "Result",
    "TOS_MESSAGE",
    "TOS_TITLE",
    "VT_SERVER",
    "VirusTotalError",
    "build_query",
    "check_for_tos",
    "parse_reply",
    "query",
]

VT_SERVER = "www.virustotal.com"
_REPORTS_URI = "/partners/sysinternals/file-reports?apikey="
_HEADERS = "Content-Type: application/json\r\n"

TOS_TITLE = "VirusTotal Terms of Service"
TOS_MESSAGE = (
    "The following data will be sent: file path, creation date, hash\r\n"
    "You must agree to VirusTotal's terms of service to use this.\r\n"
    "The terms are available on the VirusTotal website.\r\n"
    "Do you agree to the VirusTotal Terms of Service?"
)

# A file time of zero, which is what an unknown creation time shows as.
_ZERO_TIME = datetime(1601, 1, 1)


class VirusTotalError(RuntimeError):
    """A lookup failed or the service sent something unexpected."""


@dataclass(frozen=True)
class FileReport:
    """A hashed file to look up. ``error`` is nonzero if hashing it failed."""

    display_name: str
    digest: bytes
    created: datetime | None = None
    error: int = 0


@dataclass(frozen=True)
class Result:
    """What the service knows about one file."""

    file: FileReport | None = None
    permalink: str = ""
    positives: int = 0
    total: int = 0
    found: bool = False


def check_for_tos(settings: Settings, ask: Callable[[str], bool]) -> bool:
    """Make sure the user agreed to the terms of service.

    ``ask`` is shown :data:`TOS_MESSAGE` and returns True on agreement,
    which is then remembered.
    """
    if not settings.virustotal_tos and ask(TOS_MESSAGE):
        settings.set("virustotal_tos", True)
    return bool(settings.virustotal_tos)


def _format_time(created: datetime | None) -> str:
    moment = _ZERO_TIME if created is None else created
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )


def build_query(files: Iterable[FileReport]) -> str:
    """Build the JSON request body, leaving out files that failed to hash."""
    entries = [
        {
            "autostart_location": "",
            "autostart_entry": "",
            "hash": hash_bytes_to_string(report.digest),
            "image_path": report.display_name,
            "creation_datetime": _format_time(report.created),
        }
        for report in files
        if report.error == 0
    ]
    return json.dumps(entries)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _entry_result(entry: dict) -> Result:
    if not entry["found"]:
        return Result()
    permalink = entry.get("permalink")
    positives = entry.get("positives")
    total = entry.get("total")
    return Result(
        found=True,
        permalink=permalink if isinstance(permalink, str) else "",
        positives=positives if _is_int(positives) else 0,
        total=total if _is_int(total) else 0,
    )


def parse_reply(body: str | bytes, files: Sequence[FileReport]) -> list[Result]:
    """Match the service's reply to ``files``.

    Files the reply says nothing about are left out. Raises
    VirusTotalError if the reply is not JSON with a ``data`` array.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        root = json.loads(text)
    except ValueError:
        raise VirusTotalError(f"JSON parse error. Body: {text}") from None

    data = root.get("data") if isinstance(root, dict) else None
    if not isinstance(data, list):
        raise VirusTotalError(f"Malformed reply. Body: {text}")

    by_hash: dict[str, Result] = {}
    for entry in data:
        if (
            isinstance(entry, dict)
            and isinstance(entry.get("found"), bool)
            and isinstance(entry.get("hash"), str)
        ):
            by_hash[entry["hash"]] = _entry_result(entry)

    results = []
    for report in files:
        known = by_hash.get(hash_bytes_to_string(report.digest))
        if known is not None:
            results.append(replace(known, file=report))
    return results


def query(
    files: Sequence[FileReport],
    api_key: str,
    user_agent: str,
    fetch: Callable[[HTTPRequest], HTTPResult] | None = None,
) -> list[Result]:
    """Look ``files`` up and return what the service knows about them.

    ``fetch`` performs the request; it defaults to :func:`do_https`.
    Raises VirusTotalError on transport errors, non-200 replies and
    malformed replies.
    """
    fetch = fetch if fetch is not None else do_https
    request = HTTPRequest(
        user_agent=user_agent,
        server_name=VT_SERVER,
        method="POST",
        uri=_REPORTS_URI + quote(api_key, safe=""),
        headers=_HEADERS,
        body=build_query(files).encode("utf-8"),
    )
    try:
        reply = fetch(request)
    except HTTPSError as exc:
        raise VirusTotalError(str(exc)) from exc

    if reply.http_code != 200:
        raise VirusTotalError(
            f"HTTP Status {reply.http_code} received. Server says: {reply.text}"
        )
    return parse_reply(reply.body, files)