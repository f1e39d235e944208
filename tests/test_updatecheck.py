import json

import pytest

from hashtab.https import HTTPResult, HTTPSError
from hashtab.updatecheck import (
    TAGS_SERVER,
    TAGS_URI,
    UpdateCheckError,
    get_latest_version,
    parse_tags_reply,
)
from hashtab.utl import Version


def _tags(*names):
    return json.dumps([{"name": name} for name in names]).encode()


def test_parse_first_tag():
    assert parse_tags_reply(_tags("v3.0.4", "v3.0.3")) == Version(3, 0, 4)


def test_parse_accepts_str_body():
    assert parse_tags_reply(_tags("v1.2.3").decode()) == Version(1, 2, 3)


def test_trailing_text_after_version_is_ignored():
    assert parse_tags_reply(_tags("v1.2.3-beta")) == Version(1, 2, 3)


@pytest.mark.parametrize(
    "body, message",
    [
        (b"not json", "JSON parse error"),
        (b'{"name": "v1.2.3"}', "Malformed reply"),
        (b"[]", "Malformed reply"),
        (b'["v1.2.3"]', "Malformed reply"),
        (b'[{"name": 5}]', "Malformed reply"),
        (b'[{"other": "v1.2.3"}]', "Malformed reply"),
        (_tags("1.2.3"), "Malformed version number"),
        (_tags("v1.2"), "Malformed version number"),
    ],
)
def test_parse_errors(body, message):
    with pytest.raises(UpdateCheckError, match=message):
        parse_tags_reply(body)


def test_get_latest_version_sends_expected_request():
    seen = []

    def fetch(request):
        seen.append(request)
        return HTTPResult(200, _tags("v2.5.7"))

    assert get_latest_version(fetch) == Version(2, 5, 7)
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert seen[0].server_name == TAGS_SERVER
    assert seen[0].uri == TAGS_URI


def test_get_latest_version_http_error():
    def fetch(request):
        return HTTPResult(404, b"gone")

    with pytest.raises(UpdateCheckError, match="HTTP Status 404 received. Server says: gone"):
        get_latest_version(fetch)


def test_get_latest_version_transport_error():
    def fetch(request):
        raise HTTPSError("unreachable", 5, 3)

    with pytest.raises(UpdateCheckError, match="unreachable"):
        get_latest_version(fetch)


def test_versions_compare_for_update_decision():
    def fetch(request):
        return HTTPResult(200, _tags("v3.1.0"))

    assert get_latest_version(fetch) > Version(3, 0, 9)