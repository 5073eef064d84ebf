"""Tests for snapshot sources (HTTP via aiohttp test server, local files)."""

import asyncio
import json

import pytest
from aiohttp import test_utils, web

from robotourney.core.fetch import (
    DEFAULT_LOCATION,
    FetchError,
    FileSnapshotSource,
    HttpSnapshotSource,
    open_source,
)
from robotourney.core.snapshot import SnapshotError

SUMMARY_PATH = "/competition-state/competition-summary.json"


def _fetch_from(handler, timeout_s: float = 5.0):
    """Serve `handler` at the summary path and fetch it once."""

    async def scenario():
        app = web.Application()
        app.router.add_get(SUMMARY_PATH, handler)
        async with test_utils.TestServer(app) as server:
            source = HttpSnapshotSource(str(server.make_url(SUMMARY_PATH)), timeout_s=timeout_s)
            return await source.fetch()

    return asyncio.run(scenario())


# ── HTTP ─────────────────────────────────────────────────────────


class TestHttpSnapshotSource:
    def test_returns_decoded_json(self, competition_record):
        async def handler(request):
            return web.json_response(competition_record)

        assert _fetch_from(handler) == competition_record

    def test_plain_text_body_still_decoded(self):
        async def handler(request):
            return web.Response(text='{"name": "Cup"}', content_type="text/plain")

        assert _fetch_from(handler) == {"name": "Cup"}

    def test_not_found(self):
        async def handler(request):
            raise web.HTTPNotFound()

        with pytest.raises(FetchError) as exc_info:
            _fetch_from(handler)
        assert exc_info.value.status == 404
        assert exc_info.value.not_found

    def test_server_error(self, caplog):
        async def handler(request):
            return web.Response(status=500)

        with pytest.raises(FetchError) as exc_info:
            _fetch_from(handler)
        assert exc_info.value.status == 500
        assert exc_info.value.status_text == "Internal Server Error"
        assert not exc_info.value.not_found
        assert "Internal Server Error" in caplog.text

    def test_invalid_json(self):
        async def handler(request):
            return web.Response(text="{nope", content_type="application/json")

        with pytest.raises(SnapshotError):
            _fetch_from(handler)

    def test_undecodable_body(self, caplog):
        async def handler(request):
            return web.Response(body=b'{"name": "Cup \xff"}', content_type="application/json")

        with pytest.raises(SnapshotError):
            _fetch_from(handler)
        assert "not UTF-8" in caplog.text

    def test_timeout_wrapped(self):
        async def handler(request):
            await asyncio.sleep(1)
            return web.json_response({})

        with pytest.raises(FetchError) as exc_info:
            _fetch_from(handler, timeout_s=0.1)
        assert exc_info.value.status is None

    def test_connection_refused_wrapped(self):
        async def scenario():
            server = test_utils.TestServer(web.Application())
            await server.start_server()
            url = str(server.make_url(SUMMARY_PATH))
            await server.close()
            return await HttpSnapshotSource(url, timeout_s=2).fetch()

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(scenario())
        assert exc_info.value.status is None


# ── Files ────────────────────────────────────────────────────────


class TestFileSnapshotSource:
    def test_reads_json(self, summary_file, competition_record):
        result = asyncio.run(FileSnapshotSource(summary_file).fetch())
        assert result == competition_record

    def test_missing_file_is_not_found(self, tmp_path):
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(FileSnapshotSource(tmp_path / "missing.json").fetch())
        assert exc_info.value.not_found

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "summary.json"
        path.write_text("not json")
        with pytest.raises(SnapshotError):
            asyncio.run(FileSnapshotSource(path).fetch())

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "summary.json"
        path.write_bytes(b'{"name": "Cup \xff"}')
        with pytest.raises(SnapshotError):
            asyncio.run(FileSnapshotSource(path).fetch())

    def test_directory_is_fetch_error(self, tmp_path):
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(FileSnapshotSource(tmp_path).fetch())
        assert not exc_info.value.not_found


class TestOpenSource:
    def test_http_url(self):
        source = open_source("https://example.com/" + DEFAULT_LOCATION)
        assert isinstance(source, HttpSnapshotSource)

    def test_path(self):
        source = open_source(DEFAULT_LOCATION)
        assert isinstance(source, FileSnapshotSource)
        assert source.location == DEFAULT_LOCATION
