"""Tests for the server list fetcher."""

import asyncio
import json
from unittest.mock import AsyncMock, Mock, patch

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

from omp_browser.exceptions import ConfigError, FetchError
from omp_browser.fetcher import ServerListFetcher
from omp_browser.models import ServerRecord


SERVERS = [
    {"ip": "1.1.1.1:7777", "hn": "Alpha", "pc": 5, "pm": 50, "gm": "DM",
     "la": "English", "pa": False, "vn": "omp 1.1.0"},
    {"ip": "2.2.2.2:7777", "hn": "Beta", "pc": 50, "pm": 100},
]


class TestParse:
    """Test payload parsing."""

    def test_parse_list(self):
        fetcher = ServerListFetcher("http://localhost/servers")
        servers = fetcher.parse(json.dumps(SERVERS))

        assert [s.address for s in servers] == ["1.1.1.1:7777", "2.2.2.2:7777"]
        assert servers[0].gamemode == "DM"
        assert servers[1].gamemode is None

    def test_invalid_entries_skipped(self):
        fetcher = ServerListFetcher("http://localhost/servers")
        payload = SERVERS + [{"hn": "no address"}, "garbage", {"ip": "3.3.3.3:7777", "pc": "x"}]

        servers = fetcher.parse(json.dumps(payload))

        assert len(servers) == 2

    def test_empty_list(self):
        assert ServerListFetcher("http://localhost/servers").parse("[]") == []

    @pytest.mark.parametrize("text", ["<html>oops</html>", "", '{"servers": []}', "42"])
    def test_unusable_payload(self, text):
        with pytest.raises(FetchError):
            ServerListFetcher("http://localhost/servers").parse(text)

    @pytest.mark.parametrize("path", ["$.servers", "$.servers[*]"])
    def test_servers_path(self, path):
        fetcher = ServerListFetcher("http://localhost/servers", servers_path=path)
        servers = fetcher.parse(json.dumps({"count": 2, "servers": SERVERS}))
        assert [s.address for s in servers] == ["1.1.1.1:7777", "2.2.2.2:7777"]

    def test_servers_path_no_match(self):
        fetcher = ServerListFetcher("http://localhost/servers", servers_path="$.servers[*]")
        assert fetcher.parse(json.dumps({"data": SERVERS})) == []

    def test_invalid_servers_path(self):
        with pytest.raises(ConfigError):
            ServerListFetcher("http://localhost/servers", servers_path="$.servers[")


class TestFetch:
    """Test download error handling."""

    @pytest.mark.asyncio
    async def test_fetch_success(self):
        fetcher = ServerListFetcher("http://localhost/servers")
        with patch.object(fetcher, "_download", AsyncMock(return_value=json.dumps(SERVERS))):
            servers = await fetcher.fetch()

        assert servers[0] == ServerRecord.from_dict(SERVERS[0])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
        aiohttp.ClientResponseError(request_info=Mock(), history=(), status=503,
                                    message="Service Unavailable"),
    ])
    async def test_fetch_errors(self, error):
        fetcher = ServerListFetcher("http://localhost/servers", timeout=1)
        with patch.object(fetcher, "_download", AsyncMock(side_effect=error)):
            with pytest.raises(FetchError):
                await fetcher.fetch()

    @pytest.mark.asyncio
    async def test_fetch_bad_json(self):
        fetcher = ServerListFetcher("http://localhost/servers")
        with patch.object(fetcher, "_download", AsyncMock(return_value="{not json")):
            with pytest.raises(FetchError, match="JSON error"):
                await fetcher.fetch()


class TestFetchHttp:
    """Fetch against a local aiohttp server."""

    @staticmethod
    def make_app(status=200, body=None, raw=None):
        async def handler(request):
            handler.user_agent = request.headers.get("User-Agent")
            if raw is not None:
                return web.Response(status=status, body=raw,
                                    content_type="application/json", charset="utf-8")
            return web.Response(status=status, text=body if body is not None else json.dumps(SERVERS),
                                content_type="application/json")

        handler.user_agent = None
        app = web.Application()
        app.router.add_get("/servers", handler)
        return app, handler

    @pytest.mark.asyncio
    async def test_download(self):
        app, handler = self.make_app()
        async with test_utils.TestServer(app) as server:
            fetcher = ServerListFetcher(str(server.make_url("/servers")), timeout=5)
            servers = await fetcher.fetch()

        assert [s.address for s in servers] == ["1.1.1.1:7777", "2.2.2.2:7777"]
        assert handler.user_agent.startswith("omp-browser/")

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        app, _ = self.make_app(status=500, body="boom")
        async with test_utils.TestServer(app) as server:
            fetcher = ServerListFetcher(str(server.make_url("/servers")), timeout=5)
            with pytest.raises(FetchError, match="500"):
                await fetcher.fetch()

    @pytest.mark.asyncio
    async def test_undecodable_body(self):
        app, _ = self.make_app(raw=b'[{"ip": "1.1.1.1:7777", "hn": "\xff\xfe"}]')
        async with test_utils.TestServer(app) as server:
            fetcher = ServerListFetcher(str(server.make_url("/servers")), timeout=5)
            with pytest.raises(FetchError, match="JSON error"):
                await fetcher.fetch()
