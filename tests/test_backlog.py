"""Tests for backlog sources."""
import httpx
import pytest

from cablechat.transport import BacklogClient, ReadError, ServerConfig, StaticBacklog


def make_client(handler, config: ServerConfig | None = None) -> BacklogClient:
    client = BacklogClient(config or ServerConfig(host="chat.test"))
    client._client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url=client._config.http_url,
    )
    return client


class TestBacklogClient:
    """Tests for the HTTP backlog client."""

    @pytest.mark.asyncio
    async def test_fetch_sends_token_to_room_path(self, sample_backlog):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=sample_backlog)

        async with make_client(handler) as client:
            payload = await client.fetch("lobby", "secret-token")

        assert payload == sample_backlog
        assert str(seen[0].url) == "http://chat.test/chat_rooms/lobby/messages"
        assert seen[0].headers["Authorization"] == "secret-token"

    @pytest.mark.asyncio
    async def test_room_stays_inside_one_path_segment(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with make_client(handler) as client:
            await client.fetch("a/b?x=1", "secret-token")

        assert seen[0].url.raw_path == b"/chat_rooms/a%2Fb%3Fx%3D1/messages"
        assert seen[0].url.query == b""

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        client = make_client(lambda request: httpx.Response(500))

        with pytest.raises(ReadError, match="HTTP 500"):
            await client.fetch("lobby", "secret-token")
        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ReadError, match="invalid JSON"):
            await client.fetch("lobby", "secret-token")
        await client.close()

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(ReadError, match="connection refused"):
            await client.fetch("lobby", "secret-token")
        await client.close()

    @pytest.mark.asyncio
    async def test_debug_callback(self):
        records = []
        client = make_client(lambda request: httpx.Response(200, json=[]))
        client.set_debug_callback(lambda level, component, message: records.append((component, message)))

        await client.fetch("lobby", "secret-token")
        await client.close()

        assert records == [("Backlog", "GET /chat_rooms/lobby/messages")]


class TestStaticBacklog:
    """Tests for the fixed-payload source."""

    @pytest.mark.asyncio
    async def test_known_and_unknown_rooms(self, sample_backlog):
        backlog = StaticBacklog({"lobby": sample_backlog})

        assert await backlog.fetch("lobby", "t") == sample_backlog
        assert await backlog.fetch("elsewhere", "t") == []
        assert backlog.requests == ["lobby", "elsewhere"]
