"""Drive a real client over TCP against a scripted local IRC server."""

import asyncio

import pytest

from sphereirc import IRCClient
from sphereirc.errors import NetworkError
from sphereirc.irc.models import ConnectionState
from sphereirc.irc.transport import StreamTransport


class ScriptedServer:
    def __init__(self) -> None:
        self.received: list[str] = []
        self.writer: asyncio.StreamWriter | None = None
        self.connected = asyncio.Event()
        self.server: asyncio.Server | None = None

    async def start(self) -> int:
        self.server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        return self.server.sockets[0].getsockname()[1]

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.writer = writer
        self.connected.set()
        while True:
            line = await reader.readline()
            if not line:
                break
            self.received.append(line.decode("utf-8").rstrip("\r\n"))

    async def send(self, text: str) -> None:
        assert self.writer is not None
        self.writer.write(text.encode("utf-8"))
        await self.writer.drain()

    async def stop(self) -> None:
        if self.writer is not None:
            self.writer.close()
        if self.server is not None:
            self.server.close()
            await self.server.wait_closed()


async def _until(predicate, client=None, timeout: float = 2.0) -> None:
    async def wait() -> None:
        while not predicate():
            if client is not None:
                await client.poll()
            await asyncio.sleep(0.01)

    await asyncio.wait_for(wait(), timeout)


@pytest.mark.asyncio
async def test_register_join_chat_and_quit():
    server = ScriptedServer()
    port = await server.start()
    client = IRCClient(
        {
            "nick": "sphere",
            "username": "sphereuser",
            "password": "secret",
            "servers": [{"hostname": "127.0.0.1", "port": port, "channels": ["dev"]}],
        }
    )
    seen: list[tuple[str | None, str]] = []
    client.add_event_handler("127.0.0.1", "PRIVMSG", lambda c, ch, ev: seen.append((ch, ev.text)))
    try:
        assert await client.connect() == [True]
        await asyncio.wait_for(server.connected.wait(), 2.0)
        await _until(lambda: len(server.received) >= 3)
        assert server.received[:3] == ["PASS secret", "NICK sphere", "USER sphereuser 8 * :"]

        await server.send(":srv 001 sphere :Welcome\r\nPING :srv\r\n")
        await _until(lambda: "PONG :srv" in server.received, client)
        assert "JOIN #dev" in server.received

        await server.send(":sphere!u@h JOIN :#dev\r\n:alice!a@h PRIVMSG #dev :hi\r\n")
        await _until(lambda: seen, client)
        assert seen == [("#dev", "hi")]
        conn = client.get_server("127.0.0.1")
        assert conn.joined_channels == ("#dev",)
        assert conn.state is ConnectionState.JOINED

        await client.disconnect()
        await _until(lambda: "QUIT :Quit" in server.received)
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_server_close_is_detected():
    server = ScriptedServer()
    port = await server.start()
    transport = StreamTransport()
    try:
        await transport.open("127.0.0.1", port)
        await asyncio.wait_for(server.connected.wait(), 2.0)
        assert transport.connected
        assert await transport.read_available(64) == b""
        await server.stop()

        async def read_until_eof() -> None:
            while transport.connected:
                await transport.read_available(64)
                await asyncio.sleep(0.01)

        await asyncio.wait_for(read_until_eof(), 2.0)
        assert not transport.connected
    finally:
        await transport.close()


@pytest.mark.asyncio
async def test_open_refused_raises_network_error():
    server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    server.close()
    await server.wait_closed()
    with pytest.raises(NetworkError):
        await StreamTransport().open("127.0.0.1", port)
