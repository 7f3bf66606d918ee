import pytest

from sphereirc.errors import NetworkError
from sphereirc.irc.transport import StreamTransport


@pytest.mark.asyncio
@pytest.mark.parametrize("host", ["irc..example.net", "a" * 70 + ".example.net"])
async def test_invalid_hostname_becomes_network_error(host):
    transport = StreamTransport()
    with pytest.raises(NetworkError):
        await transport.open(host, 6667)
    assert not transport.connected


@pytest.mark.asyncio
@pytest.mark.parametrize("port", [70000, -5])
async def test_invalid_port_becomes_network_error(port):
    with pytest.raises(NetworkError):
        await StreamTransport().open("127.0.0.1", port)


@pytest.mark.asyncio
async def test_write_before_open_raises_network_error():
    with pytest.raises(NetworkError):
        StreamTransport().write(b"PING :x\r\n")


@pytest.mark.asyncio
async def test_close_without_open_is_safe():
    transport = StreamTransport()
    await transport.close()
    await transport.close()
    assert await transport.read_available(16) == b""
