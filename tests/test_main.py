import asyncio
import json
import logging
from unittest.mock import AsyncMock, patch

import pytest

from sphereirc import IRCClient
from sphereirc import main as app
from tests.fixtures.transports import TransportFactory


@pytest.fixture
def config_file(tmp_path, client_config):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(client_config))
    return str(path)


def test_health_check_ok(config_file, caplog):
    with caplog.at_level(logging.INFO):
        assert app.health_check(config_file) == 0
    assert "Health check passed - 2 server(s) configured" in caplog.text


def test_health_check_failed(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert app.health_check(str(tmp_path / "missing.json")) == 1
    assert "Health check failed" in caplog.text


def test_run_health_check_flag_exits(config_file):
    with patch.object(app.LoggerConfigurator, "configure"):
        with pytest.raises(SystemExit) as excinfo:
            app.run(["--health-check", config_file])
    assert excinfo.value.code == 0


def test_run_passes_config_path_to_main(config_file):
    with (
        patch.object(app.LoggerConfigurator, "configure"),
        patch.object(app, "main", new=AsyncMock(return_value=0)) as main_mock,
    ):
        with pytest.raises(SystemExit) as excinfo:
            app.run([config_file])
    main_mock.assert_awaited_once_with(config_file)
    assert excinfo.value.code == 0


@pytest.mark.asyncio
async def test_main_returns_error_on_bad_config(tmp_path):
    assert await app.main(str(tmp_path / "missing.json")) == 1


@pytest.mark.asyncio
async def test_main_returns_error_when_no_server_connects(config_file):
    with (
        patch.object(app, "_install_signal_handlers"),
        patch.object(app.IRCClient, "connect", new=AsyncMock(return_value=[False, False])),
    ):
        assert await app.main(config_file) == 1


@pytest.mark.asyncio
async def test_run_client_polls_until_stopped(client_config):
    factory = TransportFactory()
    client = IRCClient(client_config, transport_factory=factory)
    await client.connect()
    stop = asyncio.Event()
    polls = 0
    original_poll = client.poll

    async def counting_poll():
        nonlocal polls
        polls += 1
        if polls == 3:
            stop.set()
        return await original_poll()

    client.poll = counting_poll
    await app.run_client(client, stop, tick_interval=0)
    assert polls == 3
    assert not client.active
    assert all(t.lines[-1] == "QUIT :Quit\r\n" for t in factory.created)


@pytest.mark.asyncio
async def test_run_client_ends_when_all_connections_drop(client_config):
    factory = TransportFactory()
    client = IRCClient(client_config, transport_factory=factory)
    await client.connect()
    for transport in factory.created:
        transport.feed_eof()
    await app.run_client(client, asyncio.Event(), tick_interval=0)
    assert not client.active


def test_log_chat_uses_sender_for_private_messages(caplog):
    from types import SimpleNamespace

    event = SimpleNamespace(sender="alice", text="psst")
    conn = SimpleNamespace(hostname="irc.alpha.net")
    with caplog.at_level(logging.DEBUG, logger="sphereirc"):
        app.log_chat(conn, None, event)
    assert "irc.alpha.net[alice]: alice: psst" in caplog.text
