import json
import logging

import pytest

from sphereirc.logs import event_catalog
from sphereirc.logs.logger import IRCLogger


@pytest.fixture
def irc_logger():
    return IRCLogger("sphereirc.test")


def test_template_rendered_with_server_prefix(irc_logger, caplog):
    with caplog.at_level(logging.INFO):
        irc_logger.log_event("irc", "joined", server="irc.alpha.net", channel="#dev")
    assert caplog.records[-1].getMessage() == "irc.alpha.net[#dev]: Joined #dev"


def test_explicit_human_text_wins(irc_logger, caplog):
    with caplog.at_level(logging.INFO):
        irc_logger.log_event("irc", "chat", human="alice: hi", server="h", channel="#c")
    assert caplog.records[-1].getMessage() == "h[#c]: alice: hi"


def test_missing_template_derives_text(irc_logger, caplog):
    with caplog.at_level(logging.INFO):
        irc_logger.log_event("made_up", "thing_happened")
    assert caplog.records[-1].getMessage() == "system: made up: thing happened"


def test_template_with_missing_field_falls_back_to_raw_template(irc_logger, caplog):
    with caplog.at_level(logging.INFO):
        irc_logger.log_event("irc", "kick")
    assert caplog.records[-1].getMessage() == "system: {nick} was kicked from the channel."


def test_debug_mode_appends_context(irc_logger, caplog, monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    with caplog.at_level(logging.DEBUG, logger="sphereirc.test"):
        irc_logger.set_level(logging.DEBUG)
        irc_logger.log_event("irc", "ping", level=logging.DEBUG, server="h", raw="PING :x")
    message = caplog.records[-1].getMessage()
    assert message.startswith("irc_ping".ljust(32))
    assert "h: PING answered" in message
    assert "(raw=PING :x)" in message


def test_level_respected(irc_logger, caplog):
    with caplog.at_level(logging.WARNING):
        irc_logger.log_event("irc", "raw", level=logging.DEBUG, raw="x")
    assert caplog.records == []


def test_reload_event_templates_from_custom_file(tmp_path):
    path = tmp_path / "templates.json"
    path.write_text(json.dumps({"demo": {"hello": "Hello {who}", "skip": 3}}))
    try:
        event_catalog.reload_event_templates(path)
        assert event_catalog.EVENT_TEMPLATES == {("demo", "hello"): "Hello {who}"}
    finally:
        event_catalog.reload_event_templates()
    assert ("irc", "joined") in event_catalog.EVENT_TEMPLATES


def test_missing_template_file_records_load_error(tmp_path):
    try:
        event_catalog.reload_event_templates(tmp_path / "nope.json")
        assert event_catalog.EVENT_TEMPLATES == {
            ("app", "load_error"): "Event templates file missing"
        }
    finally:
        event_catalog.reload_event_templates()


def test_every_logged_event_has_a_template():
    import pathlib
    import re

    root = pathlib.Path(event_catalog.__file__).resolve().parents[1]
    pattern = re.compile(r'log_event\(\s*"(\w+)",\s*"(\w+)"')
    used = set()
    for source in root.rglob("*.py"):
        used.update(pattern.findall(source.read_text(encoding="utf-8")))
    missing = used - set(event_catalog.EVENT_TEMPLATES)
    assert used
    assert not missing, f"Missing templates: {sorted(missing)}"
