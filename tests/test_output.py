#!/usr/bin/python3

import json

import msgspec
import pytest
from mpdgen.models import messages
from mpdgen.output import (
    CLIMessageHandlers,
    ConsoleMessageHandler,
    JSONLMessageHandler,
    RecordingMessageHandler,
)


@pytest.mark.parametrize(
    "msg, expected",
    [
        (messages.MissingMinBufferTimeMessage(), messages.MessageLevel.ERROR),
        (messages.EarliestTimestampUnavailableMessage(), messages.MessageLevel.ERROR),
        (messages.MissingPeriodMessage(), messages.MessageLevel.WARNING),
        (messages.MissingMinimumUpdatePeriodMessage(), messages.MessageLevel.WARNING),
        (messages.StringMessage("hello"), messages.MessageLevel.INFO),
    ],
)
def test_message_level(msg: messages.BaseMessage, expected: messages.MessageLevel):
    assert messages.message_level(msg) == expected


def test_jsonl_handler(capsys: pytest.CaptureFixture[str]):
    JSONLMessageHandler().handle_message(messages.MissingPeriodMessage())
    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err) == {"type": "missing-period"}


def test_console_handler(capsys: pytest.CaptureFixture[str]):
    handler = ConsoleMessageHandler()
    handler.handle_message(messages.MissingMinimumUpdatePeriodMessage())
    handler.handle_message(
        messages.ManifestWrittenMessage(path="out/manifest.mpd", num_periods=2, mpd_type="static")
    )
    lines = capsys.readouterr().err.splitlines()
    assert "WARNING: The profile is dynamic but no minimumUpdatePeriod specified." in lines[0]
    assert "Wrote static manifest with 2 period(s) to out/manifest.mpd" in lines[1]


def test_recording_handler():
    handler = RecordingMessageHandler()
    handler.handle_message(messages.MissingPeriodMessage())
    handler.handle_message(messages.StringMessage("hello"))
    assert handler.of_type(messages.MissingPeriodMessage) == [messages.MissingPeriodMessage()]
    assert len(handler.messages) == 2


@pytest.mark.parametrize(
    "style, handler_type",
    [("jsonl", JSONLMessageHandler), ("console", ConsoleMessageHandler)],
)
def test_handler_from_style(style: str, handler_type: type):
    handler = msgspec.convert({"type": style}, CLIMessageHandlers)
    assert isinstance(handler, handler_type)
