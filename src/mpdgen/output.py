#!/usr/bin/python3

import sys

import colorama
import msgspec

from .models import messages as msgtypes

_LEVEL_STYLES = {
    msgtypes.MessageLevel.INFO: "",
    msgtypes.MessageLevel.WARNING: colorama.Fore.YELLOW,
    msgtypes.MessageLevel.ERROR: colorama.Fore.RED,
}


class BaseMessageHandler(msgspec.Struct):
    def handle_message(self, msg: msgtypes.BaseMessage) -> None:
        raise NotImplementedError()


class JSONLMessageHandler(BaseMessageHandler, tag="jsonl"):
    # outputs messages as newline-delimited JSON
    # this goes to stderr since the manifest itself may be written to stdout
    def handle_message(self, msg: msgtypes.BaseMessage) -> None:
        print(msgspec.json.encode(msg).decode("utf8"), file=sys.stderr)


class ConsoleMessageHandler(BaseMessageHandler, tag="console"):
    # outputs human-readable lines, colored by severity
    def handle_message(self, msg: msgtypes.BaseMessage) -> None:
        level = msgtypes.message_level(msg)
        match msg:
            case msgtypes.StringMessage():
                text = msg.text
            case msgtypes.MissingMinBufferTimeMessage():
                text = "minBufferTime value not specified."
            case msgtypes.MissingPeriodMessage():
                text = "No Period node found. Set MPD duration to 0."
            case msgtypes.EarliestTimestampUnavailableMessage():
                text = (
                    "Could not determine the earliest segment presentation time for "
                    "availabilityStartTime calculation."
                )
            case msgtypes.MissingMinimumUpdatePeriodMessage():
                text = "The profile is dynamic but no minimumUpdatePeriod specified."
            case msgtypes.ManifestWrittenMessage():
                destination = msg.path or "standard output"
                text = (
                    f"Wrote {msg.mpd_type} manifest with {msg.num_periods} period(s) "
                    f"to {destination}"
                )
            case _:
                text = str(msg)

        prefix = f"{level.upper()}: " if level != msgtypes.MessageLevel.INFO else ""
        print(
            f"{_LEVEL_STYLES[level]}{prefix}{text}{colorama.Style.RESET_ALL}",
            file=sys.stderr,
        )


class RecordingMessageHandler(BaseMessageHandler, tag="record"):
    # keeps every message so that callers can react to degraded manifests
    messages: list[msgtypes.BaseMessage] = msgspec.field(default_factory=list)

    def handle_message(self, msg: msgtypes.BaseMessage) -> None:
        self.messages.append(msg)

    def of_type(self, msg_type: type[msgtypes.BaseMessage]) -> list[msgtypes.BaseMessage]:
        return [msg for msg in self.messages if isinstance(msg, msg_type)]


CLIMessageHandlers = JSONLMessageHandler | ConsoleMessageHandler
