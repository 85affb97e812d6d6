#!/usr/bin/python3

import enum

import msgspec


class MessageLevel(enum.StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class BaseMessage(msgspec.Struct, tag=True):
    pass


class StringMessage(BaseMessage, tag="string-message"):
    # other properly-typed message structs should be used over this
    text: str


class MissingMinBufferTimeMessage(BaseMessage, tag="missing-min-buffer-time"):
    """
    minBufferTime is mandatory for every profile; the manifest is still written without it.
    """


class MissingPeriodMessage(BaseMessage, tag="missing-period"):
    """
    A static manifest was generated without any period, so its duration was set to zero.
    """


class EarliestTimestampUnavailableMessage(BaseMessage, tag="earliest-timestamp-unavailable"):
    """
    The earliest segment presentation time could not be determined, so availabilityStartTime
    was omitted from a dynamic manifest.
    """


class MissingMinimumUpdatePeriodMessage(BaseMessage, tag="missing-minimum-update-period"):
    """
    A dynamic manifest was generated without minimumUpdatePeriod.
    """


class ManifestWrittenMessage(BaseMessage, tag="manifest-written"):
    # None if the manifest was written to standard output
    path: str | None
    num_periods: int
    mpd_type: str


def message_level(msg: BaseMessage) -> MessageLevel:
    match msg:
        case MissingMinBufferTimeMessage() | EarliestTimestampUnavailableMessage():
            return MessageLevel.ERROR
        case MissingPeriodMessage() | MissingMinimumUpdatePeriodMessage():
            return MessageLevel.WARNING
        case _:
            return MessageLevel.INFO
