#!/usr/bin/python3

import datetime
import decimal
import math

from ..models.media_info import ContainerType, ContentType, MediaInfo

_XML_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def positive(value: float) -> bool:
    # zero and negative values are indistinguishable from 'not specified'
    return value > 0.0


def seconds_to_xml_duration(seconds: float) -> str:
    """
    Converts a number of seconds to an ISO-8601 duration of the form 'PT<seconds>S'.

    The shortest decimal string that round-trips the value is used, written out in full
    without exponent notation (7.0 becomes 'PT7S', 2.5 becomes 'PT2.5S').
    """
    if not math.isfinite(seconds):
        raise ValueError(f"Cannot represent {seconds} as a duration")
    text = format(decimal.Decimal(repr(float(seconds))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return f"PT{text}S"


def xml_datetime_now_with_offset(now: datetime.datetime, offset_seconds: int) -> str:
    # returns the instant in XML DateTime format; the value is in UTC so it ends with 'Z'
    if now.tzinfo is None:
        now = now.replace(tzinfo=datetime.UTC)
    instant = now.astimezone(datetime.UTC) + datetime.timedelta(seconds=offset_seconds)
    return instant.strftime(_XML_DATETIME_FORMAT)


def mime_type(media_info: MediaInfo) -> str | None:
    content_type = media_info.content_type
    if content_type is None:
        return None
    match media_info.container_type:
        case ContainerType.MP4:
            if content_type == ContentType.TEXT:
                return "application/mp4"
            return f"{content_type}/mp4"
        case ContainerType.WEBM:
            return f"{content_type}/webm"
        case ContainerType.TEXT:
            if media_info.codec == "ttml":
                return "application/ttml+xml"
            return "text/vtt"
    return None


def codec_family(codec: str | None) -> str | None:
    # 'avc1.64001f' and 'avc1.4d401e' may be switched between, 'avc1' and 'hev1' may not
    if codec is None:
        return None
    family, *_ = codec.partition(".")
    return family


def frame_rate(time_scale: int, frame_duration: int) -> str | None:
    if time_scale <= 0 or frame_duration <= 0:
        return None
    return f"{time_scale}/{frame_duration}"
