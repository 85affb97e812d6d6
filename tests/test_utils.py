#!/usr/bin/python3

import datetime
import math

import pytest
from mpdgen.models.media_info import (
    AudioInfo,
    ContainerType,
    MediaInfo,
    TextInfo,
    VideoInfo,
)
from mpdgen.mpd._utils import (
    codec_family,
    mime_type,
    seconds_to_xml_duration,
    xml_datetime_now_with_offset,
)

NOW = datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.UTC)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "PT0S"),
        (0.0, "PT0S"),
        (7.0, "PT7S"),
        (2.5, "PT2.5S"),
        (0.1, "PT0.1S"),
        (1.5, "PT1.5S"),
        (3600, "PT3600S"),
        (1e-05, "PT0.00001S"),
        (1e20, "PT100000000000000000000S"),
    ],
)
def test_seconds_to_xml_duration(seconds: float, expected: str):
    assert seconds_to_xml_duration(seconds) == expected


def test_smallest_positive_duration_is_not_zero():
    duration = seconds_to_xml_duration(math.ulp(0.0))
    assert duration.startswith("PT0.0")
    assert duration.endswith("5S")
    assert "e" not in duration


def test_non_finite_duration_rejected():
    with pytest.raises(ValueError):
        seconds_to_xml_duration(math.inf)


@pytest.mark.parametrize(
    "offset, expected",
    [
        (0, "2024-01-02T03:04:05Z"),
        (-6, "2024-01-02T03:03:59Z"),
        (-10806, "2024-01-02T00:03:59Z"),
        (86400, "2024-01-03T03:04:05Z"),
    ],
)
def test_xml_datetime(offset: int, expected: str):
    assert xml_datetime_now_with_offset(NOW, offset) == expected


def test_xml_datetime_converts_to_utc():
    tz = datetime.timezone(datetime.timedelta(hours=9))
    local = datetime.datetime(2024, 1, 2, 12, 4, 5, tzinfo=tz)
    assert xml_datetime_now_with_offset(local, 0) == "2024-01-02T03:04:05Z"


@pytest.mark.parametrize(
    "media_info, expected",
    [
        (MediaInfo(video_info=VideoInfo(codec="avc1.64001f", width=1, height=1)), "video/mp4"),
        (
            MediaInfo(
                container_type=ContainerType.WEBM,
                audio_info=AudioInfo(codec="opus", sampling_frequency=48000),
            ),
            "audio/webm",
        ),
        (MediaInfo(text_info=TextInfo(codec="wvtt")), "application/mp4"),
        (
            MediaInfo(container_type=ContainerType.TEXT, text_info=TextInfo(codec="ttml")),
            "application/ttml+xml",
        ),
        (
            MediaInfo(container_type=ContainerType.TEXT, text_info=TextInfo(codec="wvtt")),
            "text/vtt",
        ),
        (MediaInfo(), None),
    ],
)
def test_mime_type(media_info: MediaInfo, expected: str | None):
    assert mime_type(media_info) == expected


def test_codec_family():
    assert codec_family("avc1.64001f") == "avc1"
    assert codec_family("opus") == "opus"
    assert codec_family(None) is None
