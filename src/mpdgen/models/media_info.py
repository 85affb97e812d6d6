#!/usr/bin/python3

import enum

import msgspec


class ContainerType(enum.StrEnum):
    MP4 = "mp4"
    WEBM = "webm"
    TEXT = "text"


class ContentType(enum.StrEnum):
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"


class Range(msgspec.Struct, frozen=True):
    # inclusive byte range, matching the DASH 'first-last' notation
    begin: int
    end: int

    def __str__(self) -> str:
        return f"{self.begin}-{self.end}"


class VideoInfo(msgspec.Struct, kw_only=True):
    codec: str
    width: int
    height: int
    time_scale: int = 0

    # frame rate is time_scale / frame_duration
    frame_duration: int = 0

    # sample aspect ratio; 1:1 when unset
    pixel_width: int = 1
    pixel_height: int = 1


class AudioInfo(msgspec.Struct, kw_only=True):
    codec: str
    sampling_frequency: int
    time_scale: int = 0
    num_channels: int = 0
    language: str | None = None


class TextInfo(msgspec.Struct, kw_only=True):
    # e.g. 'wvtt' or 'ttml'
    codec: str
    language: str | None = None


class MediaInfo(msgspec.Struct, kw_only=True, omit_defaults=True):
    """
    Description of a single encoded stream that has already been produced.

    The three path fields may be absolute when the description is created; they are rewritten
    relative to the manifest location by :func:`mpdgen.util.paths.make_paths_relative_to_mpd`.
    """

    bandwidth: int = 0
    container_type: ContainerType = ContainerType.MP4

    video_info: VideoInfo | None = None
    audio_info: AudioInfo | None = None
    text_info: TextInfo | None = None

    # on-demand byte ranges within media_file_name
    init_range: Range | None = None
    index_range: Range | None = None

    reference_time_scale: int | None = None
    media_duration_seconds: float | None = None

    media_file_name: str | None = None
    init_segment_name: str | None = None
    segment_template: str | None = None

    @property
    def content_type(self) -> ContentType | None:
        if self.video_info:
            return ContentType.VIDEO
        elif self.audio_info:
            return ContentType.AUDIO
        elif self.text_info:
            return ContentType.TEXT
        return None

    @property
    def codec(self) -> str | None:
        if self.video_info:
            return self.video_info.codec
        elif self.audio_info:
            return self.audio_info.codec
        elif self.text_info:
            return self.text_info.codec
        return None

    @property
    def language(self) -> str | None:
        if self.audio_info:
            return self.audio_info.language
        elif self.text_info:
            return self.text_info.language
        return None

    @property
    def time_scale(self) -> int:
        """
        Returns the timescale used for segment timestamps.  An explicit reference timescale
        takes precedence over the stream's own timescale.
        """
        if self.reference_time_scale:
            return self.reference_time_scale
        if self.video_info and self.video_info.time_scale:
            return self.video_info.time_scale
        if self.audio_info and self.audio_info.time_scale:
            return self.audio_info.time_scale
        return 1


class SegmentInfo(msgspec.Struct, frozen=True):
    """
    A run of segments in timescale units.  'repeat' is the number of additional segments of
    the same duration immediately following the first one, as in SegmentTimeline's S@r.
    """

    start_time: int
    duration: int
    repeat: int = 0

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration * (self.repeat + 1)
