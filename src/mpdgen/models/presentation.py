#!/usr/bin/python3

import pathlib
from typing import Self

import msgspec

from .media_info import MediaInfo, SegmentInfo
from .options import MpdOptions


class RepresentationDescription(msgspec.Struct, kw_only=True):
    media_info: MediaInfo

    # only used for live manifests; timestamps are in the media info's timescale
    segments: list[SegmentInfo] = msgspec.field(default_factory=list)


class PeriodDescription(msgspec.Struct, kw_only=True):
    start_seconds: float = 0.0
    representations: list[RepresentationDescription] = msgspec.field(default_factory=list)


class PresentationDescription(msgspec.Struct, kw_only=True):
    """
    Input file describing already-produced content to be listed in a manifest.
    """

    options: MpdOptions = msgspec.field(default_factory=MpdOptions)
    base_urls: list[str] = msgspec.field(default_factory=list)
    periods: list[PeriodDescription] = msgspec.field(default_factory=list)

    @classmethod
    def from_path(cls, path: pathlib.Path) -> Self:
        # the format is chosen by suffix; anything other than TOML is read as JSON
        data = path.read_bytes()
        if path.suffix.lower() == ".toml":
            return msgspec.toml.decode(data, type=cls)
        return msgspec.json.decode(data, type=cls)
