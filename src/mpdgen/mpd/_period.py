#!/usr/bin/python3

import xml.etree.ElementTree as ElementTree
from typing import NamedTuple, Protocol

from ..models.media_info import ContainerType, ContentType, MediaInfo
from . import _xml
from ._adaptation_set import AdaptationSet
from ._counters import IdCounters
from ._utils import codec_family, seconds_to_xml_duration


class PeriodLike(Protocol):
    """
    What the manifest builder needs from a period.
    """

    def get_xml(self) -> ElementTree.Element | None: ...

    def get_earliest_timestamp(self) -> float | None: ...

    def get_max_representation_duration(self) -> float | None: ...


class AdaptationSetKey(NamedTuple):
    # streams sharing a key are interchangeable and belong to the same adaptation set
    content_type: ContentType
    language: str | None
    container_type: ContainerType
    codec_family: str | None

    @classmethod
    def from_media_info(cls, media_info: MediaInfo) -> "AdaptationSetKey":
        content_type = media_info.content_type
        if content_type is None:
            raise ValueError("Media info does not describe a video, audio or text stream")
        return cls(
            content_type,
            media_info.language,
            media_info.container_type,
            codec_family(media_info.codec),
        )


class Period:
    def __init__(self, period_id: int, start_seconds: float, counters: IdCounters):
        self.id = period_id
        self.start_seconds = start_seconds
        self.counters = counters
        self.adaptation_sets: dict[AdaptationSetKey, AdaptationSet] = {}

    def get_or_create_adaptation_set(self, media_info: MediaInfo) -> AdaptationSet:
        key = AdaptationSetKey.from_media_info(media_info)
        if key not in self.adaptation_sets:
            self.adaptation_sets[key] = AdaptationSet(
                key.content_type, key.language, self.counters
            )
        return self.adaptation_sets[key]

    def get_earliest_timestamp(self) -> float | None:
        timestamps = [
            timestamp
            for timestamp in (a.get_earliest_timestamp() for a in self.adaptation_sets.values())
            if timestamp is not None
        ]
        return min(timestamps, default=None)

    def get_max_representation_duration(self) -> float | None:
        durations = [
            duration
            for duration in (
                a.get_max_representation_duration() for a in self.adaptation_sets.values()
            )
            if duration is not None
        ]
        return max(durations, default=None)

    def get_xml(self) -> ElementTree.Element | None:
        """
        Returns the <Period> subtree, or None if any of its representations cannot be
        described.  A period without adaptation sets yields an empty <Period>.
        """
        period = _xml.create_element(
            "Period", {"id": str(self.id), "start": seconds_to_xml_duration(self.start_seconds)}
        )
        for adaptation_set in self.adaptation_sets.values():
            child = adaptation_set.get_xml()
            if child is None:
                return None
            _xml.add_child(period, child)
        return period
