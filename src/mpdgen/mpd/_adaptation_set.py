#!/usr/bin/python3

import xml.etree.ElementTree as ElementTree

from ..models.media_info import ContentType, MediaInfo
from . import _xml
from ._counters import IdCounters
from ._representation import Representation


class AdaptationSet:
    """
    A group of interchangeable representations of the same content.
    """

    def __init__(
        self,
        content_type: ContentType,
        language: str | None,
        counters: IdCounters,
    ):
        self.id = counters.next_adaptation_set_id()
        self.content_type = content_type
        self.language = language
        self.counters = counters
        self.representations: list[Representation] = []

    def add_representation(self, media_info: MediaInfo) -> Representation:
        representation = Representation(media_info, self.counters.next_representation_id())
        self.representations.append(representation)
        return representation

    def get_earliest_timestamp(self) -> float | None:
        timestamps = [
            timestamp
            for timestamp in (r.get_earliest_timestamp() for r in self.representations)
            if timestamp is not None
        ]
        return min(timestamps, default=None)

    def get_max_representation_duration(self) -> float | None:
        durations = [
            r.duration_seconds for r in self.representations if r.duration_seconds is not None
        ]
        return max(durations, default=None)

    def get_xml(self) -> ElementTree.Element | None:
        adaptation_set = _xml.create_element(
            "AdaptationSet", {"id": str(self.id), "contentType": str(self.content_type)}
        )
        if self.language:
            adaptation_set.set("lang", self.language)
        if self.content_type == ContentType.VIDEO:
            adaptation_set.set("segmentAlignment", "true")
            video_infos = [
                r.media_info.video_info for r in self.representations if r.media_info.video_info
            ]
            if video_infos:
                adaptation_set.set("maxWidth", str(max(v.width for v in video_infos)))
                adaptation_set.set("maxHeight", str(max(v.height for v in video_infos)))

        for representation in self.representations:
            child = representation.get_xml()
            if child is None:
                return None
            _xml.add_child(adaptation_set, child)
        return adaptation_set
