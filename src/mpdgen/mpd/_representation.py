#!/usr/bin/python3

import xml.etree.ElementTree as ElementTree

import msgspec

from ..models.media_info import MediaInfo, SegmentInfo
from . import _xml
from ._utils import frame_rate, mime_type


class Representation:
    """
    One encoding of a stream within an adaptation set.
    """

    def __init__(self, media_info: MediaInfo, representation_id: int):
        self.media_info = media_info
        self.id = representation_id
        self.segment_infos: list[SegmentInfo] = []
        self.start_number = 1

    def add_new_segment(self, start_time: int, duration: int, size: int = 0) -> None:
        # size is accepted for parity with the segment notification interface, but is not
        # represented in SegmentTimeline
        if duration <= 0:
            raise ValueError(f"Segment duration must be positive (got {duration})")
        if self.segment_infos:
            last = self.segment_infos[-1]
            if last.duration == duration and last.end_time == start_time:
                self.segment_infos[-1] = msgspec.structs.replace(last, repeat=last.repeat + 1)
                return
        self.segment_infos.append(SegmentInfo(start_time, duration))

    def has_required_fields(self) -> bool:
        return self.media_info.bandwidth > 0 and self.media_info.content_type is not None

    def get_earliest_timestamp(self) -> float | None:
        if not self.segment_infos:
            return None
        return self.segment_infos[0].start_time / self.media_info.time_scale

    @property
    def duration_seconds(self) -> float | None:
        return self.media_info.media_duration_seconds

    def _video_attributes(self) -> dict[str, str]:
        video_info = self.media_info.video_info
        assert video_info
        attributes = {
            "width": str(video_info.width),
            "height": str(video_info.height),
        }
        rate = frame_rate(video_info.time_scale, video_info.frame_duration)
        if rate:
            attributes["frameRate"] = rate
        attributes["sar"] = f"{video_info.pixel_width}:{video_info.pixel_height}"
        return attributes

    def _segment_base(self) -> ElementTree.Element | None:
        media_info = self.media_info
        if not media_info.index_range:
            return None
        segment_base = _xml.create_element(
            "SegmentBase",
            {
                "indexRange": str(media_info.index_range),
                "timescale": str(media_info.time_scale),
            },
        )
        if media_info.init_range:
            _xml.add_child(
                segment_base,
                _xml.create_element("Initialization", {"range": str(media_info.init_range)}),
            )
        return segment_base

    def _segment_template(self) -> ElementTree.Element | None:
        media_info = self.media_info
        if not media_info.segment_template:
            return None
        attributes = {"timescale": str(media_info.time_scale)}
        if media_info.init_segment_name:
            attributes["initialization"] = media_info.init_segment_name
        attributes["media"] = media_info.segment_template
        attributes["startNumber"] = str(self.start_number)
        segment_template = _xml.create_element("SegmentTemplate", attributes)

        if self.segment_infos:
            timeline = _xml.create_element("SegmentTimeline")
            for segment_info in self.segment_infos:
                s = _xml.create_element(
                    "S", {"t": str(segment_info.start_time), "d": str(segment_info.duration)}
                )
                if segment_info.repeat:
                    s.set("r", str(segment_info.repeat))
                _xml.add_child(timeline, s)
            _xml.add_child(segment_template, timeline)
        return segment_template

    def get_xml(self) -> ElementTree.Element | None:
        """
        Returns the <Representation> subtree, or None if the stream lacks the information
        needed to describe it.
        """
        if not self.has_required_fields():
            return None

        media_info = self.media_info
        attributes = {
            "id": str(self.id),
            "bandwidth": str(media_info.bandwidth),
        }
        if media_info.codec:
            attributes["codecs"] = media_info.codec
        attributes["mimeType"] = mime_type(media_info) or ""
        if media_info.video_info:
            attributes |= self._video_attributes()
        elif media_info.audio_info:
            attributes["audioSamplingRate"] = str(media_info.audio_info.sampling_frequency)

        representation = _xml.create_element("Representation", attributes)

        if media_info.audio_info and media_info.audio_info.num_channels:
            _xml.add_child(
                representation,
                _xml.create_element(
                    "AudioChannelConfiguration",
                    {
                        "schemeIdUri": "urn:mpeg:dash:23003:3:audio_channel_configuration:2011",
                        "value": str(media_info.audio_info.num_channels),
                    },
                ),
            )

        if media_info.media_file_name:
            base_url = _xml.create_element("BaseURL")
            _xml.set_text(base_url, media_info.media_file_name)
            _xml.add_child(representation, base_url)

        segment_base = self._segment_base()
        if segment_base is not None:
            _xml.add_child(representation, segment_base)

        segment_template = self._segment_template()
        if segment_template is not None:
            _xml.add_child(representation, segment_template)
        return representation
