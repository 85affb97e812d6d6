#!/usr/bin/python3

import math
import xml.etree.ElementTree as ElementTree
from typing import assert_never

from ..models import messages as messages
from ..models.options import DashProfile, MpdOptions, MpdType
from ..output import BaseMessageHandler
from ..version import PROJECT_URL, VERSION
from . import _xml
from ._clock import Clock, FixedClock, SystemClock
from ._counters import IdCounters
from ._period import Period, PeriodLike
from ._utils import positive, seconds_to_xml_duration, xml_datetime_now_with_offset
from ._xml import MpdDocument, XmlNodeError

__all__ = (
    "Clock",
    "FixedClock",
    "IdCounters",
    "MpdBuilder",
    "MpdDocument",
    "MpdGenerationError",
    "Period",
    "PeriodLike",
    "SystemClock",
    "XmlNodeError",
)

_MPD_NAMESPACES = {
    "xmlns": "urn:mpeg:dash:schema:mpd:2011",
    "xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "xmlns:xlink": "http://www.w3.org/1999/xlink",
    "xsi:schemaLocation": "urn:mpeg:dash:schema:mpd:2011 DASH-MPD.xsd",
    "xmlns:cenc": "urn:mpeg:cenc:2013",
}

ON_DEMAND_PROFILE = "urn:mpeg:dash:profile:isoff-on-demand:2011"
LIVE_PROFILE = "urn:mpeg:dash:profile:isoff-live:2011"


class MpdGenerationError(Exception):
    """
    Raised when a manifest cannot be generated at all.  No partial manifest is ever produced.
    """


class MpdBuilder:
    """
    Assembles an MPD from periods added over the builder's lifetime.

    Generating a manifest reads the current state without modifying the periods; it may be
    called repeatedly, e.g. to refresh a dynamic manifest as new segments are added.  The only
    state set during generation is the availabilityStartTime of a dynamic manifest, which is
    computed once and reused afterwards.

    Adding periods is not thread-safe and must not happen while a manifest is generated.
    """

    def __init__(
        self,
        options: MpdOptions,
        clock: Clock | None = None,
        version: str | None = VERSION,
        handlers: list[BaseMessageHandler] | None = None,
    ):
        self.options = options
        self.clock: Clock = clock or SystemClock()
        self.version = version
        self.handlers: list[BaseMessageHandler] = handlers if handlers is not None else []

        self.base_urls: list[str] = []
        self.periods: list[PeriodLike] = []
        self.counters = IdCounters()
        self.availability_start_time = ""

    def add_base_url(self, base_url: str) -> None:
        self.base_urls.append(base_url)

    def add_period(self, start_seconds: float = 0.0) -> Period:
        # periods are presented in the order they are added
        period = Period(len(self.periods), start_seconds, self.counters)
        self.periods.append(period)
        return period

    def append_period(self, period: PeriodLike) -> None:
        self.periods.append(period)

    def to_string(self) -> str:
        return self.generate_mpd().to_string()

    def generate_mpd(self) -> MpdDocument:
        mpd = _xml.create_element("MPD")

        try:
            for base_url in self.base_urls:
                base_url_node = _xml.create_element("BaseURL")
                _xml.set_text(base_url_node, base_url)
                _xml.add_child(mpd, base_url_node)

            for index, period in enumerate(self.periods):
                period_node = period.get_xml()
                if period_node is None:
                    raise MpdGenerationError(f"Period at index {index} could not be rendered")
                _xml.add_child(mpd, period_node)
        except XmlNodeError as exc:
            raise MpdGenerationError(f"Failed to assemble manifest: {exc}") from exc

        _xml.set_attributes(mpd, _MPD_NAMESPACES)

        match self.options.dash_profile:
            case DashProfile.ON_DEMAND:
                mpd.set("profiles", ON_DEMAND_PROFILE)
            case DashProfile.LIVE:
                mpd.set("profiles", LIVE_PROFILE)
            case _:
                assert_never(self.options.dash_profile)

        self._add_common_mpd_info(mpd)
        match self.options.mpd_type:
            case MpdType.STATIC:
                self._add_static_mpd_info(mpd)
            case MpdType.DYNAMIC:
                self._add_dynamic_mpd_info(mpd)
            case _:
                assert_never(self.options.mpd_type)

        comment = None
        if self.version:
            comment = f"Generated with {PROJECT_URL} version {self.version}"
        return MpdDocument(mpd, comment)

    def _report(self, msg: messages.BaseMessage) -> None:
        for handler in self.handlers:
            handler.handle_message(msg)

    def _add_common_mpd_info(self, mpd: ElementTree.Element) -> None:
        min_buffer_time = self.options.mpd_params.min_buffer_time
        if positive(min_buffer_time):
            mpd.set("minBufferTime", seconds_to_xml_duration(min_buffer_time))
        else:
            self._report(messages.MissingMinBufferTimeMessage())

    def _add_static_mpd_info(self, mpd: ElementTree.Element) -> None:
        mpd.set("type", str(MpdType.STATIC))
        # mediaPresentationDuration is mandatory for static manifests, so 'PT0S' is written
        # even if no representation reports a duration
        duration = self.get_static_mpd_duration()
        mpd.set("mediaPresentationDuration", seconds_to_xml_duration(duration))

    def get_static_mpd_duration(self) -> float:
        if not self.periods:
            self._report(messages.MissingPeriodMessage())
            return 0.0

        # static manifests are expected to hold a single period, so only the first is checked
        duration = self.periods[0].get_max_representation_duration()
        return duration if duration is not None else 0.0

    def get_earliest_timestamp(self) -> float | None:
        # periods are expected to be added in chronological order, so only the first is checked
        if not self.periods:
            return None
        return self.periods[0].get_earliest_timestamp()

    def _add_dynamic_mpd_info(self, mpd: ElementTree.Element) -> None:
        params = self.options.mpd_params
        now = self.clock.now()

        mpd.set("type", str(MpdType.DYNAMIC))
        mpd.set("publishTime", xml_datetime_now_with_offset(now, 0))

        # availabilityStartTime is required for dynamic manifests and must not drift across
        # refreshes, so it is only calculated once
        if not self.availability_start_time:
            earliest_presentation_time = self.get_earliest_timestamp()
            if earliest_presentation_time is not None:
                self.availability_start_time = xml_datetime_now_with_offset(
                    now, -math.ceil(earliest_presentation_time)
                )
            else:
                self._report(messages.EarliestTimestampUnavailableMessage())
        if self.availability_start_time:
            mpd.set("availabilityStartTime", self.availability_start_time)

        if positive(params.minimum_update_period):
            mpd.set("minimumUpdatePeriod", seconds_to_xml_duration(params.minimum_update_period))
        else:
            self._report(messages.MissingMinimumUpdatePeriodMessage())

        if positive(params.time_shift_buffer_depth):
            mpd.set(
                "timeShiftBufferDepth", seconds_to_xml_duration(params.time_shift_buffer_depth)
            )
        if positive(params.suggested_presentation_delay):
            mpd.set(
                "suggestedPresentationDelay",
                seconds_to_xml_duration(params.suggested_presentation_delay),
            )
