#!/usr/bin/python3

import enum

import msgspec


class DashProfile(enum.StrEnum):
    ON_DEMAND = "on-demand"
    LIVE = "live"


class MpdType(enum.StrEnum):
    STATIC = "static"
    DYNAMIC = "dynamic"


class MpdParams(msgspec.Struct, frozen=True, kw_only=True):
    # all values are in seconds; anything not strictly positive is treated as unset
    min_buffer_time: float = 0.0
    minimum_update_period: float = 0.0
    time_shift_buffer_depth: float = 0.0
    suggested_presentation_delay: float = 0.0


class MpdOptions(msgspec.Struct, frozen=True, kw_only=True):
    """
    Manifest-wide configuration.  The profile and type together determine which root
    attributes are mandatory.
    """

    dash_profile: DashProfile = DashProfile.ON_DEMAND
    mpd_type: MpdType = MpdType.STATIC
    mpd_params: MpdParams = msgspec.field(default_factory=MpdParams)
