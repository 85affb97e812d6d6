#!/usr/bin/python3

import pytest
from mpdgen.models.media_info import AudioInfo, MediaInfo, Range, VideoInfo
from mpdgen.mpd import IdCounters, Period, XmlNodeError


def _video(bandwidth: int, height: int, codec: str = "avc1.64001f", **kwargs) -> MediaInfo:
    return MediaInfo(
        bandwidth=bandwidth,
        video_info=VideoInfo(
            codec=codec,
            width=height * 16 // 9,
            height=height,
            time_scale=90000,
            frame_duration=3000,
        ),
        **kwargs,
    )


def _audio(language: str | None = "en", **kwargs) -> MediaInfo:
    return MediaInfo(
        bandwidth=128000,
        audio_info=AudioInfo(
            codec="mp4a.40.2",
            sampling_frequency=48000,
            time_scale=48000,
            num_channels=2,
            language=language,
        ),
        **kwargs,
    )


def test_representations_grouped_into_adaptation_sets():
    period = Period(0, 0.0, IdCounters())
    video_hd = period.get_or_create_adaptation_set(_video(4_000_000, 1080))
    video_sd = period.get_or_create_adaptation_set(_video(1_000_000, 480))
    video_hevc = period.get_or_create_adaptation_set(_video(2_000_000, 1080, "hvc1.1.6.L93"))
    audio_en = period.get_or_create_adaptation_set(_audio("en"))
    audio_ja = period.get_or_create_adaptation_set(_audio("ja"))

    assert video_hd is video_sd
    assert video_hevc is not video_hd
    assert audio_en is not audio_ja
    assert [a.id for a in period.adaptation_sets.values()] == [0, 1, 2, 3]


def test_numbering_shared_across_periods():
    counters = IdCounters()
    first, second = Period(0, 0.0, counters), Period(1, 30.0, counters)

    reps = []
    for period in (first, second):
        for media_info in (_video(1_000_000, 720), _audio()):
            adaptation_set = period.get_or_create_adaptation_set(media_info)
            reps.append(adaptation_set.add_representation(media_info))

    assert [r.id for r in reps] == [0, 1, 2, 3]
    second_sets = list(second.adaptation_sets.values())
    assert [a.id for a in second_sets] == [2, 3]


def test_period_requires_content_type():
    period = Period(0, 0.0, IdCounters())
    with pytest.raises(ValueError):
        period.get_or_create_adaptation_set(MediaInfo(bandwidth=1000))


def test_max_representation_duration():
    period = Period(0, 0.0, IdCounters())
    assert period.get_max_representation_duration() is None
    for duration in (2.5, 7.0, 3.1):
        media_info = _video(1_000_000, 720, media_duration_seconds=duration)
        period.get_or_create_adaptation_set(media_info).add_representation(media_info)
    assert period.get_max_representation_duration() == 7.0


def test_earliest_timestamp():
    period = Period(0, 0.0, IdCounters())
    video_info = _video(1_000_000, 720)
    audio_info = _audio()
    video = period.get_or_create_adaptation_set(video_info).add_representation(video_info)
    audio = period.get_or_create_adaptation_set(audio_info).add_representation(audio_info)
    assert period.get_earliest_timestamp() is None

    video.add_new_segment(450000, 180000)
    audio.add_new_segment(192000, 96000)
    assert period.get_earliest_timestamp() == 4.0


def test_segment_timeline():
    media_info = _video(1_000_000, 720, segment_template="seg-$Number$.m4s")
    period = Period(0, 0.0, IdCounters())
    rep = period.get_or_create_adaptation_set(media_info).add_representation(media_info)
    for start in (0, 180000, 360000):
        rep.add_new_segment(start, 180000)
    rep.add_new_segment(600000, 90000)

    node = rep.get_xml()
    assert node is not None
    segments = node.findall("SegmentTemplate/SegmentTimeline/S")
    assert [s.attrib for s in segments] == [
        {"t": "0", "d": "180000", "r": "2"},
        {"t": "600000", "d": "90000"},
    ]
    template = node.find("SegmentTemplate")
    assert template is not None
    assert template.get("media") == "seg-$Number$.m4s"
    assert template.get("timescale") == "90000"


def test_non_positive_segment_duration_rejected():
    media_info = _video(1_000_000, 720)
    rep = Period(0, 0.0, IdCounters()).get_or_create_adaptation_set(
        media_info
    ).add_representation(media_info)
    with pytest.raises(ValueError):
        rep.add_new_segment(0, 0)


def test_on_demand_representation():
    media_info = _audio(
        media_file_name="audio.mp4",
        init_range=Range(0, 799),
        index_range=Range(800, 1199),
    )
    rep = Period(0, 0.0, IdCounters()).get_or_create_adaptation_set(
        media_info
    ).add_representation(media_info)

    node = rep.get_xml()
    assert node is not None
    assert node.attrib == {
        "id": "0",
        "bandwidth": "128000",
        "codecs": "mp4a.40.2",
        "mimeType": "audio/mp4",
        "audioSamplingRate": "48000",
    }
    assert [child.tag for child in node] == [
        "AudioChannelConfiguration",
        "BaseURL",
        "SegmentBase",
    ]
    assert node.findtext("BaseURL") == "audio.mp4"
    segment_base = node.find("SegmentBase")
    assert segment_base is not None
    assert segment_base.get("indexRange") == "800-1199"
    initialization = segment_base.find("Initialization")
    assert initialization is not None
    assert initialization.get("range") == "0-799"


def test_video_representation_attributes():
    media_info = _video(2_000_000, 720)
    period = Period(0, 0.0, IdCounters())
    period.get_or_create_adaptation_set(media_info).add_representation(media_info)

    node = period.get_xml()
    assert node is not None
    assert node.attrib == {"id": "0", "start": "PT0S"}
    adaptation_set = node.find("AdaptationSet")
    assert adaptation_set is not None
    assert adaptation_set.get("contentType") == "video"
    assert adaptation_set.get("maxWidth") == "1280"
    rep = adaptation_set.find("Representation")
    assert rep is not None
    assert rep.get("frameRate") == "90000/3000"
    assert rep.get("sar") == "1:1"
    assert "duration" not in rep.attrib


def test_empty_period_renders_bare_node():
    node = Period(3, 12.5, IdCounters()).get_xml()
    assert node is not None
    assert node.attrib == {"id": "3", "start": "PT12.5S"}
    assert len(node) == 0


def test_period_with_incomplete_representation_cannot_render():
    period = Period(0, 0.0, IdCounters())
    media_info = _video(0, 720)
    period.get_or_create_adaptation_set(media_info).add_representation(media_info)
    assert period.get_xml() is None


def test_malformed_base_url_rejected():
    period = Period(0, 0.0, IdCounters())
    media_info = _video(1_000_000, 720, media_file_name="video\x00.mp4")
    period.get_or_create_adaptation_set(media_info).add_representation(media_info)
    with pytest.raises(XmlNodeError):
        period.get_xml()
