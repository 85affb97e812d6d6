#!/usr/bin/python3

import pathlib

from ..models.media_info import MediaInfo

FILE_PROTOCOL = "file://"

# MediaInfo fields that hold paths to media files
MEDIA_PATH_FIELDS = ("media_file_name", "init_segment_name", "segment_template")


def _to_posix_path(path: str) -> pathlib.PurePosixPath:
    # separators are normalized to '/' regardless of the platform the paths came from
    return pathlib.PurePosixPath(path.replace("\\", "/"))


def make_path_relative(media_path: str, parent_path: pathlib.PurePosixPath) -> str:
    """
    Returns media_path relative to parent_path if it is a descendant of it; otherwise the path
    is returned unchanged.  Either way the result uses '/' as its separator.
    """
    child_path = _to_posix_path(media_path)
    try:
        relative_path = child_path.relative_to(parent_path)
    except ValueError:
        return child_path.as_posix()
    if not relative_path.parts:
        # a path is not a descendant of itself
        return child_path.as_posix()
    return relative_path.as_posix()


def mpd_directory(mpd_path: str) -> pathlib.PurePosixPath | None:
    mpd_path = mpd_path.removeprefix(FILE_PROTOCOL)
    if not mpd_path:
        return None
    # a bare file name resolves to '.', which relative media paths are descendants of
    return _to_posix_path(mpd_path).parent


def make_paths_relative_to_mpd(mpd_path: str, media_info: MediaInfo) -> None:
    """
    Rewrites the media paths of media_info in place so that they are relative to the directory
    containing the manifest.  Fields that are not set are left untouched.
    """
    mpd_dir = mpd_directory(mpd_path)
    if mpd_dir is None:
        return

    for field in MEDIA_PATH_FIELDS:
        value = getattr(media_info, field)
        if value is not None:
            setattr(media_info, field, make_path_relative(value, mpd_dir))
