#!/usr/bin/python3


import argparse
import pathlib
import sys
import typing

import colorama
import msgspec

from .models import messages
from .models.options import DashProfile, MpdParams, MpdType
from .models.presentation import PresentationDescription
from .mpd import MpdBuilder, MpdGenerationError
from .output import BaseMessageHandler, CLIMessageHandlers
from .util.paths import make_paths_relative_to_mpd

colorama.just_fix_windows_console()

# help text for the command line options overriding each MpdParams field
_PARAM_OPTIONS = {
    "min_buffer_time": "Minimum buffer time in seconds",
    "minimum_update_period": "Minimum update period in seconds (dynamic manifests)",
    "time_shift_buffer_depth": "Time shift buffer depth in seconds (dynamic manifests)",
    "suggested_presentation_delay": "Suggested presentation delay in seconds (dynamic manifests)",
}


def create_builder(
    description: PresentationDescription,
    output_path: pathlib.Path | None = None,
    relative_paths: bool = True,
    handlers: list[BaseMessageHandler] | None = None,
) -> MpdBuilder:
    """
    Creates a builder populated with the periods, representations and segments listed in the
    description.  If an output path is given and relative_paths is set, media paths are
    rewritten relative to it; the description itself is not modified.
    """
    builder = MpdBuilder(description.options, handlers=handlers)
    for base_url in description.base_urls:
        builder.add_base_url(base_url)

    for period_desc in description.periods:
        period = builder.add_period(period_desc.start_seconds)
        for rep_desc in period_desc.representations:
            media_info = msgspec.structs.replace(rep_desc.media_info)
            if output_path and relative_paths:
                make_paths_relative_to_mpd(str(output_path), media_info)
            representation = period.get_or_create_adaptation_set(
                media_info
            ).add_representation(media_info)
            for segment in rep_desc.segments:
                for n in range(segment.repeat + 1):
                    representation.add_new_segment(
                        segment.start_time + n * segment.duration, segment.duration
                    )
    return builder


def _apply_overrides(
    description: PresentationDescription, args: argparse.Namespace
) -> PresentationDescription:
    options = description.options
    param_overrides = {
        key: getattr(args, key) for key in _PARAM_OPTIONS if getattr(args, key) is not None
    }
    if param_overrides:
        options = msgspec.structs.replace(
            options, mpd_params=msgspec.structs.replace(options.mpd_params, **param_overrides)
        )
    if args.profile:
        options = msgspec.structs.replace(options, dash_profile=args.profile)
    if args.type:
        options = msgspec.structs.replace(options, mpd_type=args.type)
    return msgspec.structs.replace(
        description,
        options=options,
        base_urls=[*description.base_urls, *args.base_urls],
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Generates a DASH Media Presentation Description from a content description"
    )

    parser.add_argument(
        "description",
        type=pathlib.Path,
        help="JSON or TOML file describing periods and representations",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=pathlib.Path,
        help="Path to write the manifest to (defaults to standard output)",
    )
    parser.add_argument(
        "--base-url",
        dest="base_urls",
        action="append",
        default=[],
        help="BaseURL to add to the manifest; may be specified multiple times",
    )
    parser.add_argument(
        "--profile",
        type=DashProfile,
        choices=list(DashProfile),
        help="DASH profile (overrides the description)",
    )
    parser.add_argument(
        "--type",
        type=MpdType,
        choices=list(MpdType),
        help="Manifest type (overrides the description)",
    )
    for field in msgspec.structs.fields(MpdParams):
        parser.add_argument(
            f"--{field.name.replace('_', '-')}",
            type=float,
            dest=field.name,
            help=_PARAM_OPTIONS[field.name],
        )
    parser.add_argument(
        "--relative-paths",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Rewrite media paths relative to the output manifest's directory",
    )
    parser.add_argument(
        "--progress-style",
        type=str,
        choices=[
            handler.tag
            for handler in msgspec.inspect.multi_type_info(typing.get_args(CLIMessageHandlers))
            if isinstance(handler, msgspec.inspect.StructType)
        ],
        default="console",
        help="Style to use for displaying diagnostics",
    )

    args = parser.parse_args(argv)

    handler = msgspec.convert({"type": args.progress_style}, CLIMessageHandlers)

    try:
        description = PresentationDescription.from_path(args.description)
    except OSError as exc:
        parser.exit(1, f"Could not read {args.description}: {exc}\n")
    except msgspec.DecodeError as exc:
        parser.exit(1, f"Invalid description {args.description}: {exc}\n")

    description = _apply_overrides(description, args)

    try:
        builder = create_builder(description, args.output, args.relative_paths, [handler])
        manifest = builder.to_string()
    except (MpdGenerationError, ValueError) as exc:
        parser.exit(1, f"Failed to generate manifest: {exc}\n")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(manifest, encoding="utf8", newline="\n")
    else:
        sys.stdout.write(manifest)

    handler.handle_message(
        messages.ManifestWrittenMessage(
            path=str(args.output) if args.output else None,
            num_periods=len(builder.periods),
            mpd_type=str(description.options.mpd_type),
        )
    )
