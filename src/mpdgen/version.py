#!/usr/bin/python3

import importlib.metadata

PROJECT_NAME = "mpdgen"
PROJECT_URL = "https://pypi.org/project/mpdgen/"


def get_version() -> str | None:
    # the version is unavailable when running from a source tree that was never installed
    try:
        return importlib.metadata.version(PROJECT_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None


VERSION = get_version()
