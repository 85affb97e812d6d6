#!/usr/bin/python3

import dataclasses
import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime.datetime: ...


class SystemClock:
    def now(self) -> datetime.datetime:
        return datetime.datetime.now(datetime.UTC)


@dataclasses.dataclass
class FixedClock:
    """
    Clock that reports a caller-controlled instant.  Useful for reproducible manifests.
    """

    instant: datetime.datetime

    def now(self) -> datetime.datetime:
        return self.instant

    def advance(self, seconds: float) -> None:
        self.instant += datetime.timedelta(seconds=seconds)
