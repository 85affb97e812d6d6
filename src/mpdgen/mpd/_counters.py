#!/usr/bin/python3

import dataclasses


@dataclasses.dataclass
class IdCounters:
    """
    Numbering shared by every period in a manifest, so that AdaptationSet and Representation
    IDs are unique across the whole document and increase in creation order.
    """

    adaptation_set_count: int = 0
    representation_count: int = 0

    def next_adaptation_set_id(self) -> int:
        value = self.adaptation_set_count
        self.adaptation_set_count += 1
        return value

    def next_representation_id(self) -> int:
        value = self.representation_count
        self.representation_count += 1
        return value
