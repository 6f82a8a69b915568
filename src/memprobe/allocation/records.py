"""
The Record value type that the allocation endpoint mass-produces.

Only the shape of a Record matters: fields are never populated, and its
size is reported as the shallow footprint of the instance itself.
"""

import sys
from typing import List, Optional


class Record:
    __slots__ = ("record_id", "payload")

    def __init__(self, record_id: Optional[str] = None, payload: Optional[List[float]] = None):
        self.record_id = record_id
        self.payload = payload

    def __repr__(self):
        return f"Record(record_id={self.record_id!r}, payload={self.payload!r})"


def record_size() -> int:
    """Shallow size in bytes of one default Record"""
    return sys.getsizeof(Record())


def allocate_records(amount: int) -> List[Record]:
    """Build `amount` distinct default Records"""
    return [Record() for _ in range(amount)]
