"""
Allocation reporter: turns a requested count into a batch of Records, reports
the batch's byte footprint and logs memory statistics afterwards.
"""

import gc
import re
import threading
from typing import List, Optional

from pydantic import BaseModel

from .config import FORCE_GC, logger
from .records import Record, allocate_records, record_size
from .stats import MemoryStats, format_stats, read_memory_stats

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_COUNT_PATTERN = re.compile(r"[+-]?[0-9]+")


class InvalidCountError(ValueError):
    """Raised for counts that parse but cannot be allocated (negative)"""


class AllocationResult(BaseModel):
    amount: int
    allocated_bytes: int = 0
    body: Optional[str] = None
    stats: Optional[MemoryStats] = None


def parse_count(count: str) -> int:
    """
    Parse a base-10 32-bit signed integer.

    Anything that is not an optionally signed run of ASCII digits, or that falls
    outside the 32-bit range, parses as 0.
    """
    if count is None or not _COUNT_PATTERN.fullmatch(count):
        return 0
    amount = int(count)
    if amount < INT32_MIN or amount > INT32_MAX:
        return 0
    return amount


class AllocationReporter:
    def __init__(self, force_gc: bool = FORCE_GC):
        self.force_gc = force_gc
        self.records: List[Record] = []
        self._lock = threading.Lock()

    def _collect(self):
        if self.force_gc:
            gc.collect()

    def handle(self, count: str) -> AllocationResult:
        """
        Allocate `count` Records in place of the previous batch.

        Zero or unparseable counts return a result without a body. Negative
        counts raise InvalidCountError.
        """
        logger.info("called createEntities")
        with self._lock:
            # Release the previous batch for a clean baseline
            self.records = []
            self._collect()

            logger.info("Creating data")
            amount = parse_count(count)
            if amount == 0:
                logger.warning(f"amount was 0 (count={count!r})")
                return AllocationResult(amount=0)
            if amount < 0:
                raise InvalidCountError(f"count must not be negative: {amount}")

            self.records = allocate_records(amount)
            logger.info("Created data")

            allocated_bytes = record_size() * amount
            body = f"allocated: {allocated_bytes} bytes"

            self._collect()
            stats = read_memory_stats()
            print(format_stats(stats))

        return AllocationResult(
            amount=amount, allocated_bytes=allocated_bytes, body=body, stats=stats
        )
