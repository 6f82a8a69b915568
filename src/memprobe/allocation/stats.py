"""
Process memory statistics for the allocation endpoint.

Python has no single runtime counter block, so a snapshot is assembled from:
- tracemalloc: bytes held by live Python objects (current) and the peak since
  tracing started, standing in for allocated and total-allocated bytes
- psutil: resident and virtual size of the process
- threading: number of threads times the per-thread stack reservation
- gc: collections run across all generations
"""

import gc
import threading
import tracemalloc

import psutil
from pydantic import BaseModel

from .config import DEFAULT_THREAD_STACK_BYTES, TRACEMALLOC_FRAMES, logger


class MemoryStats(BaseModel):
    alloc_bytes: int = 0
    heap_alloc_bytes: int = 0
    total_alloc_bytes: int = 0
    stack_sys_bytes: int = 0
    heap_sys_bytes: int = 0
    sys_bytes: int = 0
    num_gc: int = 0


def b_to_mb(b: int) -> int:
    return b // 1024 // 1024


def start_tracing(frames: int = TRACEMALLOC_FRAMES) -> bool:
    """Start tracemalloc unless already tracing. Returns True if this call started it."""
    if tracemalloc.is_tracing():
        return False
    tracemalloc.start(frames)
    logger.info(f"tracemalloc started ({frames} frame(s))")
    return True


def stop_tracing():
    if tracemalloc.is_tracing():
        tracemalloc.stop()
        logger.info("tracemalloc stopped")


def gc_collection_count() -> int:
    return sum(generation["collections"] for generation in gc.get_stats())


def read_memory_stats() -> MemoryStats:
    """Take a fresh snapshot of the process memory counters"""
    if tracemalloc.is_tracing():
        current, peak = tracemalloc.get_traced_memory()
    else:
        current, peak = 0, 0

    rss, vms, num_threads = 0, 0, threading.active_count()
    try:
        process = psutil.Process()
        with process.oneshot():
            memory_info = process.memory_info()
            num_threads = process.num_threads()
        rss, vms = memory_info.rss, memory_info.vms
    except psutil.Error as e:
        logger.error(f"Error reading process memory info: {e}")

    stack_size = threading.stack_size() or DEFAULT_THREAD_STACK_BYTES

    return MemoryStats(
        alloc_bytes=current,
        heap_alloc_bytes=current,
        total_alloc_bytes=peak,
        stack_sys_bytes=num_threads * stack_size,
        heap_sys_bytes=rss,
        sys_bytes=vms,
        num_gc=gc_collection_count(),
    )


def format_stats(stats: MemoryStats) -> str:
    """Render a snapshot as a single tab-separated line, sizes in whole MiB"""
    return (
        f"Alloc = {b_to_mb(stats.alloc_bytes)} MiB"
        f"\tHeapAlloc = {b_to_mb(stats.heap_alloc_bytes)} MiB"
        f"\tTotalAlloc = {b_to_mb(stats.total_alloc_bytes)} MiB"
        f"\tStackSys = {b_to_mb(stats.stack_sys_bytes)} MiB"
        f"\tHeapSys = {b_to_mb(stats.heap_sys_bytes)} MiB"
        f"\tSys = {b_to_mb(stats.sys_bytes)} MiB"
        f"\tNumGC = {stats.num_gc}"
    )
