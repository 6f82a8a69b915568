"""
Configuration settings for the memprobe allocation service.

Every setting is read from the environment by `get_settings()`; the module
constants below are the snapshot taken at import time.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # Force a collection pass before and after each allocation
    force_gc: bool = True
    # Answer zero/unparseable counts with 400 instead of an empty 200
    strict_count: bool = False
    # tracemalloc frames kept per allocation
    tracemalloc_frames: int = 1
    # Used when threading.stack_size() reports the platform default (0)
    default_thread_stack_bytes: int = 8 * 1024 * 1024


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() == "true"


def get_settings(overrides: Optional[dict] = None) -> Settings:
    """Build a settings snapshot from the environment, applying any overrides"""
    defaults = Settings()
    settings = Settings(
        host=os.getenv("HOST", defaults.host),
        port=int(os.getenv("PORT", defaults.port)),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        force_gc=_env_bool("FORCE_GC", defaults.force_gc),
        strict_count=_env_bool("STRICT_COUNT", defaults.strict_count),
        tracemalloc_frames=int(os.getenv("TRACEMALLOC_FRAMES", defaults.tracemalloc_frames)),
        default_thread_stack_bytes=int(
            os.getenv("DEFAULT_THREAD_STACK_BYTES", defaults.default_thread_stack_bytes)
        ),
    )
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


SETTINGS = get_settings()

LOG_LEVEL = SETTINGS.log_level
FORCE_GC = SETTINGS.force_gc
TRACEMALLOC_FRAMES = SETTINGS.tracemalloc_frames
DEFAULT_THREAD_STACK_BYTES = SETTINGS.default_thread_stack_bytes

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("memprobe")
