"""Profiling support for metaudit using cProfile.

When the METAUDIT_PROFILE environment variable names a directory, the decorated entry
point runs under cProfile and its statistics are written there as
main_{timestamp_ms}_{pid}.prof.
"""
import cProfile
import functools
import os
import time
from pathlib import Path
from typing import Callable, TypeVar, ParamSpec

P = ParamSpec('P')
T = TypeVar('T')

PROFILE_ENVIRONMENT_VARIABLE = 'METAUDIT_PROFILE'


def get_profile_dir() -> Path | None:
    """Directory named by METAUDIT_PROFILE, or None when profiling is off."""
    profile_path = os.environ.get(PROFILE_ENVIRONMENT_VARIABLE)
    if profile_path:
        return Path(profile_path)
    return None


def generate_profile_filename(prefix: str = "main") -> str:
    """Filename like "main_1730332456789_54321.prof"."""
    timestamp_ms = int(time.time() * 1000)
    return f"{prefix}_{timestamp_ms}_{os.getpid()}.prof"


def profile_main(func: Callable[P, T]) -> Callable[P, T]:
    """Profile the entry point if METAUDIT_PROFILE is set; otherwise call it directly."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        profile_dir = get_profile_dir()
        if profile_dir is None:
            return func(*args, **kwargs)

        profile_dir.mkdir(parents=True, exist_ok=True)
        profile_file = profile_dir / generate_profile_filename()

        profiler = cProfile.Profile()
        try:
            profiler.enable()
            return func(*args, **kwargs)
        finally:
            profiler.disable()
            profiler.dump_stats(str(profile_file))

    return wrapper
