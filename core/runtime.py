# =============================================================================
# core/runtime.py - Process Information
# =============================================================================
# Uptime and memory figures reported by /health and /api/stats.
# =============================================================================

import os
import platform
import resource
import sys
import time

from core.models.stats import MemoryUsage, ServerInfo

# Captured when the module is first imported, i.e. at process start-up
_STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    """Seconds elapsed since the process started."""
    return time.monotonic() - _STARTED_AT


def _current_rss() -> int | None:
    # Linux only; other platforms report peak usage alone
    try:
        with open("/proc/self/statm", encoding="ascii") as handle:
            resident_pages = int(handle.read().split()[1])
    except (OSError, ValueError, IndexError):
        return None
    return resident_pages * os.sysconf("SC_PAGE_SIZE")


def memory_usage() -> MemoryUsage:
    """
    Current and peak resident memory of this process, in bytes.

    ru_maxrss is reported in kilobytes on Linux and in bytes on macOS.
    """
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    if sys.platform != "darwin":
        max_rss *= 1024
    return MemoryUsage(rss=_current_rss(), max_rss=max_rss)


def server_info() -> ServerInfo:
    """Snapshot of uptime, memory and interpreter version."""
    return ServerInfo(
        uptime=uptime_seconds(),
        memory=memory_usage(),
        python_version=platform.python_version(),
    )
