"""Operating-system services: time, sleeping, memory usage and program location."""

from __future__ import annotations

import os
import sys
import threading
import time
from abc import ABC, abstractmethod

import psutil

from radiance.utils import get_directory

_MEMORY_FAILURE = "Failed to get memory usage."


class System(ABC):
    """Platform services that the standard library does not cover uniformly."""

    @abstractmethod
    def get_program_memory_usage(self) -> str:
        """Return the resident memory of this process as ``"<amount> <unit>"``."""

    def get_time(self) -> float:
        """Return the current time in seconds."""
        return time.time()

    def sleep(self, seconds: float) -> None:
        """Sleep for ``seconds`` seconds; non-positive values return at once."""
        if seconds > 0:
            time.sleep(seconds)

    def get_exe_path(self) -> str:
        """Return the absolute path of the running program."""
        if sys.argv and sys.argv[0]:
            return os.path.realpath(sys.argv[0])
        if sys.executable:
            return sys.executable
        raise OSError("Failed to get the executable path.")

    def get_exe_directory(self) -> str:
        """Return the directory containing the running program."""
        return get_directory(self.get_exe_path())


class LinuxSystem(System):
    """Linux services, reading process status from procfs."""

    def __init__(self, status_path: str = "/proc/self/status") -> None:
        self._status_path = status_path

    def get_program_memory_usage(self) -> str:
        try:
            with open(self._status_path, encoding="utf-8") as status:
                for line in status:
                    if "VmRSS" in line:
                        fields = line.split()
                        if len(fields) >= 3:
                            return f"{fields[1]} {fields[2]}"
                        break
        except OSError:
            pass
        return _MEMORY_FAILURE


class WindowsSystem(System):
    """Windows services."""

    def get_time(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        milliseconds = int(seconds * 1000.0)
        if milliseconds > 0:
            time.sleep(milliseconds / 1000.0)

    def get_program_memory_usage(self) -> str:
        rss = psutil.Process().memory_info().rss
        return f"{rss // 1024} KB"


_singleton: System | None = None
_singleton_lock = threading.Lock()


def _create_system() -> System:
    if sys.platform.startswith("linux"):
        return LinuxSystem()
    if sys.platform.startswith("win"):
        return WindowsSystem()
    raise OSError(f"The operating system is not supported: {sys.platform}")


def get_singleton() -> System:
    """Return the process-wide ``System`` for the current platform."""
    global _singleton
    if _singleton is None:
        with _singleton_lock:
            if _singleton is None:
                _singleton = _create_system()
    return _singleton