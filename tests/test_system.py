import os

import pytest

from radiance import system
from radiance.system import LinuxSystem, WindowsSystem, get_singleton


def test_linux_memory_usage_reads_vmrss(tmp_path):
    status = tmp_path / "status"
    status.write_text("Name:\tpython\nVmPeak:\t  999 kB\nVmRSS:\t  1234 kB\n", encoding="utf-8")
    assert LinuxSystem(str(status)).get_program_memory_usage() == "1234 kB"


def test_linux_memory_usage_missing_entry(tmp_path):
    status = tmp_path / "status"
    status.write_text("Name:\tpython\n", encoding="utf-8")
    assert LinuxSystem(str(status)).get_program_memory_usage() == "Failed to get memory usage."


def test_linux_memory_usage_unreadable(tmp_path):
    missing = tmp_path / "absent"
    assert LinuxSystem(str(missing)).get_program_memory_usage() == "Failed to get memory usage."


def test_windows_memory_usage_format():
    amount, unit = WindowsSystem().get_program_memory_usage().split(" ")
    assert unit == "KB"
    assert int(amount) > 0


def test_time_advances_over_sleep():
    services = LinuxSystem()
    start = services.get_time()
    services.sleep(0.02)
    assert services.get_time() - start >= 0.015


def test_negative_sleep_returns():
    services = LinuxSystem()
    start = services.get_time()
    services.sleep(-1.0)
    assert services.get_time() - start < 0.5


def test_exe_directory_is_parent_of_exe_path():
    services = LinuxSystem()
    path = services.get_exe_path()
    assert os.path.isabs(path)
    assert services.get_exe_directory() == os.path.dirname(path)


def test_singleton_is_shared(monkeypatch):
    monkeypatch.setattr(system.sys, "platform", "linux")
    monkeypatch.setattr(system, "_singleton", None)
    first = get_singleton()
    assert first is get_singleton()
    assert isinstance(first, LinuxSystem)


def test_singleton_windows(monkeypatch):
    monkeypatch.setattr(system.sys, "platform", "win32")
    monkeypatch.setattr(system, "_singleton", None)
    services = get_singleton()
    assert isinstance(services, WindowsSystem)
    assert services is get_singleton()
    amount, unit = services.get_program_memory_usage().split(" ")
    assert unit == "KB"
    assert int(amount) > 0


def test_singleton_unsupported_platform(monkeypatch):
    monkeypatch.setattr(system.sys, "platform", "sunos5")
    monkeypatch.setattr(system, "_singleton", None)
    with pytest.raises(OSError):
        get_singleton()