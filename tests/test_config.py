"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from kernel_monitor.config import Settings, host_page_size


def test_page_size_defaults_to_host(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("KMON_PAGE_SIZE", raising=False)
    assert Settings().page_size == host_page_size()
    assert host_page_size() > 0


def test_page_size_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KMON_PAGE_SIZE", "16384")
    assert Settings().page_size == 16384


@pytest.mark.parametrize("raw", ["abc", "0", "-4096"])
def test_invalid_page_size_falls_back(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("KMON_PAGE_SIZE", raw)
    assert Settings().page_size == host_page_size()


def test_cpu_index(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KMON_CPU_INDEX", "2")
    assert Settings().cpu_index == 2
    monkeypatch.setenv("KMON_CPU_INDEX", "-1")
    assert Settings().cpu_index == 0


def test_socket_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KMON_SOCKET_PATH", "/run/km.sock")
    monkeypatch.setenv("KMON_SOCKET_MODE", "600")
    settings = Settings()
    assert settings.socket_path == "/run/km.sock"
    assert settings.socket_mode == 0o600


def test_socket_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("KMON_SOCKET_PATH", raising=False)
    monkeypatch.setenv("XDG_RUNTIME_DIR", "/run/user/1000")
    monkeypatch.setenv("KMON_SOCKET_MODE", "not-octal")
    settings = Settings()
    assert settings.socket_path == "/run/user/1000/kernel_monitor.sock"
    assert settings.socket_mode == 0o666
