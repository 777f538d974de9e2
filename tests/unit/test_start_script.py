"""Tests for the startup script."""

import subprocess

import pytest

from scripts import start


def test_start_api_execs_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test uvicorn is launched with the configured host and port."""
    calls: list[tuple[str, list[str]]] = []
    monkeypatch.setattr(start.os, "execvp", lambda file, args: calls.append((file, args)))
    monkeypatch.setenv("PORT", "9100")

    start.start_api()

    file, args = calls[0]
    assert file == "uvicorn"
    assert "api.main:app" in args
    assert args[args.index("--port") + 1] == "9100"


def test_install_browser_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test a failed Chromium install is reported, not raised."""

    def fail(*args, **kwargs):
        raise subprocess.CalledProcessError(1, args[0], stderr="no network")

    monkeypatch.setattr(start.subprocess, "run", fail)
    assert start.install_browser() is False


def test_main_skips_browser_for_html(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the HTML renderer does not trigger a browser install."""
    installs: list[bool] = []
    monkeypatch.setattr(start, "install_browser", lambda: installs.append(True) or True)
    monkeypatch.setattr(start, "start_api", lambda: None)
    monkeypatch.setattr(start.signal, "signal", lambda *args: None)

    start.main()

    assert installs == []
