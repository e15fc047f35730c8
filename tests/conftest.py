"""Pytest configuration and shared fixtures for meetroom tests."""

import pytest

import meetroom.io.logging_setup


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep settings and log files out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("MEETROOM_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("MEETROOM_LOG_FILE", raising=False)
    monkeypatch.delenv("MEETROOM_LOG_LEVEL", raising=False)
    yield tmp_path
    meetroom.io.logging_setup.reset()


@pytest.fixture
def fake_clock():
    """Manually advanced monotonic clock."""
    from tests.harness.builders import FakeClock

    return FakeClock()
