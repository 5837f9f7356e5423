"""Shared pytest fixtures for the next-starter test suite.

Provides reusable fixtures for:
- Configs for each toggle combination, rooted in a temp directory
- A mocked ``npm`` executable and child process
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from next_starter.config import StarterConfig


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., StarterConfig]:
    """Factory for ``StarterConfig`` instances that write under ``tmp_path``.

    Usage:
        def test_something(make_config):
            config = make_config(with_firebase=True)
    """
    def factory(name: str = "demo", **toggles: Any) -> StarterConfig:
        return StarterConfig(name=name, output_dir=tmp_path, **toggles)

    return factory


@pytest.fixture
def plain_config(make_config) -> StarterConfig:
    """No optional features enabled."""
    return make_config()


@pytest.fixture
def full_config(make_config) -> StarterConfig:
    """Every optional feature enabled."""
    return make_config(for_netlify=True, with_firebase=True, with_font_awesome=True)


# ---------------------------------------------------------------------------
# Mock npm
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess() -> Callable[..., AsyncMock]:
    """Factory for mock asyncio child processes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="added 3 packages", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def fake_npm(mock_subprocess):
    """Pretend ``npm`` is on PATH and succeeds.

    Yields the ``create_subprocess_exec`` mock so tests can inspect the
    command line and working directory.
    """
    proc = mock_subprocess(stdout="added 3 packages", returncode=0)
    with patch("next_starter.installer.shutil.which", return_value="/usr/bin/npm"), patch(
        "asyncio.create_subprocess_exec", AsyncMock(return_value=proc)
    ) as create_exec:
        yield create_exec


@pytest.fixture
def failing_npm(mock_subprocess):
    """Pretend ``npm`` is on PATH but exits with an error."""
    proc = mock_subprocess(stderr="npm ERR! code E404\nnpm ERR! 404 Not Found", returncode=1)
    with patch("next_starter.installer.shutil.which", return_value="/usr/bin/npm"), patch(
        "asyncio.create_subprocess_exec", AsyncMock(return_value=proc)
    ) as create_exec:
        yield create_exec


@pytest.fixture
def missing_npm():
    """Pretend ``npm`` is not installed."""
    with patch("next_starter.installer.shutil.which", return_value=None) as which:
        yield which
