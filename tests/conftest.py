"""Pytest configuration and shared fixtures for cityhash_tools tests."""

import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from cityhash_tools.core.config import AppConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def app_config() -> AppConfig:
    """Application config with default settings."""
    return AppConfig()


@pytest.fixture
def plain_console() -> Console:
    """Console without colors or terminal control codes."""
    return Console(no_color=True, width=200)


@pytest.fixture
def cli_obj(app_config: AppConfig, plain_console: Console) -> dict[str, Any]:
    """Click context object as built by the main group."""
    return {
        "config": app_config,
        "console": plain_console,
        "verbose": False,
        "debug": False,
    }


@pytest.fixture
def sample_file(temp_dir: Path) -> Path:
    """File whose content hashes to a known digest (0xa339c810)."""
    path = temp_dir / "fox.txt"
    path.write_bytes(b"The quick brown fox jumps over the lazy dog")
    return path

