"""Shared test fixtures for the fileenv test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog


@pytest.fixture
def secrets_dir(tmp_path: Path) -> Path:
    """Create a temporary directory standing in for a secrets mount."""
    secrets = tmp_path / "secrets"
    secrets.mkdir()
    return secrets


@pytest.fixture
def secret_file(secrets_dir: Path) -> Callable[..., str]:
    """Factory fixture to create secret files and return their paths.

    Usage:
        def test_something(secret_file):
            path = secret_file("api_key", "abc123\\n")
    """

    def _create(name: str, content: str | bytes) -> str:
        path = secrets_dir / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            # newline="" keeps "\r\n" and "\r" as written
            with path.open("w", encoding="utf-8", newline="") as f:
                f.write(content)
        return str(path)

    return _create


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults around each test.

    Keeps debug events visible to structlog.testing.capture_logs.
    """
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
