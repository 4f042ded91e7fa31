"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def absence_file(tmp_path: Path):
    """Write a JSON absence file and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "absences.json"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
