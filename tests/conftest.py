"""Shared pytest fixtures for fieldmask tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest

from fieldmask.config.settings import FieldMaskSettings
from fieldmask.services.projection import ProjectionService


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop any FIELDMASK_* variables inherited from the host."""
    for name in list(os.environ):
        if name.startswith("FIELDMASK_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Generator[None]:
    """Undo handler/level changes made by configure_logging."""
    pkg = logging.getLogger("fieldmask")
    handlers, level, propagate = pkg.handlers[:], pkg.level, pkg.propagate
    yield
    pkg.handlers = handlers
    pkg.setLevel(level)
    pkg.propagate = propagate


@pytest.fixture
def settings(tmp_path: Path) -> FieldMaskSettings:
    """Settings rooted in an empty temp directory (code defaults only)."""
    return FieldMaskSettings.load(config_path=tmp_path / "missing.toml", root=tmp_path)


@pytest.fixture
def service(settings: FieldMaskSettings) -> ProjectionService:
    return ProjectionService(settings)
