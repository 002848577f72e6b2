"""Shared pytest fixtures for the archigen test suite.

Provides reusable fixtures for:
- Temporary output directories
- Raw and validated project configurations
- A progress-event recorder used in place of the console reporter
- Throwaway template directories for renderer and pipeline tests
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from archigen.config import ProjectConfig
from archigen.scaffolder import StepEvent


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory that generated projects are written into."""
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def template_dir(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory that writes ``{relative_path: source}`` into a template root."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "templates"
        for rel, source in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(source, encoding="utf-8")
        root.mkdir(exist_ok=True)
        return root

    return _make


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def config_data(output_dir: Path) -> dict[str, Any]:
    """Raw configuration values for a project named ``shopapi``."""
    return {
        "project_name": "shopapi",
        "module_path": "github.com/acme/shopapi",
        "output_path": output_dir,
    }


@pytest.fixture
def project_config(config_data: dict[str, Any]) -> ProjectConfig:
    """Validated default configuration (no Redis, Docker and user module on)."""
    return ProjectConfig(**config_data)


# ---------------------------------------------------------------------------
# Progress events
# ---------------------------------------------------------------------------


class EventRecorder:
    """Callable progress sink that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[StepEvent] = []

    def __call__(self, event: StepEvent) -> None:
        self.events.append(event)

    @property
    def labels(self) -> list[str]:
        return [event.label for event in self.events]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()
