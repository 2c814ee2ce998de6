"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
from docnav.config import Config, LiveReloadConfig, NavigationConfig


@pytest.fixture
def sample_sidebar() -> dict[str, object]:
    """Guide group with two documents followed by a top-level API page."""
    return {
        "sidebar": [
            {
                "label": "Guide",
                "children": [
                    {"label": "Intro", "document": "intro"},
                    {"label": "Setup", "document": "setup"},
                ],
            },
            {"label": "API", "document": "api"},
        ],
    }


@pytest.fixture
def nav_file(tmp_path: Path, sample_sidebar: dict[str, object]) -> Path:
    """Write the sample sidebar to docs/config.json."""
    docs = tmp_path / "docs"
    docs.mkdir(exist_ok=True)
    path = docs / "config.json"
    path.write_text(json.dumps(sample_sidebar))
    return path


@pytest.fixture
def test_config(nav_file: Path) -> Config:
    """Create a test configuration pointing at the sample navigation file.

    Live reload is disabled so tests don't start a file watcher.
    """
    return Config(
        navigation=NavigationConfig(config_file=nav_file),
        live_reload=LiveReloadConfig(enabled=False),
    )
