"""Shared pytest fixtures for practempo tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from practempo.core.categories import build_default_registry
from practempo.core.config.models import ScheduleConfig
from practempo.core.features.registry import FeatureRegistry

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def registry() -> FeatureRegistry:
    """Frozen registry with the built-in categories."""
    return build_default_registry()


@pytest.fixture
def schedule_config() -> ScheduleConfig:
    """Default schedule settings (3 hour ceiling, Guitar category)."""
    return ScheduleConfig()


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def sample_text() -> str:
    """A schedule in the text DSL with nested groups and settings."""
    return "\n".join(
        [
            "5:00, Warmup, Notes",
            "# Section 1",
            "## Scales",
            "3:00, C Major Scale, Scale, Major, C",
            "3:00, G Major Scale, Scale, Major, G, @BPM:80",
            "## Chords",
            "2:00, Chord Changes, Chord, C_MAJOR, G_MAJOR, A_MINOR, F_MAJOR, @BPM:60",
            "# Section 2",
            "4:00, Progression, Chord Progression, C, I, V, vi, IV",
            "1:00, , Metronome, @BPM:100",
        ]
    )


@pytest.fixture
def sample_json_data() -> dict:
    """A JSON document as a Python dict."""
    return {
        "name": "Morning Practice",
        "items": [
            {
                "rowType": "interval",
                "duration": "5:00",
                "task": "Warmup",
                "categoryName": "Guitar",
                "featureTypeName": "Notes",
                "featureArgsList": [],
            },
            {"rowType": "group", "level": 1, "name": "Scale Practice"},
            {
                "rowType": "interval",
                "duration": "3:00",
                "task": "C Major Scale",
                "categoryName": "Guitar",
                "featureTypeName": "Scale",
                "featureArgsList": ["Major", "C"],
                "intervalSettings": {"metronomeBpm": 90},
            },
        ],
    }


@pytest.fixture
def sample_json(sample_json_data: dict) -> str:
    """``sample_json_data`` serialized."""
    return json.dumps(sample_json_data, indent=2)
