"""Guitar-specific settings: per-interval metronome and category defaults."""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import Field

from practempo.core.features.settings import IntervalSettings

logger = logging.getLogger(__name__)

DEFAULT_METRONOME_BPM = 0  # metronome off

# Text DSL token, e.g. "@BPM:120"
BPM_LITERAL_RE = re.compile(r"^@BPM:(\d+)$")

DEFAULT_GUITAR_SETTINGS: dict[str, Any] = {
    "handedness": "right",
    "tuning": "Standard",
    "colorScheme": "interval",
}


class GuitarIntervalSettings(IntervalSettings):
    """Settings of one guitar interval.

    Attributes:
        metronome_bpm: Metronome tempo; 0 disables the metronome.
            Serialized as ``metronomeBpm``.

    Example:
        >>> GuitarIntervalSettings(metronome_bpm=120).to_json()
        {'metronomeBpm': 120}
        >>> GuitarIntervalSettings().to_json() is None
        True
    """

    metronome_bpm: int = Field(default=DEFAULT_METRONOME_BPM, ge=0, alias="metronomeBpm")

    def to_literal(self) -> str:
        if self.metronome_bpm == DEFAULT_METRONOME_BPM:
            return ""
        return f"@BPM:{self.metronome_bpm}"

    @classmethod
    def from_literal(cls, token: str) -> GuitarIntervalSettings | None:
        """Parse a ``@BPM:<int>`` token; None when the token does not match."""
        match = BPM_LITERAL_RE.match(token.strip())
        if not match:
            return None
        return cls(metronome_bpm=int(match.group(1)))
