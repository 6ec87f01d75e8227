"""
Session Configuration

Tunable constants of the overlay, with environment overrides.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os
import re

from graphdata.observability import ObservabilityConfig


DEFAULT_MUTED_COLOR = "#f6f6f6"
DEFAULT_REFERENCE_URL = "https://www.opensecrets.org/search?q={query}"

ENV_PREFIX = "GRAPH_OVERLAY_"

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass
class SessionConfig:
    """Unified configuration for an exploration session."""
    muted_color: str = DEFAULT_MUTED_COLOR
    selection_camera_duration_ms: int = 500
    zoom_duration_ms: int = 600
    zoom_ratio: float = 1.5
    min_camera_ratio: float = 0.01
    max_camera_ratio: float = 3.0
    reference_url_template: str = DEFAULT_REFERENCE_URL
    observability: Optional[ObservabilityConfig] = None

    def __post_init__(self):
        self.observability = self.observability or ObservabilityConfig()

        if not _HEX_COLOR.match(self.muted_color):
            raise ValueError(f"muted_color must be a hex color, got {self.muted_color!r}")
        if self.selection_camera_duration_ms < 0 or self.zoom_duration_ms < 0:
            raise ValueError("Animation durations must be non-negative")
        if self.zoom_ratio <= 1.0:
            raise ValueError("zoom_ratio must be greater than 1")
        if not 0 < self.min_camera_ratio <= self.max_camera_ratio:
            raise ValueError("Camera ratio bounds must satisfy 0 < min <= max")
        if "{query}" not in self.reference_url_template:
            raise ValueError("reference_url_template must contain a {query} placeholder")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> SessionConfig:
        """
        Build a config from GRAPH_OVERLAY_* environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if ENV_PREFIX + "MUTED_COLOR" in env:
            kwargs["muted_color"] = env[ENV_PREFIX + "MUTED_COLOR"]
        if ENV_PREFIX + "REFERENCE_URL" in env:
            kwargs["reference_url_template"] = env[ENV_PREFIX + "REFERENCE_URL"]
        for key, field_name in (
            ("SELECTION_DURATION_MS", "selection_camera_duration_ms"),
            ("ZOOM_DURATION_MS", "zoom_duration_ms"),
        ):
            raw = env.get(ENV_PREFIX + key)
            if raw is None:
                continue
            try:
                kwargs[field_name] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX + key} must be an integer, got {raw!r}") from None

        return cls(**kwargs)
