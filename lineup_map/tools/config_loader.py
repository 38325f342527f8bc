"""
Configuration loader for map profiles and environment variables.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional
import yaml

from ..spatial.clustering import ClusteringConfig


# Zoom bounds of the map canvas.
MIN_ZOOM = 0.5
MAX_ZOOM = 5.0


class ConfigLoader:
    """Load and manage configuration from YAML files and environment."""

    CONFIG_DIR = Path(__file__).parent.parent / "configs"
    DEFAULT_PROFILE = "default"

    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load a map profile configuration.

        Args:
            profile_name: Name of the profile (default, dense, connected)

        Returns:
            Dictionary with configuration values

        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"

        if not profile_path.exists():
            available = sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. Available profiles: {', '.join(available)}"
            )

        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from LINEUP_MAP_PROFILE environment variable."""
        return os.getenv("LINEUP_MAP_PROFILE")

    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        profile = cls.get_profile_from_env() or cls.DEFAULT_PROFILE
        return cls.load_profile(profile)


def get_config() -> Dict[str, Any]:
    """Convenience function to get current configuration."""
    return ConfigLoader.load_default_or_env_profile()


def load_clustering_config(profile: Optional[str] = None) -> ClusteringConfig:
    """
    Build a :class:`ClusteringConfig` from a profile's ``clustering`` section.

    The ``LINEUP_CLUSTER_RADIUS`` environment variable overrides the radius.

    Raises:
        FileNotFoundError: If the profile doesn't exist
        ValueError: If the resulting configuration is invalid
    """
    if profile is None:
        data = ConfigLoader.load_default_or_env_profile()
    else:
        data = ConfigLoader.load_profile(profile)

    section = dict(data.get("clustering") or {})

    radius_override = os.getenv("LINEUP_CLUSTER_RADIUS")
    if radius_override:
        try:
            section["radius"] = float(radius_override)
        except ValueError as exc:
            raise ValueError(
                f"LINEUP_CLUSTER_RADIUS must be a number, got '{radius_override}'"
            ) from exc

    config = ClusteringConfig(
        radius=section.get("radius", ClusteringConfig.radius),
        linkage=section.get("linkage", ClusteringConfig.linkage),
        index=section.get("index", ClusteringConfig.index),
    )
    config.validate()
    return config


def scale_radius(radius_px: float, zoom: float) -> float:
    """
    Convert a screen-pixel radius into map units at the given zoom.

    Zoom is clamped to the canvas bounds, so markers keep a constant on-screen
    grouping distance as the user zooms in.
    """
    zoom = max(MIN_ZOOM, min(MAX_ZOOM, zoom))
    return radius_px / zoom
