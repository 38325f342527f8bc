"""Configuration tools."""

from .config_loader import (
    ConfigLoader,
    get_config,
    load_clustering_config,
    scale_radius,
)

__all__ = [
    "ConfigLoader",
    "get_config",
    "load_clustering_config",
    "scale_radius",
]
