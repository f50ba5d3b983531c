"""Configuration and tabular I/O helpers."""

from .config_loader import ConfigLoader, get_config
from .frames import clusters_to_dataframe, markers_from_dataframe

__all__ = [
    "ConfigLoader",
    "get_config",
    "clusters_to_dataframe",
    "markers_from_dataframe",
]
