"""
Configuration for the fraud check pipeline.
"""

from .config_loader import ConfigLoader, load_config

__all__ = ["ConfigLoader", "load_config"]
