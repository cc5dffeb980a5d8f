"""Configuration package."""

from xtemp.infrastructure.config.loader import ConfigLoader, BatchConfig

__all__ = ["ConfigLoader", "BatchConfig"]
