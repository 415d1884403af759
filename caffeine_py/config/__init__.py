"""Configuration management."""

from .local_config import ContestConfig

__all__ = ["ContestConfig"]
