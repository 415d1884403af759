"""Utility functions."""

from .terminal import (
    choose_index,
    choose_option,
    format_verdict_color,
    create_table,
)

__all__ = [
    "choose_index",
    "choose_option",
    "format_verdict_color",
    "create_table",
]
