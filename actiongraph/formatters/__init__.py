"""Formatting utilities for action graph output."""

from .time_formatter import format_time, format_duration, format_seconds, format_percent
from .text_formatter import render_rows, TREE_TEMPLATE, TOP_TEMPLATE, TYPES_TEMPLATE
from .dot_formatter import render_dot

__all__ = [
    "format_time",
    "format_duration",
    "format_seconds",
    "format_percent",
    "render_rows",
    "render_dot",
    "TREE_TEMPLATE",
    "TOP_TEMPLATE",
    "TYPES_TEMPLATE",
]
