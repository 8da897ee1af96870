# packages/ubfwdata/src/ubfwdata/__init__.py
from __future__ import annotations

from .layout import (
    parse_descriptor,
    auto_layout,
    resolve_layout,
    format_descriptor,
    write_descriptor,
)

__all__ = [
    "parse_descriptor",
    "auto_layout",
    "resolve_layout",
    "format_descriptor",
    "write_descriptor",
]
