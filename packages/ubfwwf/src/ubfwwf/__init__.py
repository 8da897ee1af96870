# packages/ubfwwf/src/ubfwwf/__init__.py
from __future__ import annotations

from .api import atomic_write, safe_prefix
from .ops import (
    SplitCfg, BuildCfg, ListCfg, VerifyCfg,
    split_image, build_image, list_image, verify_image,
)

__all__ = [
    "atomic_write",
    "safe_prefix",
    "SplitCfg", "BuildCfg", "ListCfg", "VerifyCfg",
    "split_image", "build_image", "list_image", "verify_image",
    # on n’importe PAS le sous-module cli ici (rich n'est utile qu'au wizard)
]

__version__ = "0.4.0"
