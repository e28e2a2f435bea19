"""Core layout functionality for rowfit.

- **layout.py**: the justified row layout engine (``compute_layout``)
- **models.py**: input/output dataclasses and tolerance normalisation
- **photos.py**: gallery adapter inferring photo dimensions and defaults
- **config.py**: environment-based configuration using Pydantic Settings

The engine is a pure function; configuration is only consulted by the
gallery adapter and the HTTP layer.

Usage Example
-------------
    from rowfit.core import LayoutImage, LayoutOptions, compute_layout

    result = compute_layout(
        [LayoutImage("a", 4000, 3000), LayoutImage("b", 2000, 3200)],
        LayoutOptions(
            container_width=1200,
            spacing=16,
            target_row_height=320,
            row_height_tolerance=(0.75, 1.3),
            justify_last_row=True,
        ),
    )
"""

from rowfit.core.config import RowfitConfig, config
from rowfit.core.layout import compute_layout, resolve_row_height_bounds
from rowfit.core.models import (
    LayoutImage,
    LayoutItem,
    LayoutOptions,
    LayoutResult,
    RowSummary,
    ToleranceBand,
    normalize_tolerance,
)

__all__ = [
    "compute_layout",
    "resolve_row_height_bounds",
    "normalize_tolerance",
    "LayoutImage",
    "LayoutItem",
    "LayoutOptions",
    "LayoutResult",
    "RowSummary",
    "ToleranceBand",
    "RowfitConfig",
    "config",
]
