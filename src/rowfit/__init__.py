"""rowfit - Justified gallery layout engine."""

__version__ = "0.1.0"

from rowfit.core.config import RowfitConfig, config
from rowfit.core.layout import compute_layout
from rowfit.core.models import (
    CropRect,
    LayoutImage,
    LayoutItem,
    LayoutOptions,
    LayoutResult,
    RowSummary,
    ToleranceBand,
)
from rowfit.core.photos import Photo, PhotoMetadata, layout_photos

__all__ = [
    "compute_layout",
    "layout_photos",
    "CropRect",
    "LayoutImage",
    "LayoutItem",
    "LayoutOptions",
    "LayoutResult",
    "Photo",
    "PhotoMetadata",
    "RowSummary",
    "RowfitConfig",
    "ToleranceBand",
    "config",
]
