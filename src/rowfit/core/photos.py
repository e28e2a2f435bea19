"""Gallery adapter: lay out photo records with partial metadata.

Photo collections coming from a data-fetch layer do not always carry both
pixel dimensions.  This module infers a usable ``width``/``height`` pair for
every photo, fills unset layout parameters from :mod:`rowfit.core.config`,
and hands the result to :func:`rowfit.core.layout.compute_layout`.

Inference rules, in order:

1. ``width / height`` when both are present and ``height`` is non-zero
2. the stored ``aspect_ratio`` when it is positive
3. the configured fallback aspect ratio (3:2 by default)

Missing, zero and non-finite (NaN, infinite) metadata values count as absent.
The reference height is the stored height when positive, otherwise the
target row height; the width is derived from the aspect ratio when missing.

:func:`layout_cache_key` is a client-side helper: the HTTP layer is
stateless, so callers holding a photo list compare keys themselves to decide
whether a new layout request is needed after their data changes.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from .config import RowfitConfig, config
from .layout import compute_layout
from .models import LayoutImage, LayoutOptions, LayoutResult, RowHeightTolerance

logger = logging.getLogger(__name__)


def _usable(value: float | None) -> bool:
    """Metadata value that is present, finite and non-zero."""
    return value is not None and math.isfinite(value) and value != 0


@dataclass(frozen=True)
class PhotoMetadata:
    """Optional dimension metadata stored alongside a photo."""

    width: float | None = None
    height: float | None = None
    aspect_ratio: float | None = None


@dataclass(frozen=True)
class Photo:
    """A gallery photo as delivered by the data-fetch layer."""

    id: str
    metadata: PhotoMetadata | None = None


def photo_to_layout_image(
    photo: Photo,
    target_row_height: float,
    fallback_aspect_ratio: float = 1.5,
) -> LayoutImage:
    """Infer layout dimensions for a photo.

    Args:
        photo: Photo with optional metadata.
        target_row_height: Reference height used when none is stored.
        fallback_aspect_ratio: Aspect ratio used when nothing can be inferred.

    Returns:
        LayoutImage carrying the photo's id and inferred dimensions.
    """
    meta = photo.metadata or PhotoMetadata()
    width, height, stored_aspect = meta.width, meta.height, meta.aspect_ratio

    if _usable(width) and _usable(height):
        aspect = width / height
    elif _usable(stored_aspect) and stored_aspect > 0:
        aspect = stored_aspect
    else:
        aspect = fallback_aspect_ratio

    reference_height = height if _usable(height) and height > 0 else target_row_height
    inferred_width = aspect * reference_height

    return LayoutImage(
        id=photo.id,
        width=width if _usable(width) and width > 0 else inferred_width,
        height=reference_height,
    )


def layout_cache_key(photos: Sequence[Photo]) -> str:
    """Stable identity of a photo list for deciding when to re-layout.

    Two lists produce the same key exactly when their ids and dimension
    metadata match in order.
    """
    return json.dumps(
        [
            {
                "id": photo.id,
                "width": photo.metadata.width if photo.metadata else None,
                "height": photo.metadata.height if photo.metadata else None,
                "aspectRatio": photo.metadata.aspect_ratio if photo.metadata else None,
            }
            for photo in photos
        ]
    )


def layout_photos(
    photos: Sequence[Photo],
    container_width: float,
    *,
    gap: float | None = None,
    target_row_height: float | None = None,
    row_height_tolerance: RowHeightTolerance | None = None,
    justify_last_row: bool | None = None,
    max_scale_up: float | None = None,
    settings: RowfitConfig | None = None,
) -> LayoutResult:
    """Lay out gallery photos inside a measured container.

    Any parameter left as ``None`` is taken from ``settings`` (the global
    :data:`~rowfit.core.config.config` by default).  The measured container
    width is floored to whole pixels before layout.

    Args:
        photos: Photos in display order.
        container_width: Measured container width, possibly fractional.
        gap: Horizontal and vertical gap between photos.
        target_row_height: Nominal row height.
        row_height_tolerance: Tolerance band in any accepted shape.
        justify_last_row: Whether to justify the trailing row.
        max_scale_up: Maximum native-height enlargement.
        settings: Configuration supplying the defaults.

    Returns:
        LayoutResult for the photos, or the empty result when the floored
        width is zero or there are no photos.
    """
    settings = settings or config

    if math.isfinite(container_width):
        width = math.floor(container_width)
    else:
        width = 0
    if not width or not photos:
        return LayoutResult.empty()

    gap = settings.gap if gap is None else gap
    target_row_height = (
        settings.target_row_height if target_row_height is None else target_row_height
    )
    if row_height_tolerance is None:
        row_height_tolerance = settings.row_height_tolerance
    if justify_last_row is None:
        justify_last_row = settings.justify_last_row
    max_scale_up = settings.max_scale_up if max_scale_up is None else max_scale_up

    images = [
        photo_to_layout_image(photo, target_row_height, settings.fallback_aspect_ratio)
        for photo in photos
    ]
    logger.debug(f"Laying out {len(images)} photos at width {width}")

    return compute_layout(
        images,
        LayoutOptions(
            container_width=width,
            spacing=gap,
            target_row_height=target_row_height,
            row_height_tolerance=row_height_tolerance,
            justify_last_row=justify_last_row,
            max_scale_up=max_scale_up,
            crop_strategy="center",
            output_spacing_included=False,
            vertical_spacing=gap,
        ),
    )
