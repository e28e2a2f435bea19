"""Justified gallery layout engine.

Given an ordered list of images and a container width, the engine partitions
the images into rows and solves one height per row so that the row's rendered
width (images plus inter-item spacing) fills the container.  Row heights are
kept inside a tolerance band around the target row height and below a per-row
scale cap derived from ``max_scale_up``.

Algorithm
---------
A single left-to-right scan grows a window ``[row_start, row_end)`` over the
valid images.  After each extension the window's ideal height is solved:

- If the ideal height dropped below the allowed minimum and the window holds
  more than one image, the newest image overcrowded the row.  The window is
  closed one element earlier, flushed as a justified row, and restarted at
  the overflow image.
- If the ideal height lies inside the allowed band, the window is flushed as
  a justified row.
- Otherwise the window keeps growing.

Whatever remains at the end becomes the last row, justified only when
``justify_last_row`` is set.  Each image moves back at most once, so the scan
is amortised O(n).

The engine is a pure function.  It keeps no state between calls and never
raises for degenerate input; those map to :meth:`LayoutResult.empty` or to
clamped fallback heights instead.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import NamedTuple

from .models import (
    LayoutImage,
    LayoutItem,
    LayoutOptions,
    LayoutResult,
    RowHeightTolerance,
    RowSummary,
    normalize_tolerance,
)

logger = logging.getLogger(__name__)

EPSILON = 1e-3


class _RowEntry(NamedTuple):
    image: LayoutImage
    aspect_ratio: float


class _RowMetrics(NamedTuple):
    aspect_sum: float
    total_spacing: float
    available_width: float
    ideal_height: float
    max_allowed: float
    effective_min: float

    def fits(self) -> bool:
        """Whether the ideal height lies inside the allowed band."""
        return (
            self.effective_min - EPSILON <= self.ideal_height <= self.max_allowed + EPSILON
        )


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``.

    A non-finite ``value`` collapses to ``lower``; a non-finite ``upper``
    only enforces the lower bound.
    """
    if not math.isfinite(value):
        return lower
    if not math.isfinite(upper):
        return max(value, lower)
    return min(max(value, lower), upper)


def resolve_row_height_bounds(
    target_row_height: float, tolerance: RowHeightTolerance
) -> tuple[float, float]:
    """Turn a target height and tolerance into ``(min_height, max_height)``.

    Both bounds are floored at 1 pixel and ``max_height`` never falls below
    ``min_height``.
    """
    min_ratio, max_ratio = normalize_tolerance(tolerance)
    min_height = max(target_row_height * min_ratio, 1.0)
    max_height = max(target_row_height * max_ratio, min_height)
    return min_height, max_height


def max_scale_cap(entries: Sequence[_RowEntry], scale_multiplier: float) -> float:
    """Lowest height any entry may be enlarged to, or infinity for no cap."""
    cap = math.inf
    for entry in entries:
        allowed = entry.image.height * scale_multiplier
        if math.isfinite(allowed) and allowed > 0:
            cap = min(cap, allowed)
    return cap


class _LayoutPass:
    """Mutable accumulator for one ``compute_layout`` call.

    A fresh instance is created per call, so nothing is shared between
    invocations.
    """

    def __init__(self, options: LayoutOptions, min_height: float, max_height: float):
        self.options = options
        self.min_height = min_height
        self.max_height = max_height
        self.scale_multiplier = max(options.max_scale_up, 1.0)
        self.items: list[LayoutItem] = []
        self.rows: list[RowSummary] = []
        self.y_offset = 0.0

    def measure(self, entries: Sequence[_RowEntry]) -> _RowMetrics:
        opts = self.options
        aspect_sum = sum(entry.aspect_ratio for entry in entries)
        total_spacing = opts.spacing * max(len(entries) - 1, 0)
        available_width = max(opts.container_width - total_spacing, 0.0)
        if aspect_sum > 0 and available_width > 0:
            ideal_height = available_width / aspect_sum
        else:
            ideal_height = opts.target_row_height

        cap = max_scale_cap(entries, self.scale_multiplier)
        max_allowed = min(self.max_height, cap) if math.isfinite(cap) else self.max_height
        effective_min = min(self.min_height, max_allowed)

        return _RowMetrics(
            aspect_sum=aspect_sum,
            total_spacing=total_spacing,
            available_width=available_width,
            ideal_height=ideal_height,
            max_allowed=max_allowed,
            effective_min=effective_min,
        )

    def _solve_height(self, metrics: _RowMetrics, try_justify: bool) -> tuple[float, bool]:
        """Pick the row height and report whether the row is justified."""
        target = self.options.target_row_height
        ideal = metrics.ideal_height
        max_allowed = metrics.max_allowed

        can_justify = (
            try_justify
            and math.isfinite(ideal)
            and metrics.fits()
            and metrics.aspect_sum > 0
            and metrics.available_width > 0
        )

        if can_justify:
            row_height = clamp(ideal, metrics.effective_min, max_allowed)
        else:
            if math.isfinite(ideal) and ideal > 0:
                row_height = min(ideal, target, max_allowed)
            else:
                row_height = min(target, max_allowed)

            if not math.isfinite(row_height) or row_height <= 0:
                scale_fallback = max_allowed if math.isfinite(max_allowed) else target
                row_height = max(1.0, min(target, scale_fallback))

        return clamp(row_height, 1.0, max_allowed), can_justify

    def place_row(self, entries: Sequence[_RowEntry], is_last_row: bool, try_justify: bool) -> None:
        if not entries:
            return

        opts = self.options
        row_index = len(self.rows)
        base_y = self.y_offset
        metrics = self.measure(entries)
        row_height, justified = self._solve_height(metrics, try_justify)

        content_width = row_height * metrics.aspect_sum if metrics.aspect_sum > 0 else 0.0
        occupied_width = content_width + metrics.total_spacing
        leftover = max(opts.container_width - occupied_width, 0.0)
        cursor_x = 0.0 if justified else leftover / 2

        last = len(entries) - 1
        for position, entry in enumerate(entries):
            rendered_width = entry.aspect_ratio * row_height
            stored_width = rendered_width
            if opts.output_spacing_included and position < last:
                stored_width += opts.spacing

            # crop_strategy is accepted but no crop rect is computed yet.
            self.items.append(
                LayoutItem(
                    id=entry.image.id,
                    row_index=row_index,
                    x=cursor_x,
                    y=base_y,
                    width=stored_width,
                    height=row_height,
                    src_width=entry.image.width,
                    src_height=entry.image.height,
                    scale=row_height / entry.image.height,
                    crop=None,
                )
            )
            cursor_x += rendered_width + opts.spacing

        self.rows.append(
            RowSummary(
                index=row_index,
                height=row_height,
                width=content_width,
                justified=justified,
                item_count=len(entries),
            )
        )

        self.y_offset += row_height
        if not is_last_row:
            self.y_offset += opts.row_spacing

    def result(self) -> LayoutResult:
        return LayoutResult(items=self.items, rows=self.rows, container_height=self.y_offset)


def compute_layout(images: Sequence[LayoutImage], options: LayoutOptions) -> LayoutResult:
    """Compute a justified layout for ``images``.

    Args:
        images: Images in display order.  Order is never changed.
        options: Layout parameters.

    Returns:
        A :class:`LayoutResult` with one item per valid image, one summary
        per row, and the total container height.  Empty input, a
        non-positive container width, or a list with no valid image yields
        :meth:`LayoutResult.empty`.
    """
    container_width = options.container_width
    if not images or not math.isfinite(container_width) or container_width <= 0:
        return LayoutResult.empty()

    entries = [
        _RowEntry(image, image.aspect_ratio) for image in images if image.is_valid()
    ]
    if not entries:
        logger.debug(f"All {len(images)} images invalid, returning empty layout")
        return LayoutResult.empty()

    min_height, max_height = resolve_row_height_bounds(
        options.target_row_height, options.row_height_tolerance
    )
    layout = _LayoutPass(options, min_height, max_height)

    row_start = 0
    last_index = len(entries) - 1
    for row_end in range(1, len(entries) + 1):
        window = entries[row_start:row_end]
        metrics = layout.measure(window)

        if metrics.ideal_height < metrics.effective_min - EPSILON and len(window) > 1:
            # Newest image overcrowds the row: close it one element earlier.
            layout.place_row(entries[row_start : row_end - 1], False, True)
            row_start = row_end - 1
            continue

        if metrics.fits():
            layout.place_row(window, row_end - 1 == last_index, True)
            row_start = row_end

    if row_start < len(entries):
        layout.place_row(entries[row_start:], True, options.justify_last_row)

    result = layout.result()
    logger.debug(
        f"Laid out {len(result.items)} images in {len(result.rows)} rows "
        f"({len(images) - len(entries)} dropped), height={result.container_height:.1f}"
    )
    return result
