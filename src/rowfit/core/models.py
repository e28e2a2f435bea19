"""Data models for the justified gallery layout engine.

Inputs (:class:`LayoutImage`, :class:`LayoutOptions`) and outputs
(:class:`LayoutItem`, :class:`RowSummary`, :class:`LayoutResult`) are plain
dataclasses so the engine stays free of any framework dependency.  The HTTP
layer converts to and from these in :mod:`rowfit.api.models`.

Row Height Tolerance
--------------------
The tolerance band around the target row height can be given in three shapes:

- a ``(min, max)`` pair of multipliers, e.g. ``(0.75, 1.3)``
- a :class:`ToleranceBand` (or a mapping with ``min``/``max`` keys)
- a single symmetric fraction, e.g. ``0.25`` meaning ``(0.75, 1.25)``

:func:`normalize_tolerance` collapses all of them into one canonical
``(min_ratio, max_ratio)`` pair before the algorithm runs.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal, Union

CropStrategy = Literal["center", "none"]


@dataclass(frozen=True)
class ToleranceBand:
    """Explicit ``min``/``max`` multipliers around the target row height."""

    min: float
    max: float


RowHeightTolerance = Union[tuple[float, float], ToleranceBand, Mapping[str, float], float]


def normalize_tolerance(tolerance: RowHeightTolerance) -> tuple[float, float]:
    """Normalize any accepted tolerance shape into ``(min_ratio, max_ratio)``.

    Non-finite ratios fall back to ``1.0`` and an inverted pair is swapped,
    so the result always satisfies ``min_ratio <= max_ratio``.

    Args:
        tolerance: Pair, :class:`ToleranceBand`, mapping, or symmetric fraction.

    Returns:
        Canonical ``(min_ratio, max_ratio)`` tuple.
    """
    if isinstance(tolerance, ToleranceBand):
        min_ratio, max_ratio = tolerance.min, tolerance.max
    elif isinstance(tolerance, Mapping):
        min_ratio, max_ratio = tolerance["min"], tolerance["max"]
    elif isinstance(tolerance, (int, float)):
        spread = max(float(tolerance), 0.0)
        min_ratio, max_ratio = 1.0 - spread, 1.0 + spread
    else:
        min_ratio, max_ratio = tolerance

    min_ratio = float(min_ratio)
    max_ratio = float(max_ratio)

    if not math.isfinite(min_ratio):
        min_ratio = 1.0
    if not math.isfinite(max_ratio):
        max_ratio = 1.0

    if min_ratio > max_ratio:
        min_ratio, max_ratio = max_ratio, min_ratio

    return min_ratio, max_ratio


@dataclass(frozen=True)
class LayoutImage:
    """Input image: a stable identifier plus native pixel dimensions."""

    id: str
    width: float
    height: float

    def is_valid(self) -> bool:
        """Check that both dimensions are finite and strictly positive."""
        return (
            math.isfinite(self.width)
            and math.isfinite(self.height)
            and self.width > 0
            and self.height > 0
        )

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class LayoutOptions:
    """Parameters controlling a single layout pass.

    Attributes:
        container_width: Pixel width every justified row must fill.
        spacing: Horizontal gap between neighbouring images in a row.
        target_row_height: Nominal row height before solving.
        row_height_tolerance: Band around the target (see module docs).
        justify_last_row: Whether the trailing row is width-justified too.
        max_scale_up: Maximum enlargement of any native image height.
            Values below 1 are treated as 1.
        crop_strategy: Reserved for pixel cropping; currently a no-op.
        output_spacing_included: Fold the trailing gap into each item's
            ``width`` (except the last item of a row).
        vertical_spacing: Gap between rows.  ``None`` reuses ``spacing``.
    """

    container_width: float
    spacing: float
    target_row_height: float
    row_height_tolerance: RowHeightTolerance
    justify_last_row: bool
    max_scale_up: float = 1.5
    crop_strategy: CropStrategy = "center"
    output_spacing_included: bool = False
    vertical_spacing: float | None = None

    @property
    def row_spacing(self) -> float:
        """Resolved vertical gap between rows."""
        return self.spacing if self.vertical_spacing is None else self.vertical_spacing


@dataclass(frozen=True)
class CropRect:
    """Crop offset within the source image (reserved, never produced yet)."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LayoutItem:
    """Absolute placement of one image inside the gallery container."""

    id: str
    row_index: int
    x: float
    y: float
    width: float
    height: float
    src_width: float
    src_height: float
    scale: float
    crop: CropRect | None = None


@dataclass(frozen=True)
class RowSummary:
    """Resolved geometry of one row.

    ``width`` is the content width only and excludes inter-item spacing.
    """

    index: int
    height: float
    width: float
    justified: bool
    item_count: int


@dataclass(frozen=True)
class LayoutResult:
    """Complete output of a layout pass."""

    items: list[LayoutItem] = field(default_factory=list)
    rows: list[RowSummary] = field(default_factory=list)
    container_height: float = 0.0

    @classmethod
    def empty(cls) -> LayoutResult:
        return cls(items=[], rows=[], container_height=0.0)
