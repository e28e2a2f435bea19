"""Pydantic request and response models for the rowfit API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Field names are snake_case in Python and camelCase on the wire
(``containerWidth``, ``rowIndex``, ``containerHeight``).  Requests accept
either spelling.

Models
------
LayoutRequest
    Payload for ``POST /api/layout``: images plus explicit layout options.
GalleryLayoutRequest
    Payload for ``POST /api/gallery/layout``: photos with optional metadata
    and a measured container width; unset options use configured defaults.
LayoutResponse
    Items, row summaries and container height returned by both endpoints.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rowfit.core.models import (
    CropRect,
    LayoutImage,
    LayoutItem,
    LayoutOptions,
    LayoutResult,
    RowSummary,
    ToleranceBand,
)
from rowfit.core.photos import Photo, PhotoMetadata


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ToleranceBandModel(CamelModel):
    """Explicit ``{min, max}`` tolerance multipliers."""

    min: float
    max: float


ToleranceInput = Union[tuple[float, float], ToleranceBandModel, float]


def _to_tolerance(value: ToleranceInput):
    if isinstance(value, ToleranceBandModel):
        return ToleranceBand(min=value.min, max=value.max)
    return value


class ImageModel(CamelModel):
    """Input image.  Invalid dimensions are accepted and dropped by the engine."""

    id: str = Field(..., description="Unique image identifier.")
    width: float = Field(..., description="Native pixel width.")
    height: float = Field(..., description="Native pixel height.")


class LayoutOptionsModel(CamelModel):
    """Layout options for ``POST /api/layout``.

    Attributes:
        container_width: Pixel width each row must fill.
        spacing: Horizontal gap between images in a row.
        target_row_height: Nominal row height.
        row_height_tolerance: ``[min, max]``, ``{"min", "max"}`` or a single
            symmetric fraction.
        justify_last_row: Whether the final row is width-justified.
        max_scale_up: Maximum native-height enlargement (default 1.5).
        crop_strategy: ``"center"`` or ``"none"``; currently has no effect.
        output_spacing_included: Fold trailing spacing into item widths.
        vertical_spacing: Gap between rows; defaults to ``spacing``.
    """

    container_width: float
    spacing: float
    target_row_height: float
    row_height_tolerance: ToleranceInput
    justify_last_row: bool
    max_scale_up: float = 1.5
    crop_strategy: Literal["center", "none"] = "center"
    output_spacing_included: bool = False
    vertical_spacing: float | None = None

    def to_options(self) -> LayoutOptions:
        return LayoutOptions(
            container_width=self.container_width,
            spacing=self.spacing,
            target_row_height=self.target_row_height,
            row_height_tolerance=_to_tolerance(self.row_height_tolerance),
            justify_last_row=self.justify_last_row,
            max_scale_up=self.max_scale_up,
            crop_strategy=self.crop_strategy,
            output_spacing_included=self.output_spacing_included,
            vertical_spacing=self.vertical_spacing,
        )


class LayoutRequest(CamelModel):
    """Request body for the ``POST /api/layout`` endpoint."""

    images: list[ImageModel] = Field(default_factory=list)
    options: LayoutOptionsModel

    def to_images(self) -> list[LayoutImage]:
        return [LayoutImage(id=img.id, width=img.width, height=img.height) for img in self.images]


class PhotoMetadataModel(CamelModel):
    width: float | None = None
    height: float | None = None
    aspect_ratio: float | None = None


class PhotoModel(CamelModel):
    id: str
    metadata: PhotoMetadataModel | None = None

    def to_photo(self) -> Photo:
        if self.metadata is None:
            return Photo(id=self.id)
        return Photo(
            id=self.id,
            metadata=PhotoMetadata(
                width=self.metadata.width,
                height=self.metadata.height,
                aspect_ratio=self.metadata.aspect_ratio,
            ),
        )


class GalleryLayoutRequest(CamelModel):
    """Request body for the ``POST /api/gallery/layout`` endpoint.

    Only ``container_width`` is required; every other option falls back to
    the server configuration.
    """

    photos: list[PhotoModel] = Field(default_factory=list)
    container_width: float = Field(..., description="Measured container width.")
    gap: float | None = Field(default=None, ge=0)
    target_row_height: float | None = Field(default=None, gt=0)
    row_height_tolerance: ToleranceInput | None = None
    justify_last_row: bool | None = None
    max_scale_up: float | None = None

    def tolerance(self):
        if self.row_height_tolerance is None:
            return None
        return _to_tolerance(self.row_height_tolerance)


class CropRectModel(CamelModel):
    x: float
    y: float
    width: float
    height: float


class LayoutItemModel(CamelModel):
    id: str
    row_index: int
    x: float
    y: float
    width: float
    height: float
    src_width: float
    src_height: float
    scale: float
    crop: CropRectModel | None = None

    @classmethod
    def from_item(cls, item: LayoutItem) -> LayoutItemModel:
        crop = item.crop
        return cls(
            id=item.id,
            row_index=item.row_index,
            x=item.x,
            y=item.y,
            width=item.width,
            height=item.height,
            src_width=item.src_width,
            src_height=item.src_height,
            scale=item.scale,
            crop=_crop_model(crop) if crop is not None else None,
        )


def _crop_model(crop: CropRect) -> CropRectModel:
    return CropRectModel(x=crop.x, y=crop.y, width=crop.width, height=crop.height)


class RowSummaryModel(CamelModel):
    index: int
    height: float
    width: float
    justified: bool
    item_count: int

    @classmethod
    def from_row(cls, row: RowSummary) -> RowSummaryModel:
        return cls(
            index=row.index,
            height=row.height,
            width=row.width,
            justified=row.justified,
            item_count=row.item_count,
        )


class LayoutResponse(CamelModel):
    """Response body for both layout endpoints."""

    items: list[LayoutItemModel]
    rows: list[RowSummaryModel]
    container_height: float

    @classmethod
    def from_result(cls, result: LayoutResult) -> LayoutResponse:
        return cls(
            items=[LayoutItemModel.from_item(item) for item in result.items],
            rows=[RowSummaryModel.from_row(row) for row in result.rows],
            container_height=result.container_height,
        )
