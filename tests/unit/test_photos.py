"""Tests for rowfit.core.photos — the gallery adapter.

Tests cover:
- Dimension inference from full, partial and missing metadata.
- Defaults taken from configuration.
- Container width flooring and empty results.
- Cache key stability.
"""

from __future__ import annotations

import pytest

from rowfit.core.layout import compute_layout
from rowfit.core.models import LayoutImage, LayoutOptions
from rowfit.core.photos import (
    Photo,
    PhotoMetadata,
    layout_cache_key,
    layout_photos,
    photo_to_layout_image,
)


class TestPhotoToLayoutImage:
    """Tests for dimension inference."""

    def test_full_metadata_is_used_as_is(self):
        photo = Photo("a", PhotoMetadata(width=4000, height=3000))
        assert photo_to_layout_image(photo, 320) == LayoutImage("a", 4000, 3000)

    def test_aspect_ratio_only(self):
        """Stored aspect ratio with the target height as reference."""
        photo = Photo("a", PhotoMetadata(aspect_ratio=2.0))
        image = photo_to_layout_image(photo, 300)
        assert image.height == 300
        assert image.width == pytest.approx(600)

    def test_height_and_aspect_ratio(self):
        photo = Photo("a", PhotoMetadata(height=1000, aspect_ratio=0.5))
        image = photo_to_layout_image(photo, 300)
        assert image.height == 1000
        assert image.width == pytest.approx(500)

    def test_missing_metadata_uses_fallback(self):
        image = photo_to_layout_image(Photo("a"), 200)
        assert image.height == 200
        assert image.width == pytest.approx(300)  # 3:2

    def test_custom_fallback_aspect_ratio(self):
        image = photo_to_layout_image(Photo("a", PhotoMetadata()), 200, 1.0)
        assert image.width == pytest.approx(200)

    def test_zero_height_is_ignored(self):
        photo = Photo("a", PhotoMetadata(width=800, height=0, aspect_ratio=1.6))
        image = photo_to_layout_image(photo, 250)
        assert image.height == 250
        assert image.width == 800

    def test_non_positive_aspect_ratio_uses_fallback(self):
        photo = Photo("a", PhotoMetadata(aspect_ratio=-1))
        image = photo_to_layout_image(photo, 100)
        assert image.width == pytest.approx(150)

    def test_nan_width_uses_stored_aspect_ratio(self):
        nan = float("nan")
        photo = Photo("a", PhotoMetadata(width=nan, height=3000, aspect_ratio=1.25))
        image = photo_to_layout_image(photo, 320)
        assert image.is_valid()
        assert image.height == 3000
        assert image.width == pytest.approx(3750)

    def test_nan_width_without_aspect_ratio_uses_fallback(self):
        photo = Photo("a", PhotoMetadata(width=float("nan"), height=3000))
        image = photo_to_layout_image(photo, 320)
        assert image.height == 3000
        assert image.width == pytest.approx(4500)

    def test_nan_height_uses_target_height(self):
        photo = Photo("a", PhotoMetadata(width=800, height=float("nan")))
        image = photo_to_layout_image(photo, 320)
        assert image.is_valid()
        assert image.height == 320
        assert image.width == 800

    def test_infinite_aspect_ratio_uses_fallback(self):
        photo = Photo("a", PhotoMetadata(aspect_ratio=float("inf")))
        image = photo_to_layout_image(photo, 100)
        assert image.width == pytest.approx(150)


class TestLayoutPhotos:
    """Tests for layout_photos."""

    @pytest.fixture
    def photos(self) -> list[Photo]:
        return [
            Photo("a", PhotoMetadata(width=4000, height=3000)),
            Photo("b", PhotoMetadata(width=2000, height=3200)),
            Photo("c", PhotoMetadata(width=3500, height=2400)),
            Photo("d", PhotoMetadata(aspect_ratio=2 / 3)),
            Photo("e"),
        ]

    def test_empty_photos(self, test_config):
        result = layout_photos([], 1200, settings=test_config)
        assert result.items == []
        assert result.container_height == 0

    @pytest.mark.parametrize("width", [0, 0.7, -20, float("nan")])
    def test_width_floored_to_zero_gives_empty(self, photos, test_config, width):
        result = layout_photos(photos, width, settings=test_config)
        assert result.items == []
        assert result.rows == []

    def test_matches_engine_with_config_defaults(self, photos, test_config):
        """The adapter is the engine called with configured gallery defaults."""
        result = layout_photos(photos, 1200.9, settings=test_config)

        expected = compute_layout(
            [photo_to_layout_image(photo, 320) for photo in photos],
            LayoutOptions(
                container_width=1200,
                spacing=16,
                target_row_height=320,
                row_height_tolerance=(0.75, 1.35),
                justify_last_row=True,
                max_scale_up=1.6,
                vertical_spacing=16,
            ),
        )
        assert result == expected

    def test_nan_metadata_photo_is_still_placed(self, test_config):
        photos = [Photo("a", PhotoMetadata(width=float("nan"), height=3000))]
        result = layout_photos(photos, 1000, settings=test_config)
        assert [item.id for item in result.items] == ["a"]
        assert result.items[0].src_width == pytest.approx(4500)

    def test_every_photo_is_placed(self, photos, test_config):
        result = layout_photos(photos, 1200, settings=test_config)
        assert [item.id for item in result.items] == [photo.id for photo in photos]

    def test_explicit_arguments_override_config(self, photos, test_config):
        result = layout_photos(
            photos,
            1200,
            gap=0,
            target_row_height=200,
            row_height_tolerance=0.2,
            justify_last_row=False,
            settings=test_config,
        )
        for row in result.rows:
            if row.justified:
                assert row.width == pytest.approx(1200, abs=1)
            assert row.height <= 200 * 1.2 + 1e-3
        assert result.container_height == pytest.approx(sum(row.height for row in result.rows))

    def test_gap_used_for_rows(self, photos, test_config):
        result = layout_photos(photos, 1200, gap=30, settings=test_config)
        expected = sum(row.height for row in result.rows) + 30 * (len(result.rows) - 1)
        assert result.container_height == pytest.approx(expected)


class TestLayoutCacheKey:
    """Tests for layout_cache_key."""

    def test_same_photos_same_key(self):
        first = [Photo("a", PhotoMetadata(width=10, height=20))]
        second = [Photo("a", PhotoMetadata(width=10, height=20))]
        assert layout_cache_key(first) == layout_cache_key(second)

    def test_dimension_change_changes_key(self):
        before = [Photo("a", PhotoMetadata(width=10, height=20))]
        after = [Photo("a", PhotoMetadata(width=10, height=30))]
        assert layout_cache_key(before) != layout_cache_key(after)

    def test_order_matters(self):
        a, b = Photo("a"), Photo("b")
        assert layout_cache_key([a, b]) != layout_cache_key([b, a])
