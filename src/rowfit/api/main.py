"""rowfit — FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes wrapping
the layout engine, and the ``main()`` CLI function that launches the uvicorn
server.

Architecture
------------
The application is stateless.  Every request carries the full image list and
the container width; the server computes the layout and returns it.  Clients
re-request whenever their container is resized or the image set changes.

- **Layout** is computed by :func:`~rowfit.core.layout.compute_layout`.
- **Gallery layout** goes through :func:`~rowfit.core.photos.layout_photos`,
  which infers missing photo dimensions and applies configured defaults.
- **Configuration** comes from :data:`~rowfit.core.config.config`.

Endpoints
---------
========  ========================  ======================================
Method    Path                      Purpose
========  ========================  ======================================
GET       ``/api/health``           Liveness check and version
GET       ``/api/config``           Gallery layout defaults
POST      ``/api/layout``           Lay out images with explicit options
POST      ``/api/gallery/layout``   Lay out photos with configured defaults
========  ========================  ======================================

Usage
-----
CLI (installed entry point)::

    rowfit

Direct invocation::

    python -m rowfit.api.main
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from rowfit import __version__
from rowfit.api.models import GalleryLayoutRequest, LayoutRequest, LayoutResponse
from rowfit.core.config import config
from rowfit.core.layout import compute_layout
from rowfit.core.photos import layout_photos

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="rowfit",
    description="Justified gallery layout engine.",
    version=__version__,
)

# Allow cross-origin requests so a gallery frontend served from another
# origin can request layouts during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/health")
async def health() -> dict:
    """Return a liveness marker and the package version."""
    return {"status": "ok", "version": __version__}


@app.get("/api/config")
async def get_config() -> dict:
    """Return the gallery layout defaults.

    Returns:
        Dictionary with ``version``, ``gap``, ``targetRowHeight``,
        ``rowHeightTolerance``, ``justifyLastRow``, ``maxScaleUp`` and
        ``fallbackAspectRatio``.
    """
    return {
        "version": __version__,
        "gap": config.gap,
        "targetRowHeight": config.target_row_height,
        "rowHeightTolerance": list(config.row_height_tolerance),
        "justifyLastRow": config.justify_last_row,
        "maxScaleUp": config.max_scale_up,
        "fallbackAspectRatio": config.fallback_aspect_ratio,
    }


@app.post("/api/layout", response_model=LayoutResponse)
async def layout(req: LayoutRequest) -> LayoutResponse:
    """Compute a justified layout for explicit images and options.

    Args:
        req: Validated :class:`LayoutRequest` payload.

    Returns:
        :class:`LayoutResponse` with items, rows and container height.

    Raises:
        HTTPException: 500 if layout computation fails unexpectedly.
    """
    try:
        result = compute_layout(req.to_images(), req.options.to_options())
    except Exception as exc:
        logger.error(f"Layout failed: {exc}", exc_info=True)
        raise HTTPException(status_code=500, detail="Layout computation failed") from exc

    logger.info(
        f"Layout: {len(req.images)} images -> {len(result.rows)} rows "
        f"at width {req.options.container_width}"
    )
    return LayoutResponse.from_result(result)


@app.post("/api/gallery/layout", response_model=LayoutResponse)
async def gallery_layout(req: GalleryLayoutRequest) -> LayoutResponse:
    """Lay out gallery photos, inferring missing dimensions.

    Args:
        req: Validated :class:`GalleryLayoutRequest` payload.

    Returns:
        :class:`LayoutResponse` with items, rows and container height.

    Raises:
        HTTPException: 500 if layout computation fails unexpectedly.
    """
    try:
        result = layout_photos(
            [photo.to_photo() for photo in req.photos],
            req.container_width,
            gap=req.gap,
            target_row_height=req.target_row_height,
            row_height_tolerance=req.tolerance(),
            justify_last_row=req.justify_last_row,
            max_scale_up=req.max_scale_up,
        )
    except Exception as exc:
        logger.error(f"Gallery layout failed: {exc}", exc_info=True)
        raise HTTPException(status_code=500, detail="Layout computation failed") from exc

    logger.info(
        f"Gallery layout: {len(req.photos)} photos -> {len(result.rows)} rows "
        f"at width {req.container_width}"
    )
    return LayoutResponse.from_result(result)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~rowfit.core.config.config`
    (``ROWFIT_SERVER_HOST``, ``ROWFIT_SERVER_PORT``, ``ROWFIT_LOG_LEVEL``).
    Defaults to ``0.0.0.0:8000``.

    This function is registered as the ``rowfit`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting rowfit API on {config.server_host}:{config.server_port}")

    uvicorn.run(
        "rowfit.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
