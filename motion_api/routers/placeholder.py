"""Placeholder images — SVG stand-ins sized from the URL path."""

from fastapi import APIRouter
from fastapi.responses import Response

from ..services.placeholder import parse_dimensions, render_placeholder_svg

router = APIRouter(tags=["placeholder"])

CACHE_FOREVER = "public, max-age=31536000, immutable"


def _svg_response(path: str | None) -> Response:
    width, height = parse_dimensions(path)
    return Response(
        content=render_placeholder_svg(width, height),
        media_type="image/svg+xml",
        headers={"Cache-Control": CACHE_FOREVER},
    )


@router.get("/api/placeholder")
def placeholder_default():
    return _svg_response(None)


@router.get("/api/placeholder/{dimensions:path}")
def placeholder(dimensions: str):
    """/api/placeholder/{width}/{height}; a missing height defaults to 300."""
    return _svg_response(dimensions)
