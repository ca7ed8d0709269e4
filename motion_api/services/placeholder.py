"""Placeholder image rendering for /api/placeholder."""

from html import escape

DEFAULT_WIDTH = "400"
DEFAULT_HEIGHT = "300"

_TEMPLATE = """<svg width="{w}" height="{h}" xmlns="http://www.w3.org/2000/svg">
  <rect width="100%" height="100%" fill="#f3f4f6"/>
  <rect x="20%" y="20%" width="60%" height="60%" fill="#e5e7eb" rx="8"/>
  <circle cx="40%" cy="40%" r="8%" fill="#d1d5db"/>
  <rect x="35%" y="55%" width="30%" height="8%" fill="#d1d5db" rx="2"/>
  <rect x="30%" y="68%" width="40%" height="6%" fill="#e5e7eb" rx="2"/>
  <text x="50%" y="85%" text-anchor="middle" fill="#9ca3af" font-family="Arial, sans-serif" font-size="12">{w}x{h}</text>
</svg>
"""


def parse_dimensions(path: str | None) -> tuple[str, str]:
    """Split 'W/H' path segments, defaulting whichever is missing."""
    segments = [s for s in (path or "").split("/") if s]
    width = segments[0] if len(segments) > 0 else DEFAULT_WIDTH
    height = segments[1] if len(segments) > 1 else DEFAULT_HEIGHT
    return width, height


def render_placeholder_svg(width: str = DEFAULT_WIDTH, height: str = DEFAULT_HEIGHT) -> str:
    w, h = escape(str(width), quote=True), escape(str(height), quote=True)
    return _TEMPLATE.format(w=w, h=h)
