from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path

from PIL import ImageFont

from plotframe.errors import FontError
from plotframe.geometry import Length


LOGGER = logging.getLogger(__name__)

# Pillow's bundled scalable font; always available.
DEFAULT_FONT = "default"

# Metrics are measured on a font rendered at this many pixels per point.
_METRIC_SCALE = 8.0

FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("C:/Windows/Fonts"),
)


@dataclass(frozen=True)
class FontExtents:
    """Vertical metrics in points; ``descent`` is the positive distance below the baseline."""

    ascent: Length
    descent: Length
    height: Length


@dataclass(frozen=True)
class Font:
    """A typeface at a point size.

    ``path`` is None for the bundled default font.
    """

    name: str
    size: Length
    path: Path | None = None

    def extents(self) -> FontExtents:
        ascent, descent = self.pil_font(_METRIC_SCALE).getmetrics()
        return FontExtents(
            ascent=ascent / _METRIC_SCALE,
            descent=descent / _METRIC_SCALE,
            height=(ascent + descent) / _METRIC_SCALE,
        )

    def width(self, text: str) -> Length:
        if not text:
            return 0.0
        return float(self.pil_font(_METRIC_SCALE).getlength(text)) / _METRIC_SCALE

    def pil_font(self, scale: float) -> ImageFont.FreeTypeFont:
        return _load_pil_font(self.path, max(1, int(round(self.size * scale))))

    def resized(self, size: Length) -> "Font":
        if size <= 0:
            raise ValueError("font size must be > 0")
        return Font(name=self.name, size=float(size), path=self.path)


def make_font(name: str, size: Length) -> Font:
    if not size > 0:
        raise ValueError("font size must be > 0")
    wanted = name.strip()
    if not wanted or wanted.lower() == DEFAULT_FONT:
        return Font(name=DEFAULT_FONT, size=float(size))
    path = _resolve_font_path(wanted)
    if path is None:
        raise FontError(f"font not found: {name!r}")
    try:
        _load_pil_font(path, 12)
    except OSError as exc:
        raise FontError(f"cannot load font {name!r} from {path}") from exc
    LOGGER.debug("resolved font %r to %s", name, path)
    return Font(name=wanted, size=float(size), path=path)


@lru_cache(maxsize=128)
def _load_pil_font(path: Path | None, size_px: int) -> ImageFont.FreeTypeFont:
    if path is None:
        return ImageFont.load_default(size=size_px)
    return ImageFont.truetype(str(path), size=size_px)


@lru_cache(maxsize=1)
def _font_candidates() -> tuple[Path, ...]:
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))
    return tuple(candidates)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.lower().replace(" ", "")
    for path in _font_candidates():
        stem = path.stem.lower().replace(" ", "")
        if stem == wanted:
            return path
    for path in _font_candidates():
        stem = path.stem.lower().replace(" ", "")
        if wanted in stem:
            return path
    return None
