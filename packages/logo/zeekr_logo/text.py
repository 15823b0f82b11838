"""Label font resolution and text metrics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from PIL import ImageFont

from .geometry import Color, Rect

logger = logging.getLogger("zeekr.logo")

LABEL = "ZEEKR"
# 247 is the cap height of the label face at font size 350 (device pixel ratio 1.0).
LABEL_FONT_SIZE = 100.0 * 350.0 / 247.0

FALLBACK_FONTS = ("DejaVuSans.ttf", "Arial.ttf")

FontLoader = Callable[[float], Any]

_warned_fallback = False


def load_label_font(size: float, font_path: str | None = None):
    """Return a Pillow font for the label, falling back to system faces."""
    global _warned_fallback
    candidates = ((font_path,) if font_path else ()) + FALLBACK_FONTS
    for candidate in candidates:
        try:
            font = ImageFont.truetype(candidate, size)
        except OSError:
            continue
        if candidate != font_path and font_path and not _warned_fallback:
            logger.warning("label font %s unavailable, using %s", font_path, candidate)
            _warned_fallback = True
        return font
    if not _warned_fallback:
        logger.warning("no TrueType label font found, using Pillow default font")
        _warned_fallback = True
    return ImageFont.load_default(size=size)


def font_loader_for(font_path: str | None) -> FontLoader:
    def _load(size: float):
        return load_label_font(size, font_path)

    return _load


@dataclass(frozen=True)
class TextLayout:
    """A laid out label: the text, its paint and its selection box."""

    text: str
    font_size: float
    color: Color
    bounds: Rect
    font: Any = field(default=None, compare=False, repr=False)


def layout_text(text: str, font_size: float, color: Color, font_loader: FontLoader | None = None) -> TextLayout:
    font = (font_loader or load_label_font)(font_size)
    width = float(font.getlength(text))
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        height = float(ascent + descent)
    else:
        height = float(font.getbbox(text)[3])
    return TextLayout(text=text, font_size=font_size, color=color, bounds=Rect(0.0, 0.0, width, height), font=font)
