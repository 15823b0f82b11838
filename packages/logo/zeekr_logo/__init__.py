"""Logo model, painter and rasterizer for the animated ZEEKR logo."""

from .animation import AnimatedLogo, LogoAnimator
from .canvas import LinearGradient, Path, PathBuilder, RecordingCanvas
from .curves import CURVES, DEFAULT_CURVE_NAME, Cubic, Curve, get_curve, list_curves
from .decoration import LogoDecoration, LogoStyle, blend, next_style
from .geometry import WHITE, Color, EdgeInsets, Offset, Rect, Size
from .painter import LogoPainter, RenderFrame, intrinsic_logo_size, paint_logo
from .raster import Rasterizer, render_logo
from .text import TextLayout, font_loader_for, load_label_font

__all__ = [
    "AnimatedLogo",
    "Color",
    "CURVES",
    "Cubic",
    "Curve",
    "DEFAULT_CURVE_NAME",
    "EdgeInsets",
    "LinearGradient",
    "LogoAnimator",
    "LogoDecoration",
    "LogoPainter",
    "LogoStyle",
    "Offset",
    "Path",
    "PathBuilder",
    "Rasterizer",
    "RecordingCanvas",
    "Rect",
    "RenderFrame",
    "Size",
    "TextLayout",
    "WHITE",
    "blend",
    "font_loader_for",
    "get_curve",
    "intrinsic_logo_size",
    "list_curves",
    "load_label_font",
    "next_style",
    "paint_logo",
    "render_logo",
]
