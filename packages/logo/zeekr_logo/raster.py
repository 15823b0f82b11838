"""Replays recorded logo commands into a Pillow image."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw

from .canvas import (
    ClipPath,
    Command,
    DrawPath,
    DrawRect,
    DrawText,
    Path,
    RecordingCanvas,
    Restore,
    Save,
    SaveLayer,
    Scale,
    Translate,
)
from .decoration import LogoDecoration
from .geometry import Color, Rect
from .painter import LogoPainter
from .text import FontLoader, TextLayout

# (a, b, c, d, e, f): device = (a*x + c*y + e, b*x + d*y + f)
Matrix = tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def _translate(m: Matrix, dx: float, dy: float) -> Matrix:
    a, b, c, d, e, f = m
    return (a, b, c, d, a * dx + c * dy + e, b * dx + d * dy + f)


def _scale(m: Matrix, sx: float, sy: float) -> Matrix:
    a, b, c, d, e, f = m
    return (a * sx, b * sx, c * sy, d * sy, e, f)


def _apply(m: Matrix, x: float, y: float) -> tuple[float, float]:
    a, b, c, d, e, f = m
    return (a * x + c * y + e, b * x + d * y + f)


def _inverse(m: Matrix) -> Matrix:
    a, b, c, d, e, f = m
    det = a * d - b * c
    if det == 0:
        raise ValueError("transform is not invertible")
    return (d / det, -b / det, -c / det, a / det, (c * f - d * e) / det, (b * e - a * f) / det)


@dataclass
class _State:
    matrix: Matrix
    clip: np.ndarray | None
    layer: Image.Image | None = None
    opacity: float | None = None


class Rasterizer:
    """Software rasterizer for :class:`RecordingCanvas` output.

    With ``supersample`` > 1 everything is drawn at that multiple of the
    output size and box-filtered down, which antialiases edges.
    """

    def __init__(self, width: int, height: int, supersample: int = 1) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Raster size must be positive")
        self.width = int(width)
        self.height = int(height)
        self.supersample = max(1, int(supersample))
        self._glyphs: dict[tuple[str, int, float], Image.Image] = {}

    @property
    def device_size(self) -> tuple[int, int]:
        return (self.width * self.supersample, self.height * self.supersample)

    def render(self, commands: list[Command], background: Color | None = None) -> Image.Image:
        fill = background.rgba() if background is not None else (0, 0, 0, 0)
        image = Image.new("RGBA", self.device_size, fill)
        w, h = self.device_size
        ys, xs = np.mgrid[0:h, 0:w].astype(np.float32)
        self._xs = xs + 0.5
        self._ys = ys + 0.5

        s = float(self.supersample)
        self._target = image
        self._state = _State(matrix=(s, 0.0, 0.0, s, 0.0, 0.0), clip=None)
        self._stack: list[_State] = []

        for command in commands:
            self._dispatch(command)
        if self._stack:
            raise RuntimeError(f"{len(self._stack)} unbalanced save(s) in command stream")

        image = self._target
        if self.supersample > 1:
            image = image.resize((self.width, self.height), Image.Resampling.BOX)
        return image

    def _dispatch(self, command: Command) -> None:
        if isinstance(command, Save):
            self._stack.append(self._state)
            self._state = _State(self._state.matrix, self._state.clip)
        elif isinstance(command, SaveLayer):
            self._stack.append(self._state)
            parent = self._target
            self._target = Image.new("RGBA", self.device_size, (0, 0, 0, 0))
            self._state = _State(self._state.matrix, self._state.clip, layer=parent, opacity=command.opacity)
        elif isinstance(command, Restore):
            if not self._stack:
                raise RuntimeError("restore without matching save")
            if self._state.layer is not None:
                self._composite_layer(self._state)
            self._state = self._stack.pop()
        elif isinstance(command, Translate):
            self._state.matrix = _translate(self._state.matrix, command.dx, command.dy)
        elif isinstance(command, Scale):
            self._state.matrix = _scale(self._state.matrix, command.sx, command.sy)
        elif isinstance(command, ClipPath):
            coverage = self._coverage(command.path)
            clip = self._state.clip
            self._state.clip = coverage if clip is None else clip * coverage
        elif isinstance(command, DrawPath):
            self._fill(self._coverage(command.path), command.color)
        elif isinstance(command, DrawText):
            self._draw_text(command)
        elif isinstance(command, DrawRect):
            self._modulate_rect(command)
        else:
            raise TypeError(f"Unsupported command: {command!r}")

    def _composite_layer(self, state: _State) -> None:
        layer = self._target
        if state.opacity is not None and state.opacity < 1.0:
            alpha = np.asarray(layer.getchannel("A"), dtype=np.float32) * state.opacity
            layer.putalpha(Image.fromarray(np.clip(alpha, 0, 255).astype(np.uint8), "L"))
        parent = state.layer
        assert parent is not None
        parent.alpha_composite(layer)
        self._target = parent

    def _coverage(self, path: Path) -> np.ndarray:
        """Non-zero winding coverage of ``path`` under the current transform."""
        winding = np.zeros((self.device_size[1], self.device_size[0]), dtype=np.int16)
        for subpath in path.subpaths:
            points = [_apply(self._state.matrix, x, y) for x, y in subpath]
            area = 0.0
            for (x0, y0), (x1, y1) in zip(points, points[1:] + points[:1]):
                area += x0 * y1 - x1 * y0
            if area == 0.0:
                continue
            mask = Image.new("L", self.device_size, 0)
            ImageDraw.Draw(mask).polygon(points, fill=1)
            winding += np.asarray(mask, dtype=np.int16) * (1 if area > 0 else -1)
        return (winding != 0).astype(np.float32)

    def _fill(self, coverage: np.ndarray, color: Color) -> None:
        alpha = coverage * (color.alpha / 255.0)
        if self._state.clip is not None:
            alpha = alpha * self._state.clip
        source = Image.new("RGBA", self.device_size, (color.red, color.green, color.blue, 0))
        source.putalpha(Image.fromarray(np.clip(alpha * 255.0 + 0.5, 0, 255).astype(np.uint8), "L"))
        self._target.alpha_composite(source)

    def _glyph_mask(self, layout: TextLayout) -> Image.Image:
        key = (layout.text, id(layout.font), layout.font_size)
        mask = self._glyphs.get(key)
        if mask is None:
            width = max(1, int(math.ceil(layout.bounds.width)) + 2)
            height = max(1, int(math.ceil(layout.bounds.height)) + 2)
            mask = Image.new("L", (width, height), 0)
            ImageDraw.Draw(mask).text((0, 0), layout.text, font=layout.font, fill=255)
            self._glyphs[key] = mask
        return mask

    def _draw_text(self, command: DrawText) -> None:
        layout = command.layout
        matrix = _translate(self._state.matrix, command.offset.dx, command.offset.dy)
        a, b, c, d, e, f = _inverse(matrix)
        # Image.transform maps output pixels to input coordinates.
        warped = self._glyph_mask(layout).transform(
            self.device_size,
            Image.Transform.AFFINE,
            data=(a, c, e, b, d, f),
            resample=Image.Resampling.BILINEAR,
        )
        coverage = np.asarray(warped, dtype=np.float32) / 255.0
        self._fill(coverage, layout.color)

    def _modulate_rect(self, command: DrawRect) -> None:
        if command.blend_mode != "modulate":
            raise ValueError(f"Unsupported blend mode: {command.blend_mode}")
        a, b, c, d, e, f = _inverse(self._state.matrix)
        local_x = a * self._xs + c * self._ys + e
        local_y = b * self._xs + d * self._ys + f
        rect: Rect = command.rect
        inside = (
            (local_x >= rect.left) & (local_x < rect.right) & (local_y >= rect.top) & (local_y < rect.bottom)
        ).astype(np.float32)
        if self._state.clip is not None:
            inside = inside * self._state.clip

        shader = command.shader
        gx = shader.end.dx - shader.start.dx
        gy = shader.end.dy - shader.start.dy
        length_sq = gx * gx + gy * gy or 1.0
        t = ((local_x - shader.start.dx) * gx + (local_y - shader.start.dy) * gy) / length_sq
        stops = np.asarray(shader.stops, dtype=np.float32)

        pixels = np.asarray(self._target, dtype=np.float32).copy()
        for channel, values in enumerate(zip(*(color.rgba() for color in shader.colors))):
            factor = np.interp(t, stops, np.asarray(values, dtype=np.float32) / 255.0)
            pixels[..., channel] *= 1.0 + (factor - 1.0) * inside
        self._target = Image.fromarray(np.clip(pixels + 0.5, 0, 255).astype(np.uint8), "RGBA")


def render_logo(
    decoration: LogoDecoration,
    width: int,
    height: int,
    supersample: int = 1,
    background: Color | None = None,
    painter: LogoPainter | None = None,
    font_loader: FontLoader | None = None,
) -> Image.Image:
    """Paint ``decoration`` filling a ``width`` x ``height`` image."""
    canvas = RecordingCanvas()
    painter = painter or LogoPainter(decoration, font_loader=font_loader)
    painter.paint(canvas, Rect(0.0, 0.0, float(width), float(height)))
    return Rasterizer(width, height, supersample=supersample).render(canvas.commands, background=background)
