"""Paints one frame of the logo into a recording canvas."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from .canvas import Command, LinearGradient, Path, PathBuilder, RecordingCanvas
from .decoration import LogoDecoration
from .geometry import (
    TRANSPARENT_WHITE,
    WHITE,
    Offset,
    Rect,
    Size,
    apply_contain_fit,
    inscribe_center,
    lerp_double,
)
from .text import LABEL, LABEL_FONT_SIZE, FontLoader, TextLayout, layout_text

MARK_ONLY_SIZE = Size(112.0, 112.0)
HORIZONTAL_SIZE = Size(446.0, 112.0)
STACKED_SIZE = Size(290.0, 192.0)

# The mark is defined in a 112x112 coordinate space. The numbers come from the
# SVG exported from the artwork source.
MARK_EXTENT = 112.0
MARK_PATH: Path = (
    PathBuilder()
    .move_to(0.0, 0.0)
    .line_to(112.0, 0.0)
    .line_to(112.0, 112.0)
    .line_to(0.0, 112.0)
    .move_to(10.0, 10.0)
    .line_to(10.0, 102.0)
    .line_to(65.0, 102.0)
    .line_to(65.0, 72.0)
    .line_to(37.0, 44.0)
    .line_to(37.0, 10.0)
    .move_to(102.0, 102.0)
    .line_to(102.0, 10.0)
    .line_to(47.0, 10.0)
    .line_to(47.0, 40.0)
    .line_to(75.0, 68.0)
    .line_to(75.0, 102.0)
    .build()
)


@dataclass(frozen=True)
class RenderFrame:
    """Geometry resolved for a single paint call."""

    target: Rect
    intrinsic_size: Size
    fitted_rect: Rect
    center_square: Rect
    logo_target_square: Rect
    logo_square: Rect


def intrinsic_logo_size(position: float) -> Size:
    # Selected by sign, so the layout envelope snaps when position crosses 0.
    if position > 0.0:
        return HORIZONTAL_SIZE
    if position < 0.0:
        return STACKED_SIZE
    return MARK_ONLY_SIZE


class LogoPainter:
    """Paints a :class:`LogoDecoration`.

    Label metrics are measured on first use and kept for the lifetime of the
    painter. A different decoration gets a new painter.
    """

    def __init__(self, config: LogoDecoration, font_loader: FontLoader | None = None) -> None:
        assert config.debug_assert_is_valid()
        self.config = config
        self._font_loader = font_loader

    @cached_property
    def text_layout(self) -> TextLayout:
        return layout_text(LABEL, LABEL_FONT_SIZE, self.config.text_color, self._font_loader)

    def layout(self, rect: Rect) -> RenderFrame | None:
        config = self.config
        position: float = config.position  # type: ignore[assignment]
        offset = rect.top_left + config.margin.top_left
        canvas_size = config.margin.deflate_size(rect.size)
        if canvas_size.is_empty:
            return None
        target = Rect.from_offset_size(offset, canvas_size)

        logo_size = intrinsic_logo_size(position)
        fitted = inscribe_center(apply_contain_fit(logo_size, canvas_size), target)

        side = canvas_size.shortest_side
        center_square = Rect.from_ltwh(
            offset.dx + (canvas_size.width - side) / 2.0,
            offset.dy + (canvas_size.height - side) / 2.0,
            side,
            side,
        )

        if position > 0.0:
            logo_target_square = Rect.from_ltwh(fitted.left, fitted.top, fitted.height, fitted.height)
        elif position < 0.0:
            logo_height = fitted.height * 112.0 / 192.0
            logo_target_square = Rect.from_ltwh(
                fitted.left + (fitted.width - logo_height) / 2.0,
                fitted.top,
                logo_height,
                logo_height,
            )
        else:
            logo_target_square = center_square

        logo_square = Rect.lerp(center_square, logo_target_square, abs(position))
        return RenderFrame(
            target=target,
            intrinsic_size=logo_size,
            fitted_rect=fitted,
            center_square=center_square,
            logo_target_square=logo_target_square,
            logo_square=logo_square,
        )

    def paint(self, canvas: RecordingCanvas, rect: Rect) -> None:
        frame = self.layout(rect)
        if frame is None:
            return
        if self.config.opacity < 1.0:
            with canvas.layer(frame.target, opacity=self.config.opacity):
                self._paint_frame(canvas, frame)
        else:
            self._paint_frame(canvas, frame)

    def _paint_frame(self, canvas: RecordingCanvas, frame: RenderFrame) -> None:
        position: float = self.config.position  # type: ignore[assignment]
        if position > 0.0:
            self._paint_horizontal_label(canvas, frame)
        elif position < 0.0:
            self._paint_stacked_label(canvas, frame)
        self._paint_mark(canvas, frame.logo_square)

    def _paint_horizontal_label(self, canvas: RecordingCanvas, frame: RenderFrame) -> None:
        position: float = self.config.position  # type: ignore[assignment]
        text = self.text_layout
        rect = frame.fitted_rect
        font_size = 36.0 / 112.0 * frame.logo_target_square.height
        scale = font_size / 100.0
        # 155 is the distance from the left edge to the label when the whole logo is 446 wide.
        final_left = (155.0 / 446.0) * rect.width
        initial_left = rect.width / 2.0 - text.bounds.width * scale
        text_offset = Offset(
            rect.left + lerp_double(initial_left, final_left, position),
            rect.top + (rect.height - text.bounds.height * scale) / 2.0,
        )
        with canvas.saved():
            if position <= 1.0:
                center = frame.logo_square.center
                wedge = Path.polygon(
                    (center.dx, center.dy),
                    (center.dx + rect.width, center.dy - rect.width),
                    (center.dx + rect.width, center.dy + rect.width),
                )
                canvas.clip_path(wedge)
            # Fat label: x is scaled twice as much as y.
            canvas.translate(text_offset.dx, text_offset.dy)
            canvas.scale(scale * 2.0, scale)
            canvas.draw_text(text)

    def _paint_stacked_label(self, canvas: RecordingCanvas, frame: RenderFrame) -> None:
        position: float = self.config.position  # type: ignore[assignment]
        text = self.text_layout
        bounds = text.bounds
        font_size = 36.0 / 112.0 * frame.logo_target_square.height
        scale = font_size / 100.0
        wiping = position > -1.0
        # The isolated layer limits what the gradient rect blends with.
        scope = canvas.layer(bounds) if wiping else canvas.saved()
        with scope:
            canvas.translate(
                frame.logo_target_square.center.dx - bounds.width * scale,
                frame.fitted_rect.bottom - bounds.height * scale,
            )
            canvas.scale(scale * 2.0, scale)
            canvas.draw_text(text)
            if wiping:
                progress = abs(position)
                canvas.draw_rect(
                    bounds.inflate(bounds.width * 0.5),
                    LinearGradient(
                        start=Offset(bounds.width * -0.5, 0.0),
                        end=Offset(bounds.width * 1.5, 0.0),
                        colors=(WHITE, WHITE, TRANSPARENT_WHITE, TRANSPARENT_WHITE),
                        stops=(0.0, max(0.0, progress - 0.1), min(progress + 0.1, 1.0), 1.0),
                    ),
                    blend_mode="modulate",
                )

    def _paint_mark(self, canvas: RecordingCanvas, rect: Rect) -> None:
        with canvas.saved():
            canvas.translate(rect.left, rect.top)
            canvas.scale(rect.width / MARK_EXTENT, rect.height / MARK_EXTENT)
            canvas.draw_path(MARK_PATH, self.config.color)


def paint_logo(decoration: LogoDecoration, rect: Rect, font_loader: FontLoader | None = None) -> list[Command]:
    canvas = RecordingCanvas()
    LogoPainter(decoration, font_loader=font_loader).paint(canvas, rect)
    return canvas.commands
