"""Recording canvas: drawing commands plus scoped save/layer state."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Union

from .geometry import Color, Offset, Rect

if TYPE_CHECKING:  # pragma: no cover
    from .text import TextLayout


Point = tuple[float, float]


@dataclass(frozen=True)
class Path:
    """Polygonal path made of closed subpaths, filled with the non-zero rule."""

    subpaths: tuple[tuple[Point, ...], ...] = ()

    @classmethod
    def polygon(cls, *points: Point) -> Path:
        return cls((tuple(points),))

    @classmethod
    def rect(cls, rect: Rect) -> Path:
        return cls.polygon(
            (rect.left, rect.top),
            (rect.right, rect.top),
            (rect.right, rect.bottom),
            (rect.left, rect.bottom),
        )

    def bounds(self) -> Rect:
        xs = [x for sub in self.subpaths for x, _ in sub]
        ys = [y for sub in self.subpaths for _, y in sub]
        if not xs:
            return Rect(0.0, 0.0, 0.0, 0.0)
        return Rect(min(xs), min(ys), max(xs), max(ys))


class PathBuilder:
    def __init__(self) -> None:
        self._subpaths: list[tuple[Point, ...]] = []
        self._current: list[Point] = []

    def move_to(self, x: float, y: float) -> PathBuilder:
        self._flush()
        self._current = [(float(x), float(y))]
        return self

    def line_to(self, x: float, y: float) -> PathBuilder:
        if not self._current:
            self._current = [(0.0, 0.0)]
        self._current.append((float(x), float(y)))
        return self

    def close(self) -> PathBuilder:
        self._flush()
        return self

    def build(self) -> Path:
        self._flush()
        return Path(tuple(self._subpaths))

    def _flush(self) -> None:
        if len(self._current) >= 3:
            self._subpaths.append(tuple(self._current))
        self._current = []


@dataclass(frozen=True)
class LinearGradient:
    start: Offset
    end: Offset
    colors: tuple[Color, ...]
    stops: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.colors) != len(self.stops):
            raise ValueError("colors and stops must have the same length")


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class SaveLayer:
    bounds: Rect
    opacity: float | None = None


@dataclass(frozen=True)
class Restore:
    pass


@dataclass(frozen=True)
class Translate:
    dx: float
    dy: float


@dataclass(frozen=True)
class Scale:
    sx: float
    sy: float


@dataclass(frozen=True)
class ClipPath:
    path: Path


@dataclass(frozen=True)
class DrawPath:
    path: Path
    color: Color


@dataclass(frozen=True)
class DrawText:
    layout: TextLayout
    offset: Offset = Offset(0.0, 0.0)


@dataclass(frozen=True)
class DrawRect:
    rect: Rect
    shader: LinearGradient
    blend_mode: str = "modulate"


Command = Union[Save, SaveLayer, Restore, Translate, Scale, ClipPath, DrawPath, DrawText, DrawRect]


@dataclass
class RecordingCanvas:
    """Collects drawing commands instead of rasterizing them.

    Prefer :meth:`saved` and :meth:`layer` over bare ``save``/``restore`` so
    state is restored on every exit path.
    """

    commands: list[Command] = field(default_factory=list)
    depth: int = 0

    def save(self) -> None:
        self.commands.append(Save())
        self.depth += 1

    def save_layer(self, bounds: Rect, opacity: float | None = None) -> None:
        self.commands.append(SaveLayer(bounds, opacity))
        self.depth += 1

    def restore(self) -> None:
        if self.depth == 0:
            raise RuntimeError("restore() without matching save")
        self.commands.append(Restore())
        self.depth -= 1

    @contextmanager
    def saved(self) -> Iterator[RecordingCanvas]:
        self.save()
        try:
            yield self
        finally:
            self.restore()

    @contextmanager
    def layer(self, bounds: Rect, opacity: float | None = None) -> Iterator[RecordingCanvas]:
        self.save_layer(bounds, opacity)
        try:
            yield self
        finally:
            self.restore()

    def translate(self, dx: float, dy: float) -> None:
        self.commands.append(Translate(dx, dy))

    def scale(self, sx: float, sy: float | None = None) -> None:
        self.commands.append(Scale(sx, sx if sy is None else sy))

    def clip_path(self, path: Path) -> None:
        self.commands.append(ClipPath(path))

    def draw_path(self, path: Path, color: Color) -> None:
        self.commands.append(DrawPath(path, color))

    def draw_text(self, layout: TextLayout, offset: Offset = Offset(0.0, 0.0)) -> None:
        self.commands.append(DrawText(layout, offset))

    def draw_rect(self, rect: Rect, shader: LinearGradient, blend_mode: str = "modulate") -> None:
        self.commands.append(DrawRect(rect, shader, blend_mode))
