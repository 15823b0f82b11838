"""Immutable geometry and color value types used by the logo painter."""

from __future__ import annotations

import re
from dataclasses import dataclass


_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def lerp_double(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int
    alpha: int = 255

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB`` or ``#AARRGGBB``."""
        match = _HEX_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid color: {value!r}")
        digits = match.group(1)
        if len(digits) == 6:
            digits = "FF" + digits
        a, r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4, 6))
        return cls(r, g, b, a)

    def to_hex(self) -> str:
        return f"#{self.alpha:02X}{self.red:02X}{self.green:02X}{self.blue:02X}"

    def with_opacity(self, opacity: float) -> Color:
        return Color(self.red, self.green, self.blue, int(round(255 * clamp(opacity, 0.0, 1.0))))

    @property
    def opacity(self) -> float:
        return self.alpha / 255.0

    def rgba(self) -> tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)

    @staticmethod
    def lerp(a: Color, b: Color, t: float) -> Color:
        def channel(x: int, y: int) -> int:
            return int(clamp(int(lerp_double(x, y, t)), 0, 255))

        return Color(
            channel(a.red, b.red),
            channel(a.green, b.green),
            channel(a.blue, b.blue),
            channel(a.alpha, b.alpha),
        )


WHITE = Color(255, 255, 255, 255)
TRANSPARENT_WHITE = Color(255, 255, 255, 0)


@dataclass(frozen=True)
class Offset:
    dx: float
    dy: float

    def __add__(self, other: Offset) -> Offset:
        return Offset(self.dx + other.dx, self.dy + other.dy)


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    @property
    def shortest_side(self) -> float:
        return min(abs(self.width), abs(self.height))


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_ltwh(cls, left: float, top: float, width: float, height: float) -> Rect:
        return cls(left, top, left + width, top + height)

    @classmethod
    def from_offset_size(cls, offset: Offset, size: Size) -> Rect:
        return cls.from_ltwh(offset.dx, offset.dy, size.width, size.height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def top_left(self) -> Offset:
        return Offset(self.left, self.top)

    @property
    def center(self) -> Offset:
        return Offset(self.left + self.width / 2.0, self.top + self.height / 2.0)

    def inflate(self, delta: float) -> Rect:
        return Rect(self.left - delta, self.top - delta, self.right + delta, self.bottom + delta)

    def shift(self, offset: Offset) -> Rect:
        return Rect(self.left + offset.dx, self.top + offset.dy, self.right + offset.dx, self.bottom + offset.dy)

    def is_close_to(self, other: Rect, tolerance: float = 1e-6) -> bool:
        return all(
            abs(x - y) <= tolerance
            for x, y in zip(
                (self.left, self.top, self.right, self.bottom),
                (other.left, other.top, other.right, other.bottom),
            )
        )

    @staticmethod
    def lerp(a: Rect, b: Rect, t: float) -> Rect:
        return Rect(
            lerp_double(a.left, b.left, t),
            lerp_double(a.top, b.top, t),
            lerp_double(a.right, b.right, t),
            lerp_double(a.bottom, b.bottom, t),
        )


@dataclass(frozen=True)
class EdgeInsets:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def all(cls, value: float) -> EdgeInsets:
        return cls(value, value, value, value)

    def __mul__(self, factor: float) -> EdgeInsets:
        return EdgeInsets(self.left * factor, self.top * factor, self.right * factor, self.bottom * factor)

    @property
    def top_left(self) -> Offset:
        return Offset(self.left, self.top)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom

    def deflate_size(self, size: Size) -> Size:
        return Size(size.width - self.horizontal, size.height - self.vertical)

    @staticmethod
    def lerp(a: EdgeInsets, b: EdgeInsets, t: float) -> EdgeInsets:
        return EdgeInsets(
            lerp_double(a.left, b.left, t),
            lerp_double(a.top, b.top, t),
            lerp_double(a.right, b.right, t),
            lerp_double(a.bottom, b.bottom, t),
        )


EdgeInsets.ZERO = EdgeInsets()  # type: ignore[attr-defined]


def apply_contain_fit(source: Size, destination: Size) -> Size:
    """Scale ``source`` uniformly so it fits entirely inside ``destination``."""
    if source.is_empty or destination.is_empty:
        return Size(0.0, 0.0)
    scale = min(destination.width / source.width, destination.height / source.height)
    return Size(source.width * scale, source.height * scale)


def inscribe_center(size: Size, rect: Rect) -> Rect:
    left = rect.left + (rect.width - size.width) / 2.0
    top = rect.top + (rect.height - size.height) / 2.0
    return Rect.from_ltwh(left, top, size.width, size.height)
