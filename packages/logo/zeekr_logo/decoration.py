"""Logo styles and the immutable, blendable logo decoration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .geometry import WHITE, Color, EdgeInsets, clamp, lerp_double

if TYPE_CHECKING:  # pragma: no cover
    from .painter import LogoPainter


class LogoStyle(str, Enum):
    """Possible ways to draw the logo."""

    MARK_ONLY = "markOnly"
    HORIZONTAL = "horizontal"
    STACKED = "stacked"

    @classmethod
    def parse(cls, value: str | LogoStyle) -> LogoStyle:
        if isinstance(value, LogoStyle):
            return value
        for style in cls:
            if value in (style.value, style.name, style.name.lower()):
                return style
        raise ValueError(f"Unknown logo style: {value!r}")


_STYLE_POSITION = {
    LogoStyle.MARK_ONLY: 0.0,
    LogoStyle.HORIZONTAL: 1.0,
    LogoStyle.STACKED: -1.0,
}

_NEXT_STYLE = {
    LogoStyle.MARK_ONLY: LogoStyle.HORIZONTAL,
    LogoStyle.HORIZONTAL: LogoStyle.STACKED,
    LogoStyle.STACKED: LogoStyle.MARK_ONLY,
}


def next_style(style: LogoStyle) -> LogoStyle:
    return _NEXT_STYLE[style]


@dataclass(frozen=True, eq=False)
class LogoDecoration:
    """An immutable description of how to paint the logo.

    ``position`` is -1.0 for stacked, 1.0 for horizontal and 0.0 for the mark
    alone. It is derived from ``style`` unless given explicitly, which only
    :func:`blend` does to represent in-between states. ``style`` itself is
    informational; painting only looks at ``position``.
    """

    color: Color = WHITE
    text_color: Color = WHITE
    style: LogoStyle = LogoStyle.MARK_ONLY
    margin: EdgeInsets = field(default_factory=EdgeInsets)
    position: float | None = None
    opacity: float = 1.0

    def __post_init__(self) -> None:
        if self.position is None:
            object.__setattr__(self, "position", _STYLE_POSITION[self.style])
        assert self.debug_assert_is_valid()

    def debug_assert_is_valid(self) -> bool:
        assert self.position is not None and math.isfinite(self.position), f"position must be finite: {self.position}"
        assert 0.0 <= self.opacity <= 1.0, f"opacity out of range: {self.opacity}"
        return True

    @property
    def in_transition(self) -> bool:
        return self.opacity != 1.0 or self.position not in (-1.0, 0.0, 1.0)

    @property
    def is_complex(self) -> bool:
        return not self.in_transition

    def _key(self) -> tuple[Any, ...]:
        return (self.color, self.text_color, self.position, self.opacity)

    # Equality ignores margin and style.
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, LogoDecoration):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def lerp_from(self, a: LogoDecoration | None, t: float) -> LogoDecoration | None:
        return blend(a, self, t)

    def lerp_to(self, b: LogoDecoration | None, t: float) -> LogoDecoration | None:
        return blend(self, b, t)

    def create_painter(self, font_loader=None) -> LogoPainter:
        from .painter import LogoPainter

        return LogoPainter(self, font_loader=font_loader)

    def describe(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "color": self.color.to_hex(),
            "textColor": self.text_color.to_hex(),
            "style": self.style.value,
        }
        if self.in_transition:
            info["transition"] = f"transition {self.position:.1f}:{self.opacity:.1f}"
        return info


def blend(a: LogoDecoration | None, b: LogoDecoration | None, t: float) -> LogoDecoration | None:
    """Linearly interpolate between two logo decorations.

    Color and style are interpolated continuously. If both values are None
    this returns None; if one is None the result scales the other's opacity
    and margin. Only opacity is clamped, so ``position`` may overshoot with
    curves that leave [0, 1].
    """
    if a is b:
        return a
    if a is None:
        assert b is not None
        return LogoDecoration(
            color=b.color,
            text_color=b.text_color,
            style=b.style,
            margin=b.margin * t,
            position=b.position,
            opacity=b.opacity * clamp(t, 0.0, 1.0),
        )
    if b is None:
        return LogoDecoration(
            color=a.color,
            text_color=a.text_color,
            style=a.style,
            margin=a.margin * t,
            position=a.position,
            opacity=a.opacity * clamp(1.0 - t, 0.0, 1.0),
        )
    if t == 0.0:
        return a
    if t == 1.0:
        return b
    return LogoDecoration(
        color=Color.lerp(a.color, b.color, t),
        text_color=Color.lerp(a.text_color, b.text_color, t),
        style=a.style if t < 0.5 else b.style,
        margin=EdgeInsets.lerp(a.margin, b.margin, t),
        position=lerp_double(a.position, b.position, t),  # type: ignore[arg-type]
        opacity=clamp(lerp_double(a.opacity, b.opacity, t), 0.0, 1.0),
    )
