"""Implicit animation of the logo between decorations."""

from __future__ import annotations

import logging
import time
from typing import Callable

from PIL import Image

from .curves import FAST_OUT_SLOW_IN, Curve
from .decoration import LogoDecoration, LogoStyle, blend
from .geometry import WHITE, Color
from .painter import LogoPainter
from .raster import render_logo
from .text import FontLoader

logger = logging.getLogger("zeekr.logo")

DEFAULT_DURATION_S = 0.75
DEFAULT_AMBIENT_SIZE = 24.0

Clock = Callable[[], float]


class LogoAnimator:
    """Drives a transition from the current value to a new target.

    Retargeting mid-transition starts from the currently blended value, so
    the logo never jumps.
    """

    def __init__(
        self,
        target: LogoDecoration,
        duration_s: float = DEFAULT_DURATION_S,
        curve: Curve = FAST_OUT_SLOW_IN,
        clock: Clock = time.monotonic,
    ) -> None:
        self.duration_s = max(0.0, float(duration_s))
        self.curve = curve
        self._clock = clock
        self._begin: LogoDecoration | None = target
        self._end: LogoDecoration | None = target
        self._started_at = clock() - self.duration_s

    @property
    def target(self) -> LogoDecoration | None:
        return self._end

    def progress(self) -> float:
        if self.duration_s == 0.0:
            return 1.0
        elapsed = self._clock() - self._started_at
        return max(0.0, min(1.0, elapsed / self.duration_s))

    @property
    def is_animating(self) -> bool:
        return self.progress() < 1.0

    def value(self) -> LogoDecoration | None:
        return blend(self._begin, self._end, self.curve.transform(self.progress()))

    def retarget(self, target: LogoDecoration | None) -> bool:
        if target == self._end:
            return False
        self._begin = self.value()
        self._end = target
        self._started_at = self._clock()
        logger.debug("logo transition started", extra={"event": "logo_retarget"})
        return True


class AnimatedLogo:
    """The logo as a view component: configuration in, frames out."""

    def __init__(
        self,
        color: Color = WHITE,
        text_color: Color = WHITE,
        style: LogoStyle = LogoStyle.MARK_ONLY,
        duration_s: float = DEFAULT_DURATION_S,
        curve: Curve = FAST_OUT_SLOW_IN,
        size: float | None = None,
        clock: Clock = time.monotonic,
        font_loader: FontLoader | None = None,
    ) -> None:
        self.color = color
        self.text_color = text_color
        self.style = style
        self.size = size
        self._font_loader = font_loader
        self._painter: LogoPainter | None = None
        self.animator = LogoAnimator(self.decoration(), duration_s=duration_s, curve=curve, clock=clock)

    def decoration(self) -> LogoDecoration:
        return LogoDecoration(color=self.color, text_color=self.text_color, style=self.style)

    def update(
        self,
        color: Color | None = None,
        text_color: Color | None = None,
        style: LogoStyle | None = None,
    ) -> bool:
        if color is not None:
            self.color = color
        if text_color is not None:
            self.text_color = text_color
        if style is not None:
            self.style = style
        return self.animator.retarget(self.decoration())

    def resolve_size(self, ambient_size: float | None = None) -> float:
        if self.size is not None:
            return self.size
        return DEFAULT_AMBIENT_SIZE if ambient_size is None else ambient_size

    @property
    def is_animating(self) -> bool:
        return self.animator.is_animating

    def painter(self) -> LogoPainter | None:
        current = self.animator.value()
        if current is None:
            self._painter = None
        elif self._painter is None or self._painter.config != current:
            self._painter = LogoPainter(current, font_loader=self._font_loader)
        return self._painter

    def render(
        self,
        width: int,
        height: int,
        supersample: int = 1,
        background: Color | None = None,
    ) -> Image.Image:
        painter = self.painter()
        if painter is None:
            fill = background.rgba() if background is not None else (0, 0, 0, 0)
            return Image.new("RGBA", (width, height), fill)
        return render_logo(
            painter.config,
            width,
            height,
            supersample=supersample,
            background=background,
            painter=painter,
        )
