"""Easing curves for logo transitions."""

from __future__ import annotations

from dataclasses import dataclass


class Curve:
    """Maps animation progress in [0, 1] to an eased value.

    Endpoints are exact: ``transform(0) == 0`` and ``transform(1) == 1``.
    In between, a curve may leave [0, 1] (see ``easeOutBack``).
    """

    def transform(self, t: float) -> float:
        t = max(0.0, min(1.0, t))
        if t == 0.0 or t == 1.0:
            return t
        return self.transform_internal(t)

    def transform_internal(self, t: float) -> float:
        raise NotImplementedError

    def __call__(self, t: float) -> float:
        return self.transform(t)


class Linear(Curve):
    def transform_internal(self, t: float) -> float:
        return t

    def __repr__(self) -> str:
        return "Linear()"


@dataclass(frozen=True)
class Cubic(Curve):
    """Cubic Bezier through (0,0), (a,b), (c,d), (1,1)."""

    a: float
    b: float
    c: float
    d: float

    _error_bound = 0.001

    @staticmethod
    def _evaluate(a: float, b: float, m: float) -> float:
        return 3 * a * (1 - m) * (1 - m) * m + 3 * b * (1 - m) * m * m + m * m * m

    def transform_internal(self, t: float) -> float:
        start = 0.0
        end = 1.0
        while True:
            midpoint = (start + end) / 2
            estimate = self._evaluate(self.a, self.c, midpoint)
            if abs(t - estimate) < self._error_bound:
                return self._evaluate(self.b, self.d, midpoint)
            if estimate < t:
                start = midpoint
            else:
                end = midpoint


LINEAR = Linear()
EASE = Cubic(0.25, 0.1, 0.25, 1.0)
EASE_IN = Cubic(0.42, 0.0, 1.0, 1.0)
EASE_OUT = Cubic(0.0, 0.0, 0.58, 1.0)
EASE_IN_OUT = Cubic(0.42, 0.0, 0.58, 1.0)
FAST_OUT_SLOW_IN = Cubic(0.4, 0.0, 0.2, 1.0)
EASE_OUT_BACK = Cubic(0.175, 0.885, 0.32, 1.275)

CURVES: dict[str, Curve] = {
    "linear": LINEAR,
    "ease": EASE,
    "easeIn": EASE_IN,
    "easeOut": EASE_OUT,
    "easeInOut": EASE_IN_OUT,
    "fastOutSlowIn": FAST_OUT_SLOW_IN,
    "easeOutBack": EASE_OUT_BACK,
}

DEFAULT_CURVE_NAME = "fastOutSlowIn"


def list_curves() -> list[str]:
    return sorted(CURVES.keys())


def get_curve(name: str | None) -> Curve:
    if not name:
        return CURVES[DEFAULT_CURVE_NAME]
    try:
        return CURVES[name]
    except KeyError:
        raise ValueError(f"Unknown curve: {name!r}") from None
