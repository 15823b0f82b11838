"""Timer-driven cycling of the displayed logo style."""

from __future__ import annotations

from typing import Callable

from zeekr_logo import LogoStyle, next_style

from .logging_setup import get_logger

Listener = Callable[[LogoStyle], None]


class StyleNotifier:
    """Single-slot observable holding the style to display next."""

    def __init__(self, value: LogoStyle = LogoStyle.MARK_ONLY) -> None:
        self._value = value
        self._listeners: list[Listener] | None = []

    @property
    def disposed(self) -> bool:
        return self._listeners is None

    def _check_alive(self) -> list[Listener]:
        if self._listeners is None:
            raise RuntimeError("StyleNotifier used after dispose()")
        return self._listeners

    @property
    def value(self) -> LogoStyle:
        return self._value

    @value.setter
    def value(self, style: LogoStyle) -> None:
        listeners = self._check_alive()
        if style == self._value:
            return
        self._value = style
        for listener in list(listeners):
            listener(style)

    def add_listener(self, listener: Listener) -> None:
        self._check_alive().append(listener)

    def remove_listener(self, listener: Listener) -> None:
        listeners = self._check_alive()
        if listener in listeners:
            listeners.remove(listener)

    def dispose(self) -> None:
        self._listeners = None


class StyleCycler:
    """Publishes the next style into a notifier once per period.

    The host owns the actual timer and calls :meth:`tick`; :meth:`close`
    releases the notifier, after which ticks are ignored.
    """

    def __init__(self, notifier: StyleNotifier | None = None, period_s: float = 3.0) -> None:
        if period_s <= 0:
            raise ValueError("period_s must be positive")
        self.notifier = notifier or StyleNotifier()
        self.period_s = float(period_s)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def period_ms(self) -> int:
        return int(round(self.period_s * 1000))

    def tick(self) -> LogoStyle | None:
        if self._closed:
            return None
        style = next_style(self.notifier.value)
        self.notifier.value = style
        get_logger("core").debug(f"style -> {style.value}", extra={"event": "style_cycled", "style": style.value})
        return style

    def due_ticks(self, elapsed_s: float) -> int:
        if elapsed_s <= 0:
            return 0
        return int(elapsed_s // self.period_s)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.notifier.dispose()

    def __enter__(self) -> StyleCycler:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
