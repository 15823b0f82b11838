"""Desktop app runtime: the home window hosting the cycling logo."""

from __future__ import annotations

import os
import sys
import time

from PySide6.QtCore import QObject, QRect, QSize, Qt, QTimer
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QApplication, QWidget

from zeekr_core import (
    AppConfig,
    FrameRateMeter,
    PerformanceController,
    PerformanceTargets,
    StyleCycler,
    StyleNotifier,
    load_config,
)
from zeekr_core.logging_setup import configure_logging, get_logger, install_crash_hooks, set_retention
from zeekr_logo import AnimatedLogo, Color, LogoStyle, font_loader_for, get_curve


def _pil_to_qimage(image) -> QImage:
    data = image.convert("RGBA").tobytes("raw", "RGBA")
    qimage = QImage(data, image.width, image.height, image.width * 4, QImage.Format.Format_RGBA8888)
    return qimage.copy()


class LogoWidget(QWidget):
    """Paints an :class:`AnimatedLogo` into its whole area."""

    def __init__(self, logo: AnimatedLogo, supersample: int = 2, ambient_size: float = 24.0, parent=None) -> None:
        super().__init__(parent)
        self.logo = logo
        self.supersample = supersample
        self.ambient_size = ambient_size
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.frames_painted = 0

    def sizeHint(self) -> QSize:
        side = int(round(self.logo.resolve_size(self.ambient_size)))
        return QSize(side, side)

    def paintEvent(self, _event) -> None:
        ratio = self.devicePixelRatioF()
        width = max(1, int(self.width() * ratio))
        height = max(1, int(self.height() * ratio))
        image = _pil_to_qimage(self.logo.render(width, height, supersample=self.supersample))
        image.setDevicePixelRatio(ratio)
        painter = QPainter(self)
        try:
            painter.drawImage(0, 0, image)
        finally:
            painter.end()
        self.frames_painted += 1


class HomeView(QWidget):
    """Full-window view with the logo centered at a fraction of its size."""

    def __init__(self, logo_widget: LogoWidget, background: Color, width_factor: float, height_factor: float) -> None:
        super().__init__()
        self.width_factor = width_factor
        self.height_factor = height_factor
        self.background = QColor(background.red, background.green, background.blue, background.alpha)
        self.logo_widget = logo_widget
        logo_widget.setParent(self)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        w = int(self.width() * self.width_factor)
        h = int(self.height() * self.height_factor)
        self.logo_widget.setGeometry(QRect((self.width() - w) // 2, (self.height() - h) // 2, w, h))

    def paintEvent(self, _event) -> None:
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self.background)
        finally:
            painter.end()


class LogoController(QObject):
    """Owns the style cycle timer, the frame timer and the performance budget."""

    def __init__(self, cfg: AppConfig, logo_widget: LogoWidget) -> None:
        super().__init__()
        self.config = cfg
        self.logger = get_logger("app")
        self.logo_widget = logo_widget
        self.logo = logo_widget.logo
        self.cycler = StyleCycler(StyleNotifier(self.logo.style), period_s=cfg.animation.cycle_period_ms / 1000.0)
        self.cycler.notifier.add_listener(self._on_style)
        self.performance = PerformanceController(
            PerformanceTargets(
                cpu_percent_max=cfg.performance.cpu_percent_max,
                rss_mb_max=cfg.performance.rss_mb_max,
                fps_min=cfg.performance.fps_min,
                fps_max=cfg.performance.fps_max,
            )
        )
        self.meter = FrameRateMeter()

        self._frame_ms = cfg.animation.frame_interval_ms

        self._cycle_timer = QTimer(self)
        self._cycle_timer.timeout.connect(self.cycler.tick)
        self._cycle_timer.start(self.cycler.period_ms)

        self._frame_timer = QTimer(self)
        self._frame_timer.timeout.connect(self._on_frame)

        self._budget_timer = QTimer(self)
        self._budget_timer.timeout.connect(self._on_budget)
        self._budget_timer.start(1000)

    @property
    def timers(self) -> tuple[QTimer, QTimer, QTimer]:
        return (self._cycle_timer, self._frame_timer, self._budget_timer)

    def _start_frames(self) -> None:
        self.meter.start(time.perf_counter())
        if not self._frame_timer.isActive():
            self._frame_timer.start(self._frame_ms)

    def _stop_frames(self) -> None:
        self._frame_timer.stop()
        self.meter.stop(time.perf_counter())

    def _on_style(self, style: LogoStyle) -> None:
        self.logger.info(f"style -> {style.value}", extra={"event": "style_changed", "style": style.value})
        if self.logo.update(style=style):
            self._start_frames()

    def _on_frame(self) -> None:
        self.logo_widget.update()
        self.meter.frame()
        if not self.logo.is_animating:
            self._stop_frames()
            # One more paint to land exactly on the settled decoration.
            self.logo_widget.update()

    def _on_budget(self) -> None:
        fps = self.meter.take(time.perf_counter())
        if fps is None:
            return
        budget = self.performance.sample(
            fps,
            self._frame_ms,
            self.logo_widget.supersample,
            preferred_frame_ms=self.config.animation.frame_interval_ms,
            preferred_supersample=self.config.render.supersample,
        )
        if budget.warning:
            self.logger.info(
                f"render budget {budget.warning}: fps={budget.fps:.1f} cpu={budget.cpu_percent:.1f}",
                extra={"event": "render_budget"},
            )
        self.logo_widget.supersample = budget.recommended_supersample
        if budget.recommended_frame_ms != self._frame_ms:
            self._frame_ms = budget.recommended_frame_ms
            if self._frame_timer.isActive():
                self._frame_timer.setInterval(self._frame_ms)

    def shutdown(self) -> None:
        self._cycle_timer.stop()
        self._stop_frames()
        self._budget_timer.stop()
        self.cycler.close()
        self.logger.info("logo controller stopped", extra={"event": "controller_shutdown"})


def build_home(cfg: AppConfig) -> tuple[HomeView, LogoController]:
    logo = AnimatedLogo(
        color=Color.from_hex(cfg.logo.color),
        text_color=Color.from_hex(cfg.logo.text_color),
        style=LogoStyle.parse(cfg.logo.style),
        duration_s=cfg.animation.duration_ms / 1000.0,
        curve=get_curve(cfg.animation.curve),
        size=cfg.logo.size,
        font_loader=font_loader_for(cfg.render.font_path),
    )
    logo_widget = LogoWidget(logo, supersample=cfg.render.supersample, ambient_size=cfg.ui.ambient_icon_size)
    home = HomeView(
        logo_widget,
        background=Color.from_hex(cfg.render.background),
        width_factor=cfg.ui.width_factor,
        height_factor=cfg.ui.height_factor,
    )
    controller = LogoController(cfg, logo_widget)
    return home, controller


def run_gui() -> int:
    # Logging first, so config fallbacks reach the log file.
    configure_logging()
    cfg = load_config()
    set_retention(cfg.diagnostics.keep_log_files)
    install_crash_hooks()
    logger = get_logger()

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)

    app = QApplication(sys.argv)
    app.setApplicationName("ZEEKR")

    home, controller = build_home(cfg)
    app.aboutToQuit.connect(controller.shutdown)
    home.setWindowTitle("ZEEKR")
    home.resize(cfg.ui.window_width, cfg.ui.window_height)
    home.show()

    exit_code = app.exec()
    logger.info("app shutdown", extra={"event": "shutdown", "exit_code": int(exit_code)})
    return int(exit_code)
