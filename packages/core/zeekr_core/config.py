"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import math
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from zeekr_logo import Color, LogoDecoration, LogoStyle, get_curve
from zeekr_logo.curves import DEFAULT_CURVE_NAME, Curve

from .logging_setup import get_logger


CONFIG_VERSION = 2


@dataclass
class LogoConfig:
    color: str = "#FFFFFFFF"
    text_color: str = "#FFFFFFFF"
    style: str = LogoStyle.MARK_ONLY.value
    size: float | None = None

    def decoration(self) -> LogoDecoration:
        return LogoDecoration(
            color=Color.from_hex(self.color),
            text_color=Color.from_hex(self.text_color),
            style=LogoStyle.parse(self.style),
        )


@dataclass
class AnimationConfig:
    duration_ms: int = 750
    curve: str = DEFAULT_CURVE_NAME
    cycle_period_ms: int = 3000
    frame_interval_ms: int = 16

    def curve_fn(self) -> Curve:
        return get_curve(self.curve)


@dataclass
class RenderConfig:
    font_path: str | None = None
    supersample: int = 2
    background: str = "#FF000000"


@dataclass
class UiConfig:
    width_factor: float = 0.5
    height_factor: float = 0.5
    window_width: int = 800
    window_height: int = 600
    ambient_icon_size: float = 24.0


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class PerformanceConfig:
    cpu_percent_max: float = 25.0
    rss_mb_max: float = 300.0
    fps_min: float = 30.0
    fps_max: float = 60.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    logo: LogoConfig = field(default_factory=LogoConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


DEFAULT_CONFIG = AppConfig()


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "ZeekrLogo" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "ZeekrLogo" / "config.json"
    return Path.home() / ".config" / "zeekr-logo" / "config.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        _warn_invalid(dataclass_type.__name__, "*", raw)
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _warn_invalid(section: str, name: str, value: Any) -> None:
    get_logger("core").warning(
        f"config {section}.{name}={value!r} invalid, using default",
        extra={"event": "config_invalid"},
    )


def _bounded(section: Any, name: str, cast, low: float | None = None, high: float | None = None) -> None:
    """Coerce ``section.name`` to ``cast`` within [low, high], or reset it to its default."""
    default = getattr(type(section)(), name)
    value = getattr(section, name)
    if value is None and default is None:
        return
    try:
        if isinstance(value, bool):
            raise TypeError("booleans are not numbers")
        number = cast(value)
        if not math.isfinite(number):
            raise ValueError("not finite")
    except (TypeError, ValueError, OverflowError):
        _warn_invalid(type(section).__name__, name, value)
        number = default
        if number is None:
            setattr(section, name, None)
            return
    if low is not None:
        number = max(low, number)
    if high is not None:
        number = min(high, number)
    setattr(section, name, cast(number))


def _valid_hex(value: Any, fallback: str) -> str:
    try:
        return Color.from_hex(str(value)).to_hex()
    except ValueError:
        return fallback


def _normalize_logo(cfg: AppConfig) -> None:
    defaults = LogoConfig()
    cfg.logo.color = _valid_hex(cfg.logo.color, defaults.color)
    cfg.logo.text_color = _valid_hex(cfg.logo.text_color, defaults.text_color)
    try:
        cfg.logo.style = LogoStyle.parse(cfg.logo.style).value
    except (TypeError, ValueError):
        _warn_invalid("LogoConfig", "style", cfg.logo.style)
        cfg.logo.style = defaults.style
    _bounded(cfg.logo, "size", float, low=1.0)


def _normalize_animation(cfg: AppConfig) -> None:
    _bounded(cfg.animation, "duration_ms", int, 0, 10000)
    _bounded(cfg.animation, "cycle_period_ms", int, 250, 60000)
    _bounded(cfg.animation, "frame_interval_ms", int, 8, 100)
    try:
        get_curve(cfg.animation.curve)
    except (TypeError, ValueError):
        _warn_invalid("AnimationConfig", "curve", cfg.animation.curve)
        cfg.animation.curve = DEFAULT_CURVE_NAME


def _normalize_render(cfg: AppConfig) -> None:
    if cfg.render.font_path is not None and not isinstance(cfg.render.font_path, str):
        _warn_invalid("RenderConfig", "font_path", cfg.render.font_path)
        cfg.render.font_path = None
    _bounded(cfg.render, "supersample", int, 1, 4)
    cfg.render.background = _valid_hex(cfg.render.background, RenderConfig().background)


def _normalize_ui(cfg: AppConfig) -> None:
    _bounded(cfg.ui, "width_factor", float, 0.1, 1.0)
    _bounded(cfg.ui, "height_factor", float, 0.1, 1.0)
    _bounded(cfg.ui, "window_width", int, low=64)
    _bounded(cfg.ui, "window_height", int, low=64)
    _bounded(cfg.ui, "ambient_icon_size", float, low=1.0)


def _normalize_diagnostics(cfg: AppConfig) -> None:
    _bounded(cfg.diagnostics, "keep_log_files", int, 1, 365)


def _normalize_performance(cfg: AppConfig) -> None:
    _bounded(cfg.performance, "cpu_percent_max", float, low=1.0)
    _bounded(cfg.performance, "rss_mb_max", float, low=64.0)
    _bounded(cfg.performance, "fps_min", float, low=1.0)
    _bounded(cfg.performance, "fps_max", float, low=cfg.performance.fps_min)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return dict(value) if isinstance(value, dict) else {}


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    try:
        version = int(raw.get("config_version", 1))
    except (TypeError, ValueError):
        _warn_invalid("AppConfig", "config_version", raw.get("config_version"))
        version = 1
    data = dict(raw)

    if version < 2:
        # v1 kept logo settings flat at the top level.
        logo = _section(data, "logo")
        for key in ("color", "text_color", "style"):
            if key in data:
                logo.setdefault(key, data.pop(key))
        data["logo"] = logo
        animation = _section(data, "animation")
        if "duration_ms" in data:
            animation.setdefault("duration_ms", data.pop("duration_ms"))
        data["animation"] = animation

    data["config_version"] = CONFIG_VERSION
    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        get_logger("core").warning(f"config unreadable, using defaults: {exc}", extra={"event": "config_unreadable"})
        return AppConfig()
    if not isinstance(raw, dict):
        get_logger("core").warning(
            f"config root must be an object, got {type(raw).__name__}; using defaults",
            extra={"event": "config_invalid"},
        )
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=CONFIG_VERSION,
        logo=_merge(LogoConfig, data.get("logo", {})),
        animation=_merge(AnimationConfig, data.get("animation", {})),
        render=_merge(RenderConfig, data.get("render", {})),
        ui=_merge(UiConfig, data.get("ui", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_logo(cfg)
    _normalize_animation(cfg)
    _normalize_render(cfg)
    _normalize_ui(cfg)
    _normalize_diagnostics(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
