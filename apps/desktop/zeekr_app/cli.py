"""CLI entrypoints for the ZEEKR logo app: desktop window, frame export, benchmarks."""

from __future__ import annotations

import argparse
import json
import math
import time
from dataclasses import asdict
from pathlib import Path

from zeekr_core import PerformanceController, PerformanceTargets, StyleCycler, load_config, save_config
from zeekr_core.config import AppConfig, config_path
from zeekr_core.logging_setup import configure_logging, get_logger
from zeekr_logo import (
    AnimatedLogo,
    Color,
    EdgeInsets,
    LogoDecoration,
    LogoStyle,
    Rect,
    RecordingCanvas,
    Rasterizer,
    font_loader_for,
    get_curve,
    list_curves,
    next_style,
)

_STYLE_CHOICES = [style.value for style in LogoStyle]


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _color_arg(value: str | None, fallback: str) -> Color:
    return Color.from_hex(value or fallback)


def cmd_run(_args: argparse.Namespace) -> int:
    from .app import run_gui

    return run_gui()


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    if not 0.0 <= args.opacity <= 1.0:
        raise ValueError("--opacity must be within 0..1")
    if args.position is not None and not math.isfinite(args.position):
        raise ValueError("--position must be finite")
    if args.width <= 0 or args.height <= 0:
        raise ValueError("--width and --height must be positive")
    decoration = LogoDecoration(
        color=_color_arg(args.color, cfg.logo.color),
        text_color=_color_arg(args.text_color, cfg.logo.text_color),
        style=LogoStyle.parse(args.style or cfg.logo.style),
        margin=EdgeInsets.all(args.margin),
        position=args.position,
        opacity=args.opacity,
    )
    painter = decoration.create_painter(font_loader=font_loader_for(cfg.render.font_path))
    canvas = RecordingCanvas()
    painter.paint(canvas, Rect(0.0, 0.0, float(args.width), float(args.height)))

    supersample = args.supersample or cfg.render.supersample
    background = Color.from_hex(args.background) if args.background else None
    image = Rasterizer(args.width, args.height, supersample=supersample).render(canvas.commands, background=background)

    out = Path(args.out).expanduser()
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out)
    _print_json(
        {
            "success": True,
            "out": str(out),
            "width": args.width,
            "height": args.height,
            "decoration": decoration.describe(),
            "position": decoration.position,
            "opacity": decoration.opacity,
            "commands": len(canvas.commands),
        }
    )
    return 0


def _build_logo(cfg: AppConfig, now: list[float]) -> AnimatedLogo:
    return AnimatedLogo(
        color=Color.from_hex(cfg.logo.color),
        text_color=Color.from_hex(cfg.logo.text_color),
        style=LogoStyle.parse(cfg.logo.style),
        duration_s=cfg.animation.duration_ms / 1000.0,
        curve=get_curve(cfg.animation.curve),
        size=cfg.logo.size,
        clock=lambda: now[0],
        font_loader=font_loader_for(cfg.render.font_path),
    )


def cmd_animate(args: argparse.Namespace) -> int:
    cfg = load_config()
    if args.curve:
        cfg.animation.curve = args.curve
    if args.fps <= 0 or args.seconds <= 0:
        raise ValueError("--fps and --seconds must be positive")

    # Virtual clock: frames are sampled at exact multiples of 1/fps.
    now = [0.0]
    logo = _build_logo(cfg, now)
    background = Color.from_hex(cfg.render.background)
    frames = []
    with StyleCycler(period_s=cfg.animation.cycle_period_ms / 1000.0) as cycler:
        cycler.notifier.value = logo.style
        cycler.notifier.add_listener(lambda style: logo.update(style=style))
        ticks = 0
        total = int(round(args.seconds * args.fps))
        for index in range(total):
            now[0] = index / args.fps
            while ticks < cycler.due_ticks(now[0]):
                cycler.tick()
                ticks += 1
            frames.append(logo.render(args.size, args.size, supersample=cfg.render.supersample, background=background))

    written: list[str] = []
    if args.gif:
        out = Path(args.gif).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        rgb = [frame.convert("RGB") for frame in frames]
        rgb[0].save(out, save_all=True, append_images=rgb[1:], duration=int(1000 / args.fps), loop=0)
        written.append(str(out))
    else:
        out_dir = Path(args.out_dir).expanduser()
        out_dir.mkdir(parents=True, exist_ok=True)
        for index, frame in enumerate(frames):
            path = out_dir / f"frame-{index:05d}.png"
            frame.save(path)
            written.append(str(path))

    get_logger().info(f"exported {len(frames)} frames", extra={"event": "animate_export"})
    _print_json(
        {
            "success": True,
            "frames": len(frames),
            "style_changes": ticks,
            "outputs": written[:3] + (["..."] if len(written) > 3 else []),
        }
    )
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = load_config()
    perf = PerformanceController(
        PerformanceTargets(
            cpu_percent_max=cfg.performance.cpu_percent_max,
            rss_mb_max=cfg.performance.rss_mb_max,
            fps_min=cfg.performance.fps_min,
            fps_max=cfg.performance.fps_max,
        )
    )
    now = [0.0]
    logo = _build_logo(cfg, now)
    supersample = cfg.render.supersample
    frame_ms = cfg.animation.frame_interval_ms

    frames = 0
    samples = []
    start = time.perf_counter()
    deadline = start + args.seconds
    last_sample = start
    sample_frames = 0
    while time.perf_counter() < deadline:
        now[0] = time.perf_counter() - start
        if not logo.is_animating:
            logo.update(style=next_style(logo.style))
        logo.render(args.size, args.size, supersample=supersample)
        frames += 1
        sample_frames += 1

        tick = time.perf_counter()
        if tick - last_sample >= 1.0:
            budget = perf.sample(
                sample_frames / (tick - last_sample),
                frame_ms,
                supersample,
                preferred_frame_ms=cfg.animation.frame_interval_ms,
                preferred_supersample=cfg.render.supersample,
            )
            supersample = budget.recommended_supersample
            frame_ms = budget.recommended_frame_ms
            samples.append(asdict(budget))
            last_sample = tick
            sample_frames = 0

    elapsed = max(time.perf_counter() - start, 1e-9)
    fps_actual = frames / elapsed
    cpu_max = max((s["cpu_percent"] for s in samples), default=0.0)
    rss_max = max((s["rss_mb"] for s in samples), default=0.0)

    pass_cpu = cpu_max <= cfg.performance.cpu_percent_max
    pass_mem = rss_max <= cfg.performance.rss_mb_max
    pass_fps = fps_actual >= cfg.performance.fps_min

    _print_json(
        {
            "seconds": args.seconds,
            "size": args.size,
            "frames": frames,
            "fps": fps_actual,
            "budget": {
                "max_observed": {"cpu_percent": cpu_max, "rss_mb": rss_max, "fps": fps_actual},
                "recommended": {"frame_ms": frame_ms, "supersample": supersample},
                "pass": bool(pass_cpu and pass_mem and pass_fps),
                "checks": {"cpu": pass_cpu, "memory": pass_mem, "fps": pass_fps},
            },
        }
    )
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    if args.config_cmd == "path":
        _print_json({"path": str(config_path())})
    elif args.config_cmd == "reset":
        path = save_config(AppConfig())
        _print_json({"success": True, "path": str(path)})
    else:
        _print_json(asdict(load_config()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zeekr-logo", description="Animated ZEEKR logo app and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Run desktop app")
    run_cmd.set_defaults(func=cmd_run)

    render_cmd = sub.add_parser("render", help="Render a single logo frame to an image")
    render_cmd.add_argument("--style", choices=_STYLE_CHOICES, default=None)
    render_cmd.add_argument("--position", type=float, default=None, help="Override the style position (-1..1)")
    render_cmd.add_argument("--opacity", type=float, default=1.0)
    render_cmd.add_argument("--width", type=int, default=446)
    render_cmd.add_argument("--height", type=int, default=112)
    render_cmd.add_argument("--margin", type=float, default=0.0)
    render_cmd.add_argument("--color", default=None, help="#RRGGBB or #AARRGGBB")
    render_cmd.add_argument("--text-color", default=None, help="#RRGGBB or #AARRGGBB")
    render_cmd.add_argument("--background", default=None, help="Optional opaque background color")
    render_cmd.add_argument("--supersample", type=int, default=None)
    render_cmd.add_argument("--out", required=True)
    render_cmd.set_defaults(func=cmd_render)

    animate_cmd = sub.add_parser("animate", help="Export the cycling animation as frames or a GIF")
    animate_cmd.add_argument("--seconds", type=float, default=9.0)
    animate_cmd.add_argument("--fps", type=float, default=30.0)
    animate_cmd.add_argument("--size", type=int, default=256)
    animate_cmd.add_argument("--curve", choices=list_curves(), default=None)
    out_group = animate_cmd.add_mutually_exclusive_group(required=True)
    out_group.add_argument("--out-dir", default=None)
    out_group.add_argument("--gif", default=None)
    animate_cmd.set_defaults(func=cmd_animate)

    bench_cmd = sub.add_parser("benchmark", help="Measure render throughput against the budget")
    bench_cmd.add_argument("--seconds", type=int, default=10)
    bench_cmd.add_argument("--size", type=int, default=400)
    bench_cmd.set_defaults(func=cmd_benchmark)

    config_cmd = sub.add_parser("config", help="Inspect or reset settings")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("show", help="Print effective settings")
    config_sub.add_parser("path", help="Print settings file path")
    config_sub.add_parser("reset", help="Write default settings")
    config_cmd.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ValueError as exc:
        get_logger().error(f"{args.command} failed: {exc}", extra={"event": "cli_error"})
        _print_json({"success": False, "error": str(exc)})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
