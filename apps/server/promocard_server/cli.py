"""CLI entrypoints for the promo card service, offline rendering, and asset checks."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from promocard_core import BackgroundResolver, build_doctor_payload, load_config
from promocard_core.logging_setup import configure_logging
from promocard_renderer import PromoCardError, Variant, render

from .app import build_assets, run_server


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _load(args: argparse.Namespace):
    return load_config(Path(args.config).expanduser() if args.config else None)


def cmd_serve(args: argparse.Namespace) -> int:
    cfg = _load(args)
    if args.host:
        cfg.server.host = args.host
    if args.port:
        cfg.server.port = args.port
    configure_logging(level=cfg.logging.level, keep_files=cfg.logging.keep_files, console=cfg.logging.console)
    return run_server(cfg)


def cmd_render(args: argparse.Namespace) -> int:
    cfg = _load(args)
    assets = build_assets(cfg)
    variant = Variant.from_highlight(args.highlight)
    out = Path(args.out).expanduser()
    try:
        if args.background:
            background = Path(args.background).expanduser().read_bytes()
        else:
            resolver = BackgroundResolver.from_config(cfg.background, assets=assets)
            background = resolver.resolve(args.background_url)

        data = render(args.text, variant, background, assets=assets)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
    except (PromoCardError, OSError) as exc:
        _print_json({"success": False, "error": str(exc), "error_type": type(exc).__name__})
        return 1

    _print_json({"success": True, "path": str(out.resolve()), "bytes": len(data), "variant": variant.kind.value})
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    payload = build_doctor_payload(build_assets(_load(args)))
    _print_json(payload)
    return 0 if payload["ok"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="promocard", description="Promotional card renderer and service")
    parser.add_argument("--config", default=None, help="Optional path to config.json")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_cmd = sub.add_parser("serve", help="Run HTTP render service")
    serve_cmd.add_argument("--host", default=None)
    serve_cmd.add_argument("--port", type=int, default=None)
    serve_cmd.set_defaults(func=cmd_serve)

    render_cmd = sub.add_parser("render", help="Render one card to a PNG file")
    render_cmd.add_argument("--text", required=True, help="Caption text")
    render_cmd.add_argument("--highlight", default=None, help="Highlight text; selects the highlight template")
    source = render_cmd.add_mutually_exclusive_group()
    source.add_argument("--background", default=None, help="Local background image path")
    source.add_argument("--background-url", default=None, help="Remote background image URL")
    render_cmd.add_argument("--out", default="promocard.png")
    render_cmd.set_defaults(func=cmd_render)

    doctor_cmd = sub.add_parser("doctor", help="Check bundled template assets")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
