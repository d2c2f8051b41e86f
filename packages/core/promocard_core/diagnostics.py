"""Deployment checks for the bundled template assets."""

from __future__ import annotations

import hashlib
import platform
from datetime import datetime, timezone
from importlib import metadata
from typing import Any

from promocard_renderer.assets import AssetProvider
from promocard_renderer.compositor import decode_image
from promocard_renderer.errors import PromoCardError
from promocard_renderer.layouts import BODY_STYLE, HIGHLIGHT_STYLE, REQUIRED_ASSETS
from promocard_renderer.typefaces import load_typeface


_FONT_STYLES = {BODY_STYLE.asset: BODY_STYLE, HIGHLIGHT_STYLE.asset: HIGHLIGHT_STYLE}


def _version(dist: str) -> str | None:
    try:
        return metadata.version(dist)
    except metadata.PackageNotFoundError:
        return None


def check_asset(assets: AssetProvider, name: str) -> dict[str, Any]:
    try:
        data = assets.get_asset(name)
    except PromoCardError as exc:
        return {"name": name, "ok": False, "error": str(exc)}

    entry: dict[str, Any] = {
        "name": name,
        "bytes": len(data),
        "sha256": hashlib.sha256(data).hexdigest(),
    }
    try:
        if name in _FONT_STYLES:
            font = load_typeface(assets, _FONT_STYLES[name])
            entry["family"] = " ".join(part for part in font.getname() if part)
        else:
            image = decode_image(data)
            entry["size"] = [image.width, image.height]
            entry["mode"] = image.mode
    except PromoCardError as exc:
        entry.update(ok=False, error=str(exc))
        return entry
    entry["ok"] = True
    return entry


def build_doctor_payload(assets: AssetProvider) -> dict[str, Any]:
    checks = [check_asset(assets, name) for name in REQUIRED_ASSETS]
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "pillow": _version("Pillow"),
        "asset_dir": str(assets.directory),
        "assets": checks,
        "ok": all(c["ok"] for c in checks),
    }
