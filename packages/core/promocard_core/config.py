"""Service settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 14400


@dataclass
class BackgroundConfig:
    fetch_timeout_s: int = 30
    cache_entries: int = 128
    cache_ttl_s: int = 0
    max_download_mb: int = 20


@dataclass
class AssetsConfig:
    directory: str | None = None


@dataclass
class LoggingConfig:
    level: str = "INFO"
    keep_files: int = 7
    console: bool = True


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    server: ServerConfig = field(default_factory=ServerConfig)
    background: BackgroundConfig = field(default_factory=BackgroundConfig)
    assets: AssetsConfig = field(default_factory=AssetsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "PromoCard"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "PromoCard"
    return Path.home() / ".config" / "promocard"


def config_path() -> Path:
    override = os.environ.get("PROMOCARD_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _clamp(value: Any, low: int, high: int, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(low, min(high, number))


def _normalize_server(cfg: AppConfig) -> None:
    cfg.server.host = str(cfg.server.host or ServerConfig.host)
    cfg.server.port = _clamp(cfg.server.port, 1, 65535, ServerConfig.port)


def _normalize_background(cfg: AppConfig) -> None:
    bg = cfg.background
    bg.fetch_timeout_s = _clamp(bg.fetch_timeout_s, 1, 300, BackgroundConfig.fetch_timeout_s)
    bg.cache_entries = _clamp(bg.cache_entries, 0, 4096, BackgroundConfig.cache_entries)
    bg.cache_ttl_s = _clamp(bg.cache_ttl_s, 0, 7 * 24 * 3600, BackgroundConfig.cache_ttl_s)
    bg.max_download_mb = _clamp(bg.max_download_mb, 1, 200, BackgroundConfig.max_download_mb)


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level or "INFO").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = "INFO"
    cfg.logging.level = level
    cfg.logging.keep_files = _clamp(cfg.logging.keep_files, 2, 90, LoggingConfig.keep_files)
    cfg.logging.console = bool(cfg.logging.console)


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=CONFIG_VERSION,
        server=_merge(ServerConfig, raw.get("server", {})),
        background=_merge(BackgroundConfig, raw.get("background", {})),
        assets=_merge(AssetsConfig, raw.get("assets", {})),
        logging=_merge(LoggingConfig, raw.get("logging", {})),
    )

    _normalize_server(cfg)
    _normalize_background(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
