"""Core service plumbing: settings, logging, background resolution, and diagnostics."""

from .background import BackgroundFetchError, BackgroundResolver, ResponseCache
from .config import AppConfig, load_config, save_config
from .diagnostics import build_doctor_payload, check_asset

__all__ = [
    "AppConfig",
    "BackgroundFetchError",
    "BackgroundResolver",
    "ResponseCache",
    "build_doctor_payload",
    "check_asset",
    "load_config",
    "save_config",
]
