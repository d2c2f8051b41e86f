"""Read-only provider for the bundled template assets (fonts, overlays, default background)."""

from __future__ import annotations

import threading
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .errors import AssetMissingError

STATIC_DIR = Path(__file__).resolve().parent / "static"


class AssetProvider:
    """Loads every file in ``directory`` once and serves immutable bytes by name."""

    def __init__(self, directory: Path | str = STATIC_DIR) -> None:
        self.directory = Path(directory)
        self._blobs: Mapping[str, bytes] | None = None
        self._lock = threading.Lock()

    def _load(self) -> Mapping[str, bytes]:
        blobs = self._blobs
        if blobs is not None:
            return blobs
        with self._lock:
            if self._blobs is None:
                found: dict[str, bytes] = {}
                if self.directory.is_dir():
                    for item in sorted(self.directory.iterdir()):
                        if item.is_file():
                            found[item.name] = item.read_bytes()
                self._blobs = MappingProxyType(found)
            return self._blobs

    def names(self) -> list[str]:
        return sorted(self._load().keys())

    def get_asset(self, name: str) -> bytes:
        try:
            return self._load()[name]
        except KeyError:
            raise AssetMissingError(name) from None


@lru_cache(maxsize=None)
def default_assets() -> AssetProvider:
    return AssetProvider(STATIC_DIR)
