"""Background image retrieval: remote fetch with an in-memory response cache, or the bundled default."""

from __future__ import annotations

import os
import ssl
import threading
import time
import urllib.error
import urllib.parse
import urllib.request
from collections import OrderedDict
from dataclasses import dataclass

import certifi

from promocard_renderer.assets import AssetProvider, default_assets
from promocard_renderer.errors import PromoCardError
from promocard_renderer.layouts import DEFAULT_BACKGROUND_ASSET

from .config import BackgroundConfig
from .logging_setup import get_logger


USER_AGENT = "PromoCard/0.1"


class BackgroundFetchError(PromoCardError):
    """The caller-supplied background location could not be retrieved."""


def _build_ssl_context() -> ssl.SSLContext:
    """Create TLS context for background downloads with explicit CA handling."""
    if os.environ.get("PROMOCARD_ALLOW_INSECURE_TLS", "").strip() == "1":
        return ssl._create_unverified_context()

    ca_bundle = os.environ.get("PROMOCARD_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)

    return ssl.create_default_context(cafile=certifi.where())


def _urlopen(url: str, timeout: int):
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT, "Accept": "image/*"})
    return urllib.request.urlopen(request, timeout=timeout, context=_build_ssl_context())


@dataclass(frozen=True)
class _CacheEntry:
    data: bytes
    stored_at: float


class ResponseCache:
    """LRU of fetched bodies keyed by URL. HTTP cache headers are ignored."""

    def __init__(self, max_entries: int = 128, ttl_s: float = 0) -> None:
        self.max_entries = max_entries
        self.ttl_s = ttl_s
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self.ttl_s and time.monotonic() - entry.stored_at > self.ttl_s:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry.data

    def put(self, key: str, data: bytes) -> None:
        if self.max_entries <= 0:
            return
        with self._lock:
            self._entries[key] = _CacheEntry(data=data, stored_at=time.monotonic())
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class BackgroundResolver:
    def __init__(
        self,
        assets: AssetProvider | None = None,
        timeout_s: int = 30,
        cache_entries: int = 128,
        cache_ttl_s: float = 0,
        max_bytes: int = 20 * 1024 * 1024,
    ) -> None:
        self.assets = assets or default_assets()
        self.timeout_s = timeout_s
        self.max_bytes = max_bytes
        self.cache = ResponseCache(max_entries=cache_entries, ttl_s=cache_ttl_s)
        self.logger = get_logger("background")

    @classmethod
    def from_config(cls, cfg: BackgroundConfig, assets: AssetProvider | None = None) -> BackgroundResolver:
        return cls(
            assets=assets,
            timeout_s=cfg.fetch_timeout_s,
            cache_entries=cfg.cache_entries,
            cache_ttl_s=cfg.cache_ttl_s,
            max_bytes=cfg.max_download_mb * 1024 * 1024,
        )

    def resolve(self, url: str | None) -> bytes:
        if url is None:
            return self.assets.get_asset(DEFAULT_BACKGROUND_ASSET)
        return self.fetch(url)

    def fetch(self, url: str) -> bytes:
        scheme = urllib.parse.urlsplit(url).scheme.lower()
        if scheme not in ("http", "https"):
            raise BackgroundFetchError(f"Unsupported background URL scheme: {scheme or '(none)'}")

        cached = self.cache.get(url)
        if cached is not None:
            self.logger.debug("background cache hit", extra={"event": "background_cache_hit"})
            return cached

        try:
            with _urlopen(url, timeout=self.timeout_s) as response:
                data = response.read(self.max_bytes + 1)
        except urllib.error.HTTPError as exc:
            raise BackgroundFetchError(f"Background fetch failed with HTTP {exc.code}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise BackgroundFetchError(f"Background fetch failed: {exc}") from exc

        if len(data) > self.max_bytes:
            raise BackgroundFetchError(f"Background exceeds {self.max_bytes} bytes")

        self.cache.put(url, data)
        self.logger.info("background fetched", extra={"event": "background_fetched", "url": url, "bytes": len(data)})
        return data
