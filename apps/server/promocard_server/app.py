"""HTTP front end: GET /?ttl=&img=&hl= returns the rendered card as PNG."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from promocard_core.background import BackgroundFetchError, BackgroundResolver
from promocard_core.config import AppConfig
from promocard_core.logging_setup import get_logger
from promocard_renderer import AssetProvider, ImageDecodeError, PromoCardError, Variant, default_assets, render


def build_assets(cfg: AppConfig) -> AssetProvider:
    if cfg.assets.directory:
        return AssetProvider(Path(cfg.assets.directory).expanduser())
    return default_assets()


def create_app(
    cfg: AppConfig | None = None,
    assets: AssetProvider | None = None,
    resolver: BackgroundResolver | None = None,
) -> FastAPI:
    cfg = cfg or AppConfig()
    assets = assets or build_assets(cfg)
    resolver = resolver or BackgroundResolver.from_config(cfg.background, assets=assets)
    logger = get_logger("server")

    app = FastAPI(title="promocard")
    app.state.assets = assets
    app.state.resolver = resolver

    @app.exception_handler(ImageDecodeError)
    async def _bad_background(_request: Request, exc: ImageDecodeError) -> JSONResponse:
        logger.warning(str(exc), extra={"event": "background_undecodable", "status": 400})
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(BackgroundFetchError)
    async def _fetch_failed(_request: Request, exc: BackgroundFetchError) -> JSONResponse:
        logger.warning(str(exc), extra={"event": "background_fetch_failed", "status": 502})
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(PromoCardError)
    async def _render_failed(_request: Request, exc: PromoCardError) -> JSONResponse:
        logger.error("render failed", exc_info=exc, extra={"event": "render_failed", "status": 500, "error_type": type(exc).__name__})
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.get("/")
    def index(ttl: str, img: str | None = None, hl: str | None = None) -> Response:
        background = resolver.resolve(img)
        png = render(ttl, Variant.from_highlight(hl), background, assets=assets)
        return Response(content=png, media_type="image/png")

    return app


def run_server(cfg: AppConfig) -> int:
    import uvicorn

    uvicorn.run(create_app(cfg), host=cfg.server.host, port=cfg.server.port, log_config=None)
    return 0
