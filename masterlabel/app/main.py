"""
FastAPI entrypoint for the Master Label service.

Serves the built-in template catalog, tenant design storage, and label
resolution (population, preview, compliance) for label designs.
"""

import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from masterlabel.app.api.designs import router as designs_router
from masterlabel.app.api.labels import router as labels_router
from masterlabel.app.api.templates import catalog_router
from masterlabel.app.api.templates import router as templates_router
from masterlabel.app.config import get_settings
from masterlabel.app.registry.registry import TEMPLATE_REGISTRY

logger = logging.getLogger("masterlabel.main")


def get_app_version() -> str:
    try:
        return version("master-label-engine")
    except PackageNotFoundError:
        return "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Fail fast on invalid configuration and bind the log level before the
    first request.
    """
    try:
        settings = get_settings()
    except Exception:
        logger.exception("invalid_masterlabel_configuration")
        raise

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger("masterlabel").setLevel(settings.log_level)

    logger.info(
        "masterlabel_startup version=%s templates=%d",
        get_app_version(),
        len(TEMPLATE_REGISTRY),
    )
    yield
    logger.info("masterlabel_shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title="master-label-engine",
        description="Label layout templates and design documents for product labels",
        version=get_app_version(),
        lifespan=lifespan,
    )

    app.include_router(templates_router, prefix="/templates", tags=["Templates"])
    app.include_router(catalog_router, tags=["Catalog"])
    app.include_router(designs_router, prefix="/designs", tags=["Designs"])
    app.include_router(labels_router, prefix="/labels", tags=["Labels"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()


@app.get("/healthz", tags=["Monitoring"], summary="Liveness probe")
def health_check():
    return {"status": "ok", "service": "masterlabel", "version": app.version}
