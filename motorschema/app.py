"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from motorschema import __version__
from motorschema.config import MotorSchemaConfig
from motorschema.connectors.base import ServiceConnector
from motorschema.connectors.pdf import PdfRendererConnector
from motorschema.gateway.http_api import ApiContext, router as api_router, set_context
from motorschema.observability.health import aggregate_health
from motorschema.observability.metrics import MetricsCollector

logger = logging.getLogger(__name__)


def create_app(config: MotorSchemaConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    if config is None:
        config = MotorSchemaConfig.from_yaml()

    app = FastAPI(title="MotorSchema", version=__version__, docs_url="/docs")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    # -- Connectors --
    connectors: dict[str, ServiceConnector] = {}
    pdf_connector: PdfRendererConnector | None = None
    if config.pdf_renderer_url:
        pdf_connector = PdfRendererConnector(
            config.pdf_renderer_url,
            timeout=config.pdf_renderer_timeout,
            min_bytes=config.pdf_min_bytes,
        )
        connectors[pdf_connector.name()] = pdf_connector

    # -- Metrics --
    metrics = MetricsCollector()

    # -- Wire HTTP API --
    set_context(ApiContext(config=config, metrics=metrics, pdf=pdf_connector))
    app.include_router(api_router)

    @app.get("/health")
    async def health():
        return await aggregate_health(connectors)

    @app.get("/metrics")
    async def get_metrics():
        return metrics.summary()

    @app.get("/")
    async def root():
        return {
            "name": "MotorSchema",
            "version": __version__,
            "connectors": list(connectors.keys()),
        }

    # -- Lifecycle --
    @app.on_event("startup")
    async def startup():
        for conn in connectors.values():
            try:
                await conn.connect()
            except Exception:
                logger.exception("Failed to connect %s", conn.name())

        logger.info("MotorSchema %s started on %s:%d", __version__, config.host, config.port)
        logger.info("Connectors: %s", ", ".join(connectors.keys()) or "none")

    @app.on_event("shutdown")
    async def shutdown():
        for conn in connectors.values():
            await conn.disconnect()

    # Store references for testing
    app.state.config = config
    app.state.metrics = metrics
    app.state.connectors = connectors

    return app
