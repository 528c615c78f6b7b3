"""Schema rendering endpoints used by the PDF pipeline."""

from __future__ import annotations

import hmac
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Query, Response
from pydantic import BaseModel, Field

from motorschema.config import MotorSchemaConfig
from motorschema.connectors.pdf import PdfConversionError, PdfRendererConnector
from motorschema.diagram.renderer import SchemaRenderer
from motorschema.observability.metrics import MetricsCollector
from motorschema.pdf.html import motor_sheet_html
from motorschema.types import OutputFormat

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["schemas"])


@dataclass
class ApiContext:
    config: MotorSchemaConfig
    metrics: MetricsCollector = field(default_factory=MetricsCollector)
    pdf: Optional[PdfRendererConnector] = None


class PdfRequest(BaseModel):
    motor: dict[str, Any] = Field(default_factory=dict)
    scene: Optional[dict[str, Any]] = None
    title: str = "Motor sheet"


# The context is injected at app startup
_context: Optional[ApiContext] = None


def set_context(ctx: ApiContext) -> None:
    global _context
    _context = ctx


def get_context() -> ApiContext:
    if not _context:
        raise HTTPException(503, "Gateway not initialized")
    return _context


def require_api_key(
    x_api_key: Optional[str] = Header(default=None),
    ctx: ApiContext = Depends(get_context),
) -> None:
    expected = ctx.config.api_key
    if expected and not hmac.compare_digest((x_api_key or "").encode(), expected.encode()):
        raise HTTPException(401, "Invalid API key")


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


@router.post("/schemas/render", dependencies=[Depends(require_api_key)])
async def render_svg(
    scene: Optional[dict[str, Any]] = Body(default=None),
    ctx: ApiContext = Depends(get_context),
) -> Response:
    start = time.perf_counter()
    svg = SchemaRenderer(scene).render_svg()
    ctx.metrics.record_render(OutputFormat.SVG.value, _elapsed_ms(start), empty=svg is None)
    if svg is None:
        return Response(status_code=204)
    return Response(content=svg, media_type="image/svg+xml")


@router.post("/schemas/render.png", dependencies=[Depends(require_api_key)])
async def render_png(
    scene: Optional[dict[str, Any]] = Body(default=None),
    hires: bool = Query(default=False),
    ctx: ApiContext = Depends(get_context),
) -> Response:
    start = time.perf_counter()
    try:
        png = SchemaRenderer(scene).render_png(hires=hires, hires_scale=ctx.config.png_scale)
    except RuntimeError as e:
        ctx.metrics.record_error(OutputFormat.PNG.value)
        logger.warning("PNG rendering unavailable: %s", e)
        raise HTTPException(503, str(e))
    ctx.metrics.record_render(OutputFormat.PNG.value, _elapsed_ms(start), empty=png is None)
    if png is None:
        return Response(status_code=204)
    return Response(content=png, media_type="image/png")


@router.post("/schemas/pdf", dependencies=[Depends(require_api_key)])
async def render_pdf(req: PdfRequest, ctx: ApiContext = Depends(get_context)) -> Response:
    if not ctx.pdf:
        raise HTTPException(503, "PDF renderer not configured")

    start = time.perf_counter()
    html = motor_sheet_html(req.motor, req.scene, title=req.title)
    try:
        pdf = await ctx.pdf.render_pdf(html)
    except PdfConversionError as e:
        ctx.metrics.record_error(OutputFormat.PDF.value)
        logger.error("PDF generation failed: %s", e)
        raise HTTPException(502, "PDF generation failed")
    ctx.metrics.record_render(OutputFormat.PDF.value, _elapsed_ms(start))
    return Response(content=pdf, media_type="application/pdf")
