"""HTML → PDF renderer connector (headless browser service)."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from motorschema.connectors.base import ServiceConnector

log = logging.getLogger(__name__)

# A4 with a thin margin, backgrounds on: the layout the motor sheets are built for
DEFAULT_PDF_OPTIONS: dict[str, Any] = {
    "format": "A4",
    "margin": {"top": "6px", "right": "6px", "bottom": "6px", "left": "6px"},
    "printBackground": True,
}


class PdfConversionError(RuntimeError):
    """The PDF service failed or returned something that is not a usable document."""


class PdfRendererConnector(ServiceConnector):
    def __init__(self, url: str, timeout: float = 60.0, min_bytes: int = 1000) -> None:
        super().__init__(url, timeout=timeout)
        self._min_bytes = min_bytes

    async def render_pdf(self, html: str, options: Optional[dict[str, Any]] = None) -> bytes:
        """Convert an HTML document to PDF bytes."""
        client = self._get_client()
        payload = {"html": html, "options": {**DEFAULT_PDF_OPTIONS, **(options or {})}}
        try:
            resp = await client.post("/render", json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise PdfConversionError(f"PDF service request failed: {e}") from e

        pdf = resp.content
        # The service has been seen answering 200 with an empty body
        if len(pdf) < self._min_bytes:
            raise PdfConversionError(f"PDF service returned an invalid document (bytes={len(pdf)})")
        log.info("PDF rendered (%d bytes)", len(pdf))
        return pdf

    async def health_check(self) -> dict:
        try:
            client = self._get_client()
            resp = await client.get("/health")
            status = "healthy" if resp.status_code < 400 else "unhealthy"
            return {"status": status, "code": resp.status_code}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

    def name(self) -> str:
        return "pdf_renderer"
