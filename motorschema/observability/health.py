"""Aggregated health check: renderer self-test plus every connector."""

from __future__ import annotations

import logging

from motorschema.connectors.base import ServiceConnector
from motorschema.diagram.renderer import render_scene_to_svg

log = logging.getLogger(__name__)

_PROBE_SCENE = {
    "statorConfig": {"visible": True, "slotCount": 12, "radius": 100},
    "canvasSize": {"width": 400, "height": 400},
}


def renderer_health() -> dict:
    """Render a tiny stator scene and report whether markup came back."""
    try:
        svg = render_scene_to_svg(_PROBE_SCENE)
    except Exception as e:
        log.exception("Renderer self-test failed")
        return {"status": "unhealthy", "error": str(e)}
    if not svg or not svg.startswith("<svg"):
        return {"status": "unhealthy", "error": "empty render"}
    return {"status": "healthy"}


async def aggregate_health(connectors: dict[str, ServiceConnector]) -> dict:
    results = {"renderer": renderer_health()}
    all_healthy = results["renderer"]["status"] == "healthy"
    for name, connector in connectors.items():
        health = await connector.health_check()
        results[name] = health
        if health.get("status") not in ("healthy", "connected", "disabled"):
            all_healthy = False
    return {"status": "healthy" if all_healthy else "degraded", "components": results}
