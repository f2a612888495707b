"""FastAPI endpoint for the bin packer."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from bin_packager.config import configure_logging, load_settings
from bin_packager.errors import PackingError
from bin_packager.io.schemas import PackingRequestSchema, PackingResultSchema
from bin_packager.io.serialize import pack_request

logger = logging.getLogger(__name__)

settings = load_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="Bin Packer API",
    description="3D bin packing service (First-Fit / First-Fit-Decreasing)",
)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )


@app.post("/pack", response_model=PackingResultSchema)
def pack(request: PackingRequestSchema) -> PackingResultSchema:
    """
    Pack the request's items into its bins.

    Input (request body):
        {
            "bins": [{"id": "B1", "length": 10, "height": 10, "breadth": 10, "max_weight": 100}],
            "items": [{"id": "A", "length": 5, "height": 5, "breadth": 5, "weight": 1}],
            "heuristic": "first_fit_decreasing"
        }

    Returns:
        Per-bin fitted items with position and rotation, and the unfitted items
    """
    try:
        result = pack_request(request, default_heuristic=settings.heuristic)
    except PackingError as e:
        logger.warning(f"Rejected /pack request: {e}")
        raise HTTPException(status_code=422, detail={"error": e.code, "summary": str(e)})

    fitted = sum(len(b.fitted_items) for b in result.bins)
    logger.info(
        f"fitted_items={fitted}, unfitted_items={len(result.unfitted_items)}, "
        f"heuristic={result.heuristic.value}"
    )
    return result


@app.get("/health")
def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True, "heuristic": settings.heuristic.value}
