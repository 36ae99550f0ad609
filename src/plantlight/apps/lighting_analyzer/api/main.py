from __future__ import annotations

import io
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse
from PIL import Image

from plantlight.apps.plant_recommender.core import plant_types_for
from plantlight.libs.vision import (
    LightingAnalysisError,
    Thresholds,
    UnsupportedPixelFormat,
    load_image,
)
from plantlight.libs.vision.levels import HIGH_THRESHOLD_DEFAULT, LOW_THRESHOLD_DEFAULT

from ..core.analyzer import DEFAULT_GRID_SIZE, analyze_lighting
from ..core.overlay import OVERLAY_ALPHA_DEFAULT, render_overlay


app = FastAPI(title="plantlight - Lighting Analyzer API", version="0.1.0")


async def _read_image(image: Optional[UploadFile], path: Optional[str]) -> Image.Image:
    if path:
        try:
            return load_image(path)
        except FileNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
    if image is None:
        raise HTTPException(status_code=400, detail="Provide 'path' or upload 'image'.")
    data = await image.read()
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise UnsupportedPixelFormat(f"Unable to decode upload: {exc}") from exc


def _error_response(exc: LightingAnalysisError) -> HTTPException:
    status = 422 if isinstance(exc, UnsupportedPixelFormat) else 400
    return HTTPException(
        status_code=status,
        detail={"type": type(exc).__name__, "message": str(exc)},
    )


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.post("/lighting/analyze")
async def lighting_analyze(
    image: Optional[UploadFile] = File(default=None),
    path: Optional[str] = Form(default=None),
    grid_size: int = Form(default=DEFAULT_GRID_SIZE),
    low: float = Form(default=LOW_THRESHOLD_DEFAULT),
    high: float = Form(default=HIGH_THRESHOLD_DEFAULT),
):
    try:
        img = await _read_image(image, path)
        analysis = analyze_lighting(img, grid_size, Thresholds(low=low, high=high))
    except LightingAnalysisError as exc:
        raise _error_response(exc) from exc
    payload = analysis.to_dict()
    payload["plant_types"] = [
        plant.value for plant in plant_types_for(analysis.overall_level)
    ]
    return JSONResponse(payload)


@app.post("/lighting/overlay")
async def lighting_overlay(
    image: Optional[UploadFile] = File(default=None),
    path: Optional[str] = Form(default=None),
    grid_size: int = Form(default=DEFAULT_GRID_SIZE),
    low: float = Form(default=LOW_THRESHOLD_DEFAULT),
    high: float = Form(default=HIGH_THRESHOLD_DEFAULT),
    alpha: float = Form(default=OVERLAY_ALPHA_DEFAULT),
):
    if not 0.0 <= alpha <= 1.0:
        raise HTTPException(status_code=400, detail="alpha must be within [0, 1]")
    try:
        img = await _read_image(image, path)
        analysis = analyze_lighting(img, grid_size, Thresholds(low=low, high=high))
    except LightingAnalysisError as exc:
        raise _error_response(exc) from exc

    rendered = render_overlay(img, analysis.zones, alpha)
    buffer = io.BytesIO()
    rendered.save(buffer, format="PNG")
    buffer.seek(0)
    return StreamingResponse(
        buffer,
        media_type="image/png",
        headers={"X-Overall-Level": analysis.overall_level.value},
    )


def run(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    import uvicorn

    uvicorn.run(
        "plantlight.apps.lighting_analyzer.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )
