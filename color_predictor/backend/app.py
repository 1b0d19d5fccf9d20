from __future__ import annotations

import sys
import time
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from color_predictor.backend.session import ColorSession
from color_predictor.deployment.wandb_utils import TrainingTracker
from color_predictor.exceptions import (
    ColorPredictorError,
    DataError,
    InvalidInputError,
    TrainingInProgressError,
)
from color_predictor.model_training.config import API_CONFIG, TRAIN_CONFIG

# ============= Request Models =============


class ColorSample(BaseModel):
    color: Optional[str] = Field(default=None, description="Hex color, defaults to the current color")
    liked: bool


class TrainRequest(BaseModel):
    epochs: int = Field(default=TRAIN_CONFIG['epochs'], ge=1)
    batch_size: int = Field(default=TRAIN_CONFIG['batch_size'], ge=1)
    validation_split: float = Field(default=TRAIN_CONFIG['validation_split'], gt=0, lt=1)


class PredictRequest(BaseModel):
    color: Optional[str] = Field(default=None, description="Hex color, defaults to the current color")


def _status_for(error: ColorPredictorError) -> int:
    if isinstance(error, TrainingInProgressError):
        return 409
    if isinstance(error, (InvalidInputError, DataError)):
        return 400
    return 500


def create_app(session: Optional[ColorSession] = None) -> FastAPI:
    """Build the API around a color session, creating one if none is given"""
    if session is None:
        session = ColorSession(tracker=TrainingTracker())
    if session.model is None:
        try:
            session.initialize()
        except Exception as e:
            print(f"Failed to initialize model: {e}")

    api = FastAPI(
        title="Color Predictor API",
        version="1.0.0",
        description="Learns which colors you like from your likes and dislikes",
    )

    # CORS middleware
    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Global exception handler
    @api.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": str(exc),
                "type": type(exc).__name__
            },
        )

    @api.get("/", tags=["Status"])
    def root() -> dict[str, Any]:
        return {
            "message": "Color Predictor API",
            "status": "running",
            "model_id": session.model_id,
            "model_state": session.state.value,
        }

    @api.get("/health", tags=["Status"])
    def health_check() -> dict[str, Any]:
        return {
            "status": "healthy" if session.model is not None else "degraded",
            "model_loaded": session.model is not None,
            "training": session.is_training,
            "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            "timestamp": time.time(),
        }

    @api.get("/colors/next", tags=["Colors"])
    def next_color() -> dict[str, str]:
        return {"color": session.next_color()}

    @api.post("/colors", tags=["Colors"])
    def record_color(sample: ColorSample) -> dict[str, Any]:
        try:
            stats = session.record(sample.color, sample.liked)
        except InvalidInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"success": True, "samples": stats}

    @api.delete("/colors", tags=["Colors"])
    def reset_colors() -> dict[str, Any]:
        session.reset()
        return {"success": True, "samples": session.sample_stats()}

    @api.get("/stats", tags=["Info"])
    def get_stats() -> dict[str, Any]:
        return {
            "samples": session.sample_stats(),
            "model_state": session.state.value,
            "model": session.model_stats.to_dict() if session.model_stats else None,
        }

    @api.post("/train", tags=["Training"])
    def train(request: Optional[TrainRequest] = None) -> dict[str, Any]:
        request = request or TrainRequest()
        start_time = time.time()

        try:
            stats = session.train(
                epochs=request.epochs,
                batch_size=request.batch_size,
                validation_split=request.validation_split,
            )
        except ColorPredictorError as e:
            raise HTTPException(status_code=_status_for(e), detail=str(e))

        return {
            "success": True,
            "model": stats.to_dict(),
            "model_state": session.state.value,
            "processing_time_ms": round((time.time() - start_time) * 1000, 2),
        }

    @api.post("/predict", tags=["Prediction"])
    def predict(request: Optional[PredictRequest] = None) -> dict[str, Any]:
        request = request or PredictRequest()
        start_time = time.time()

        if session.model is None:
            raise HTTPException(
                status_code=503,
                detail="Model not loaded. Please contact administrator."
            )

        try:
            result = session.predict(request.color)
        except ColorPredictorError as e:
            raise HTTPException(status_code=_status_for(e), detail=str(e))

        return {
            "success": True,
            "color": request.color or session.current_color,
            **result.to_dict(),
            "processing_time_ms": round((time.time() - start_time) * 1000, 2),
        }

    return api


if __name__ == "__main__":
    uvicorn.run(create_app(), host=API_CONFIG['host'], port=API_CONFIG['port'])
