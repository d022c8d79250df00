from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

import config
from ds_modules import ExerciseKind, JudgmentSmoother, create_evaluator, evaluate, resolve_exercise
from ds_modules.pose_types import Judgment
from utils.visualization import feedback_text

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=config.API_TITLE,
    version=config.API_VERSION,
    description="Rule-based squat / push-up form evaluation from 2D pose keypoints.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class KeypointModel(BaseModel):
    x: float
    y: float


# {x, y} 객체 또는 [x, y] 배열
KeypointInput = Union[KeypointModel, List[float]]


class EvaluateRequest(BaseModel):
    exercise: Optional[str] = None
    keypoints: Optional[List[KeypointInput]] = None
    # 좌우 규칙에서 위반한 쪽 관절만 표시
    strict_sides: bool = False


class BatchEvaluateRequest(BaseModel):
    exercise: Optional[str] = None
    frames: List[Optional[List[KeypointInput]]] = Field(max_length=config.MAX_BATCH_FRAMES)
    smoothing_window: int = Field(default=config.SMOOTHING_WINDOW, ge=0, le=config.MAX_SMOOTHING_WINDOW)
    strict_sides: bool = False


def _judgment_response(judgment: Judgment) -> dict:
    body = judgment.to_dict()
    body["feedback"] = feedback_text(judgment)
    body["colors"] = judgment.colors()
    return body


def _resolve(exercise, strict_sides):
    """운동 종류와 (strict_sides일 때) 전용 평가기. 알 수 없는 운동이면 400."""
    try:
        kind = resolve_exercise(exercise)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    evaluator = create_evaluator(kind, strict_sides=True) if strict_sides and kind is not None else None
    return kind, evaluator


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/exercises")
def exercises() -> dict:
    return {"exercises": [kind.value for kind in ExerciseKind]}


@app.post("/evaluate")
def evaluate_frame(payload: EvaluateRequest) -> dict:
    kind, evaluator = _resolve(payload.exercise, payload.strict_sides)
    return _judgment_response(evaluate(kind, payload.keypoints, evaluator))


@app.post("/evaluate/batch")
def evaluate_frames(payload: BatchEvaluateRequest) -> dict:
    kind, evaluator = _resolve(payload.exercise, payload.strict_sides)

    smoother = JudgmentSmoother(payload.smoothing_window) if payload.smoothing_window else None
    results = []
    for frame in payload.frames:
        judgment = evaluate(kind, frame, evaluator)
        if smoother is not None:
            judgment = smoother.smooth(judgment)
        results.append(_judgment_response(judgment))

    logger.info(f"배치 평가 완료: {len(results)}프레임 (exercise={kind.value if kind else None})")
    return {"results": results}
