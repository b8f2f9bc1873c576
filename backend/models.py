from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field


# Domain primitives for JSON bridge
PlayerKind = Literal["H", "COM"]
ComPolicy = Literal["first", "random", "greedy"]


class NewGameReq(BaseModel):
    black: PlayerKind = "H"
    white: PlayerKind = "COM"
    comPolicy: ComPolicy = "first"
    comSeed: int = 1337


class MoveReq(BaseModel):
    sessionId: str
    x: int = Field(..., ge=0, le=7)
    y: int = Field(..., ge=0, le=7)
    value: Optional[int] = Field(None, ge=1, le=10)


class SelectReq(BaseModel):
    sessionId: str
    value: Optional[int] = Field(None, ge=1, le=10)
    step: Optional[int] = Field(None, ge=-10, le=10)


class StepReq(BaseModel):
    sessionId: str


class GetStateResp(BaseModel):
    state: Dict[str, Any]


class StateEnvelope(BaseModel):
    sessionId: str
    state: Dict[str, Any]
