from __future__ import annotations

from typing import Dict
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.models import (
    NewGameReq,
    MoveReq,
    SelectReq,
    StepReq,
    GetStateResp,
    StateEnvelope,
)

from numreversi import (
    GameConfig,
    GameState,
    Position,
    RuleError,
    new_game,
    play_selected,
    select_piece,
    cycle_piece,
    current_kind,
    is_game_over,
    step as engine_step,
    to_json,
)


# In-memory session store
SESSIONS: Dict[str, GameState] = {}


def _new_session_id() -> str:
    return uuid.uuid4().hex


def get_state(session_id: str) -> GameState:
    state = SESSIONS.get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def save_state(session_id: str, state: GameState) -> None:
    SESSIONS[session_id] = state


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/new-game", response_model=StateEnvelope)
def new_game_endpoint(req: NewGameReq) -> StateEnvelope:
    try:
        cfg = GameConfig(
            black=req.black,
            white=req.white,
            com_policy=req.comPolicy,
            com_seed=int(req.comSeed),
        )
        # COM may open as Black
        state = engine_step(new_game(cfg))
        sid = _new_session_id()
        save_state(sid, state)
        return StateEnvelope(sessionId=sid, state=to_json(state))
    except (RuleError, ValueError, AssertionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"new-game failed: {e}")


@app.get("/state/{sessionId}", response_model=GetStateResp)
def get_state_endpoint(sessionId: str) -> GetStateResp:
    state = get_state(sessionId)
    return GetStateResp(state=to_json(state))


@app.post("/move", response_model=GetStateResp)
def move_endpoint(req: MoveReq) -> GetStateResp:
    try:
        state = get_state(req.sessionId)
        if is_game_over(state):
            raise HTTPException(status_code=409, detail="Game is over")
        if current_kind(state) != "H":
            raise HTTPException(status_code=409, detail="Not a human turn")
        if req.value is not None:
            state = select_piece(state, req.value)
        state = play_selected(state, Position(req.x, req.y))
        # Let COM answer right away
        state = engine_step(state)
        save_state(req.sessionId, state)
        return GetStateResp(state=to_json(state))
    except HTTPException:
        raise
    except (RuleError, ValueError, AssertionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"move failed: {e}")


@app.post("/select", response_model=GetStateResp)
def select_endpoint(req: SelectReq) -> GetStateResp:
    try:
        state = get_state(req.sessionId)
        if req.value is not None:
            state = select_piece(state, req.value)
        elif req.step is not None:
            state = cycle_piece(state, req.step)
        else:
            raise HTTPException(status_code=422, detail="value or step is required")
        save_state(req.sessionId, state)
        return GetStateResp(state=to_json(state))
    except HTTPException:
        raise
    except (RuleError, ValueError, AssertionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"select failed: {e}")


@app.post("/step", response_model=GetStateResp)
def step_endpoint(req: StepReq) -> GetStateResp:
    try:
        state = get_state(req.sessionId)
        state = engine_step(state)
        save_state(req.sessionId, state)
        return GetStateResp(state=to_json(state))
    except HTTPException:
        raise
    except (RuleError, ValueError, AssertionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"step failed: {e}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app:app", host="0.0.0.0", port=8000, reload=True)
