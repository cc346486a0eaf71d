from __future__ import annotations

import logging
from typing import Any, Dict

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shadow_signal.config import Config
from shadow_signal.engine import GameEngine, RoomState
from shadow_signal.errors import ShadowSignalError, ValidationError
from shadow_signal.snapshot import player_snapshot, room_snapshot

logger = logging.getLogger(__name__)

app = FastAPI(title="Shadow Signal")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in Config.CORS_ORIGINS.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ENGINE = GameEngine()


@app.exception_handler(ShadowSignalError)
async def game_error_handler(request: Request, exc: ShadowSignalError):
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.kind, "detail": str(exc)},
    )


def _state(state: RoomState) -> Dict[str, Any]:
    payload = room_snapshot(state.room, state.players, ENGINE.clock(), ENGINE.timers)
    if state.result is not None:
        eliminated = state.result.eliminated
        payload["eliminated"] = player_snapshot(eliminated) if eliminated else None
        payload["tally"] = [{"id": pid, "votes": cnt} for pid, cnt in state.result.tally]
    payload["ok"] = True
    return payload


def _require(payload: Dict[str, Any], key: str) -> Any:
    value = payload.get(key)
    if value is None or value == "":
        raise ValidationError(f"Missing {key}")
    return value


@app.get("/")
async def root():
    return {"ok": True, "hint": "POST /api/rooms to open a room, then poll GET /api/rooms/{code}."}


@app.get("/api/health")
async def health():
    return {"ok": True}


@app.post("/api/rooms")
async def api_create_room(payload: Dict[str, Any]):
    room = await ENGINE.create_room(_require(payload, "mode"))
    return {"ok": True, "code": room.code, "room": room_snapshot(room, [])["room"]}


@app.post("/api/rooms/{code}/join")
async def api_join(code: str, payload: Dict[str, Any]):
    player, room = await ENGINE.join_room(code, payload.get("name") or "")
    return {"ok": True, "player": player_snapshot(player), "room": room_snapshot(room, [])["room"]}


@app.get("/api/rooms/{code}")
async def api_get_room(code: str):
    return _state(await ENGINE.get_room_state(code))


@app.post("/api/rooms/{code}/start")
async def api_start(code: str):
    return _state(await ENGINE.start_game(code))


@app.post("/api/rooms/{code}/clue")
async def api_clue(code: str, payload: Dict[str, Any]):
    player_id = _require(payload, "player_id")
    return _state(await ENGINE.submit_clue(code, player_id, payload.get("clue") or ""))


@app.post("/api/rooms/{code}/vote")
async def api_vote(code: str, payload: Dict[str, Any]):
    target_id = _require(payload, "target_id")
    return _state(await ENGINE.vote(code, target_id, voter_id=payload.get("voter_id") or None))


@app.post("/api/rooms/{code}/eliminate")
async def api_eliminate(code: str):
    return _state(await ENGINE.eliminate_now(code))


@app.post("/api/rooms/{code}/advance")
async def api_advance(code: str):
    return _state(await ENGINE.force_phase_advance(code))


@app.post("/api/rooms/{code}/restart")
async def api_restart(code: str):
    return _state(await ENGINE.restart_game(code))


@app.post("/api/rooms/{code}/tick")
async def api_tick(code: str):
    action, state = await ENGINE.tick(code)
    payload = _state(state)
    payload["ran"] = action.value if action else None
    return payload


@app.post("/api/config")
async def api_config(payload: Dict[str, Any]):
    timers = ENGINE.configure(payload)
    return {
        "ok": True,
        "lobbyTime": timers.lobby_seconds,
        "selectTime": timers.selecting_seconds,
        "voteTime": timers.voting_seconds,
    }


@app.post("/api/reset")
async def api_reset():
    await ENGINE.store.clear()
    return {"ok": True}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
