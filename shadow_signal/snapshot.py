from __future__ import annotations

from typing import Any, Dict, List, Optional

from .deadlines import PhaseTimers, seconds_left
from .models import Player, Room


def _value(v: Any) -> Any:
    return v.value if v is not None and hasattr(v, "value") else v


def player_snapshot(p: Player) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "is_host": p.is_host,
        "role": _value(p.role),
        "word": p.word,
        "clue": p.clue,
        "is_alive": p.is_alive,
        "votes": p.votes,
        "voted_for": p.voted_for,
    }


def room_snapshot(
    room: Room,
    players: List[Player],
    now: Optional[float] = None,
    timers: Optional[PhaseTimers] = None,
) -> Dict[str, Any]:
    payload = {
        "id": room.id,
        "code": room.code,
        "mode": _value(room.mode),
        "status": _value(room.status),
        "current_turn_player_id": room.current_turn_player_id,
        "options": list(room.options),
        "winner": _value(room.winner),
        "round": room.round,
        "phase_started_at": room.phase_started_at,
        "lobby_started_at": room.lobby_started_at,
        "narrator": list(room.narrator),
    }
    if now is not None and timers is not None:
        payload["seconds_left"] = seconds_left(room, now, timers)
    return {"room": payload, "players": [player_snapshot(p) for p in players]}
