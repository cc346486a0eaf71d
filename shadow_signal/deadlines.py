from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import Config
from .models import MIN_PLAYERS, Room, Status


class DueAction(str, Enum):
    START = "start"
    ADVANCE = "advance"


@dataclass
class PhaseTimers:
    lobby_seconds: int = Config.LOBBY_SECONDS
    selecting_seconds: int = Config.SELECTING_SECONDS
    voting_seconds: int = Config.VOTING_SECONDS


def phase_deadline(room: Room, timers: PhaseTimers) -> Optional[float]:
    if room.status == Status.LOBBY:
        if room.lobby_started_at is None:
            return None
        return room.lobby_started_at + timers.lobby_seconds
    if room.phase_started_at is None:
        return None
    if room.status == Status.SELECTING:
        return room.phase_started_at + timers.selecting_seconds
    if room.status == Status.VOTING:
        return room.phase_started_at + timers.voting_seconds
    return None


def seconds_left(room: Room, now: float, timers: PhaseTimers) -> Optional[int]:
    deadline = phase_deadline(room, timers)
    if deadline is None:
        return None
    return int(max(0, deadline - now))


def due_action(room: Room, player_count: int, now: float, timers: PhaseTimers) -> Optional[DueAction]:
    """What the caller should run once the current phase has run out of time."""
    deadline = phase_deadline(room, timers)
    if deadline is None or now < deadline:
        return None
    if room.status == Status.LOBBY:
        return DueAction.START if player_count >= MIN_PLAYERS else None
    if room.status in (Status.SELECTING, Status.VOTING):
        return DueAction.ADVANCE
    return None
