from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Mode(str, Enum):
    INFILTRATOR = "infiltrator"
    SPY = "spy"


class Status(str, Enum):
    LOBBY = "lobby"
    SELECTING = "selecting"
    VOTING = "voting"
    ENDED = "ended"


class Role(str, Enum):
    CITIZEN = "citizen"
    INFILTRATOR = "infiltrator"
    SPY = "spy"
    AGENT = "agent"


class Winner(str, Enum):
    CITIZENS = "citizens"
    SPECIAL = "special"


SPECIAL_ROLES = {Role.INFILTRATOR, Role.SPY}

# mode -> (special role, ordinary role)
ROLE_PAIRS = {
    Mode.INFILTRATOR: (Role.INFILTRATOR, Role.CITIZEN),
    Mode.SPY: (Role.SPY, Role.AGENT),
}

MIN_PLAYERS = 3
OPTIONS_COUNT = 4
NARRATOR_LIMIT = 200


@dataclass
class Player:
    id: str
    room_id: str
    name: str
    is_host: bool = False
    role: Optional[Role] = None
    word: Optional[str] = None
    clue: Optional[str] = None
    is_alive: bool = True
    votes: int = 0
    voted_for: Optional[str] = None


@dataclass
class Room:
    id: str
    code: str
    mode: Mode
    status: Status = Status.LOBBY
    current_turn_player_id: Optional[str] = None
    options: List[str] = field(default_factory=list)
    winner: Optional[Winner] = None
    round: int = 0
    domain: Optional[str] = None
    secret_word: Optional[str] = None
    phase_started_at: Optional[float] = None
    lobby_started_at: Optional[float] = None
    narrator: List[str] = field(default_factory=list)

    def log(self, line: str, now: Optional[float] = None) -> None:
        ts = time.strftime("%H:%M:%S", time.localtime(now if now is not None else time.time()))
        self.narrator.append(f"[{ts}] {line}")
        self.narrator = self.narrator[-NARRATOR_LIMIT:]


def alive_players(players: List[Player]) -> List[Player]:
    return [p for p in players if p.is_alive]


def find_player(players: List[Player], player_id: Optional[str]) -> Optional[Player]:
    for p in players:
        if p.id == player_id:
            return p
    return None
