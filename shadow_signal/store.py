"""Room/Player storage.

The engine only talks to :class:`RoomStore`. Reads hand back copies, so the
engine can mutate an aggregate freely and nothing is visible to other callers
until :meth:`RoomStore.save` writes the whole room and its players back.
"""
from __future__ import annotations

import asyncio
import copy
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

from .models import Player, Room, Status

ACTIVE_STATUSES = {Status.LOBBY, Status.SELECTING, Status.VOTING}


class RoomStore(ABC):
    @abstractmethod
    async def insert_room(self, room: Room) -> Room: ...

    @abstractmethod
    async def get_room(self, code: str) -> Optional[Room]: ...

    @abstractmethod
    async def code_in_use(self, code: str) -> bool: ...

    @abstractmethod
    async def insert_player(self, player: Player) -> Player: ...

    @abstractmethod
    async def list_players(self, room_id: str) -> List[Player]: ...

    @abstractmethod
    async def save(self, room: Room, players: List[Player]) -> None: ...

    @abstractmethod
    async def clear(self) -> None: ...

    @asynccontextmanager
    async def transaction(self, code: str) -> AsyncIterator[None]:
        # Locks are keyed by code and shared by every room that reuses it.
        yield


class MemoryStore(RoomStore):
    def __init__(self) -> None:
        self.rooms: Dict[str, Room] = {}
        self.players: Dict[str, Player] = {}
        self._by_code: Dict[str, str] = {}
        self._roster: Dict[str, List[str]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    async def insert_room(self, room: Room) -> Room:
        # A reused code replaces the ended room that held it.
        stale = self._by_code.get(room.code)
        if stale is not None and stale != room.id:
            self.rooms.pop(stale, None)
            for pid in self._roster.pop(stale, []):
                self.players.pop(pid, None)

        self.rooms[room.id] = copy.deepcopy(room)
        self._by_code[room.code] = room.id
        self._roster.setdefault(room.id, [])
        return room

    async def get_room(self, code: str) -> Optional[Room]:
        rid = self._by_code.get(code)
        if rid is None:
            return None
        return copy.deepcopy(self.rooms[rid])

    async def code_in_use(self, code: str) -> bool:
        rid = self._by_code.get(code)
        return rid is not None and self.rooms[rid].status in ACTIVE_STATUSES

    async def insert_player(self, player: Player) -> Player:
        self.players[player.id] = copy.deepcopy(player)
        self._roster.setdefault(player.room_id, []).append(player.id)
        return player

    async def list_players(self, room_id: str) -> List[Player]:
        return [copy.deepcopy(self.players[pid]) for pid in self._roster.get(room_id, [])]

    async def save(self, room: Room, players: List[Player]) -> None:
        self.rooms[room.id] = copy.deepcopy(room)
        self._by_code[room.code] = room.id
        for p in players:
            self.players[p.id] = copy.deepcopy(p)

    async def clear(self) -> None:
        self.rooms.clear()
        self.players.clear()
        self._by_code.clear()
        self._roster.clear()
        self._locks.clear()

    @asynccontextmanager
    async def transaction(self, code: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(code, asyncio.Lock())
        async with lock:
            yield
