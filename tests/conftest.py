"""Shared fixtures and utilities for Shadow Signal tests."""
from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from server import app, ENGINE
from shadow_signal.deadlines import PhaseTimers
from shadow_signal.engine import GameEngine
from shadow_signal.models import Mode, Player, Role, Status
from shadow_signal.store import MemoryStore


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock: FakeClock) -> GameEngine:
    """Fresh engine with its own store and a seeded random source."""
    return GameEngine(store=MemoryStore(), rng=random.Random(1234), clock=clock)


async def add_players(engine: GameEngine, code: str, count: int, names: List[str] | None = None) -> List[str]:
    """Join players to a room and return their IDs in join order."""
    if names is None:
        names = [f"Player{i+1}" for i in range(count)]

    player_ids = []
    for name in names[:count]:
        player, _ = await engine.join_room(code, name)
        player_ids.append(player.id)
    return player_ids


async def open_room(engine: GameEngine, count: int = 3, mode: Mode = Mode.INFILTRATOR) -> tuple[str, List[str]]:
    """Create a room, fill it with ``count`` players, return (code, player ids)."""
    room = await engine.create_room(mode)
    player_ids = await add_players(engine, room.code, count)
    return room.code, player_ids


async def started_room(engine: GameEngine, count: int = 3, mode: Mode = Mode.INFILTRATOR) -> tuple[str, List[str]]:
    code, player_ids = await open_room(engine, count, mode)
    await engine.start_game(code)
    return code, player_ids


def stored_player(engine: GameEngine, player_id: str) -> Player:
    """The store's own copy of a player, for arranging test scenarios."""
    return engine.store.players[player_id]


def set_player_role(engine: GameEngine, player_id: str, role: Role) -> None:
    stored_player(engine, player_id).role = role


def set_votes(engine: GameEngine, votes: dict) -> None:
    for pid, count in votes.items():
        stored_player(engine, pid).votes = count


def kill_player(engine: GameEngine, player_id: str) -> None:
    stored_player(engine, player_id).is_alive = False


def set_status(engine: GameEngine, code: str, status: Status) -> None:
    rid = engine.store._by_code[code]
    engine.store.rooms[rid].status = status


def make_special(engine: GameEngine, player_ids: List[str], special_id: str, mode: Mode = Mode.INFILTRATOR) -> None:
    """Force a known role layout: ``special_id`` is the special player."""
    special, ordinary = (Role.INFILTRATOR, Role.CITIZEN) if mode == Mode.INFILTRATOR else (Role.SPY, Role.AGENT)
    for pid in player_ids:
        set_player_role(engine, pid, special if pid == special_id else ordinary)


async def voting_room(engine: GameEngine, count: int) -> tuple[str, List[str]]:
    """Started room pushed into the voting phase."""
    code, player_ids = await started_room(engine, count)
    await engine.force_phase_advance(code)
    return code, player_ids


@pytest_asyncio.fixture
async def client():
    """Async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(autouse=True)
async def reset_global_engine():
    """Reset the global ENGINE before each test."""
    await ENGINE.store.clear()
    ENGINE.timers = PhaseTimers()
    yield
    await ENGINE.store.clear()
