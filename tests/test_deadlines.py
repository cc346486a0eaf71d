"""Tests for phase deadlines layered on top of the state machine."""
from __future__ import annotations

import pytest
from shadow_signal.deadlines import DueAction, PhaseTimers, due_action, seconds_left
from shadow_signal.errors import ValidationError
from shadow_signal.models import Mode, Room, Status
from conftest import make_special, open_room, set_votes, started_room, voting_room


def make_room(status: Status, **kwargs) -> Room:
    return Room(id="r1", code="ABCD", mode=Mode.INFILTRATOR, status=status, **kwargs)


class TestDueAction:

    def test_lobby_waits_for_timer(self):
        timers = PhaseTimers(lobby_seconds=60)
        room = make_room(Status.LOBBY, lobby_started_at=100.0)

        assert due_action(room, 3, 159.0, timers) is None
        assert due_action(room, 3, 160.0, timers) == DueAction.START

    def test_lobby_needs_three_players(self):
        room = make_room(Status.LOBBY, lobby_started_at=0.0)
        assert due_action(room, 2, 1000.0, PhaseTimers()) is None

    def test_selecting_and_voting_advance(self):
        timers = PhaseTimers(selecting_seconds=30, voting_seconds=20)

        assert due_action(make_room(Status.SELECTING, phase_started_at=0.0), 3, 30.0, timers) == DueAction.ADVANCE
        assert due_action(make_room(Status.VOTING, phase_started_at=0.0), 3, 19.0, timers) is None
        assert due_action(make_room(Status.VOTING, phase_started_at=0.0), 3, 20.0, timers) == DueAction.ADVANCE

    def test_ended_never_due(self):
        assert due_action(make_room(Status.ENDED, phase_started_at=0.0), 3, 1e9, PhaseTimers()) is None

    def test_seconds_left(self):
        timers = PhaseTimers(selecting_seconds=30)
        room = make_room(Status.SELECTING, phase_started_at=100.0)

        assert seconds_left(room, 110.0, timers) == 20
        assert seconds_left(room, 500.0, timers) == 0
        assert seconds_left(make_room(Status.LOBBY), 0.0, timers) is None


class TestTick:

    @pytest.mark.asyncio
    async def test_tick_before_deadline_does_nothing(self, engine, clock):
        code, _ = await started_room(engine, 3)
        clock.advance(5)

        action, state = await engine.tick(code)

        assert action is None
        assert state.room.status == Status.SELECTING

    @pytest.mark.asyncio
    async def test_tick_auto_starts_lobby(self, engine, clock):
        code, _ = await open_room(engine, 3)
        clock.advance(engine.timers.lobby_seconds)

        action, state = await engine.tick(code)

        assert action == DueAction.START
        assert state.room.status == Status.SELECTING

    @pytest.mark.asyncio
    async def test_tick_advances_selecting(self, engine, clock):
        code, _ = await started_room(engine, 3)
        clock.advance(engine.timers.selecting_seconds)

        action, state = await engine.tick(code)

        assert action == DueAction.ADVANCE
        assert state.room.status == Status.VOTING

    @pytest.mark.asyncio
    async def test_tick_resolves_voting(self, engine, clock):
        code, _ = await voting_room(engine, 4)
        clock.advance(engine.timers.voting_seconds)

        action, state = await engine.tick(code)

        assert action == DueAction.ADVANCE
        assert state.result is not None
        assert state.room.status == Status.SELECTING

    @pytest.mark.asyncio
    async def test_restart_rearms_lobby_timer(self, engine, clock):
        """A restarted game with a full roster auto-starts once the lobby time runs out."""
        code, player_ids = await voting_room(engine, 3)
        make_special(engine, player_ids, player_ids[0])
        set_votes(engine, {player_ids[0]: 1})
        await engine.eliminate_now(code)

        state = await engine.restart_game(code)
        assert state.room.lobby_started_at == clock.now

        clock.advance(engine.timers.lobby_seconds)
        action, state = await engine.tick(code)

        assert action == DueAction.START
        assert state.room.status == Status.SELECTING


class TestConfigure:

    def test_values_are_clamped(self, engine):
        timers = engine.configure({"lobbyTime": 5, "selectTime": 45, "voteTime": 999})

        assert timers.lobby_seconds == 10
        assert timers.selecting_seconds == 45
        assert timers.voting_seconds == 120

    def test_non_numeric_rejected(self, engine):
        with pytest.raises(ValidationError):
            engine.configure({"voteTime": "soon"})
