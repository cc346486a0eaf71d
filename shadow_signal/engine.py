from __future__ import annotations

import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .assign import apply_assignment, assign_roles, build_options
from .codes import allocate_code, validate_code
from .config import Config
from .deadlines import DueAction, PhaseTimers, due_action
from .errors import InvalidState, NotFound, ValidationError
from .models import MIN_PLAYERS, Mode, Player, Room, Status, Winner, alive_players, find_player
from .store import MemoryStore, RoomStore
from .tally import TallyResult, resolve_votes
from .words import WordBank, load_word_bank

logger = logging.getLogger(__name__)


@dataclass
class RoomState:
    room: Room
    players: List[Player] = field(default_factory=list)
    result: Optional[TallyResult] = None


class GameEngine:
    def __init__(
        self,
        store: Optional[RoomStore] = None,
        bank: Optional[WordBank] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
        timers: Optional[PhaseTimers] = None,
    ) -> None:
        self.store = store if store is not None else MemoryStore()
        self.bank = bank if bank is not None else load_word_bank(Config.WORD_BANK_PATH)
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock or time.time
        self.timers = timers or PhaseTimers()
        self.code_attempts = Config.CODE_ATTEMPTS

    async def _load(self, code: str) -> Tuple[Room, List[Player]]:
        room = await self.store.get_room(code)
        if room is None:
            raise NotFound(f"Room {code} not found")
        players = await self.store.list_players(room.id)
        return room, players

    def _set_status(self, room: Room, status: Status) -> None:
        logger.info("[%s] %s -> %s", room.code, room.status.value, status.value)
        room.status = status
        room.phase_started_at = self.clock()

    async def create_room(self, mode: Any) -> Room:
        try:
            mode = Mode(mode)
        except ValueError:
            raise ValidationError(f"Unknown mode: {mode!r}") from None

        code = await allocate_code(self.store.code_in_use, self.rng, self.code_attempts)
        room = Room(id=uuid.uuid4().hex[:8], code=code, mode=mode)
        room.log(f"Room {code} opened ({mode.value} mode).", self.clock())
        await self.store.insert_room(room)
        logger.info("[%s] room created, mode=%s", code, mode.value)
        return room

    async def join_room(self, code: str, name: str) -> Tuple[Player, Room]:
        code = validate_code(code)
        name = (name or "").strip()[:Config.NAME_MAX_LEN]
        if not name:
            raise ValidationError("Name must not be empty")

        async with self.store.transaction(code):
            room, players = await self._load(code)
            if room.status != Status.LOBBY:
                raise InvalidState("Game already started")

            player = Player(
                id=uuid.uuid4().hex[:8],
                room_id=room.id,
                name=name,
                is_host=not players,
            )
            await self.store.insert_player(player)

            now = self.clock()
            if len(players) + 1 >= MIN_PLAYERS and room.lobby_started_at is None:
                room.lobby_started_at = now
            room.log(f"{name} joined the room.", now)
            await self.store.save(room, [])

        logger.info("[%s] %s joined (host=%s)", code, name, player.is_host)
        return player, room

    async def get_room_state(self, code: str) -> RoomState:
        code = validate_code(code)
        room, players = await self._load(code)
        return RoomState(room=room, players=players)

    def _start(self, room: Room, players: List[Player]) -> None:
        if room.status != Status.LOBBY:
            raise InvalidState("Game can only be started from the lobby")

        assignment = assign_roles(players, room.mode, self.bank, self.rng)
        apply_assignment(players, assignment)

        room.options = assignment.options
        room.current_turn_player_id = assignment.turn_player_id
        room.domain = assignment.domain
        room.secret_word = assignment.common_word
        room.winner = None
        room.round = 1
        room.lobby_started_at = None
        self._set_status(room, Status.SELECTING)
        room.log("The game begins. Roles have been dealt.", self.clock())

    def _next_round(self, room: Room, players: List[Player]) -> None:
        domain = self.bank.domain(room.domain)
        room.options = build_options(self.bank, domain, room.secret_word, self.rng)
        for p in players:
            p.clue = None
        room.round += 1
        self._set_status(room, Status.SELECTING)
        room.log(f"Round {room.round}. Pick your clues.", self.clock())

    def _open_voting(self, room: Room, players: List[Player]) -> None:
        for p in players:
            p.votes = 0
            p.voted_for = None
        self._set_status(room, Status.VOTING)
        room.log("Voting is open.", self.clock())

    def _resolve(self, room: Room, players: List[Player]) -> TallyResult:
        if room.status != Status.VOTING:
            raise InvalidState("Elimination is only possible while voting")

        result = resolve_votes(players)
        now = self.clock()
        if result.eliminated is None:
            room.log("Nobody was eliminated.", now)
            self._next_round(room, players)
            return result

        room.log(f"{result.eliminated.name} was eliminated.", now)
        if result.winner is not None:
            room.winner = result.winner
            self._set_status(room, Status.ENDED)
            side = "The citizens" if result.winner == Winner.CITIZENS else "The special agent"
            room.log(f"Game over! {side} win.", now)
            logger.info("[%s] game over, winner=%s", room.code, result.winner.value)
        else:
            self._next_round(room, players)
        return result

    async def start_game(self, code: str) -> RoomState:
        code = validate_code(code)
        async with self.store.transaction(code):
            room, players = await self._load(code)
            self._start(room, players)
            await self.store.save(room, players)
        return RoomState(room=room, players=players)

    async def submit_clue(self, code: str, player_id: str, clue: str) -> RoomState:
        code = validate_code(code)
        clue = (clue or "").strip()[:Config.CLUE_MAX_LEN]
        if not clue:
            raise ValidationError("Clue must not be empty")

        async with self.store.transaction(code):
            room, players = await self._load(code)
            if room.status != Status.SELECTING:
                raise InvalidState("Clues are only accepted while selecting")
            player = find_player(players, player_id)
            if player is None:
                raise NotFound(f"Player {player_id} is not in room {code}")
            if not player.is_alive:
                raise InvalidState("Eliminated players cannot give clues")

            player.clue = clue
            if all(p.clue for p in alive_players(players)):
                self._open_voting(room, players)
            await self.store.save(room, players)
        return RoomState(room=room, players=players)

    async def vote(self, code: str, target_id: str, voter_id: Optional[str] = None) -> RoomState:
        """Count one vote against ``target_id``.

        With a ``voter_id`` each living player holds a single ballot: voting
        again moves it to the new target. Without one the vote is anonymous and
        simply adds to the target's count.
        """
        code = validate_code(code)
        async with self.store.transaction(code):
            room, players = await self._load(code)
            if room.status != Status.VOTING:
                raise InvalidState("Votes are only accepted while voting")
            target = find_player(players, target_id)
            if target is None:
                raise NotFound(f"Player {target_id} is not in room {code}")
            if not target.is_alive:
                raise InvalidState("Cannot vote for an eliminated player")

            if voter_id is not None:
                voter = find_player(players, voter_id)
                if voter is None:
                    raise NotFound(f"Player {voter_id} is not in room {code}")
                if not voter.is_alive:
                    raise InvalidState("Eliminated players cannot vote")
                if voter.voted_for == target.id:
                    return RoomState(room=room, players=players)
                previous = find_player(players, voter.voted_for)
                if previous is not None:
                    previous.votes = max(0, previous.votes - 1)
                voter.voted_for = target.id

            target.votes += 1
            await self.store.save(room, players)
        return RoomState(room=room, players=players)

    async def eliminate_now(self, code: str) -> RoomState:
        code = validate_code(code)
        async with self.store.transaction(code):
            room, players = await self._load(code)
            result = self._resolve(room, players)
            await self.store.save(room, players)
        return RoomState(room=room, players=players, result=result)

    def _advance(self, room: Room, players: List[Player]) -> Optional[TallyResult]:
        if room.status == Status.SELECTING:
            self._open_voting(room, players)
            return None
        if room.status == Status.VOTING:
            return self._resolve(room, players)
        raise InvalidState(f"Cannot advance a room in {room.status.value}")

    async def force_phase_advance(self, code: str) -> RoomState:
        code = validate_code(code)
        async with self.store.transaction(code):
            room, players = await self._load(code)
            result = self._advance(room, players)
            await self.store.save(room, players)
        return RoomState(room=room, players=players, result=result)

    async def restart_game(self, code: str) -> RoomState:
        code = validate_code(code)
        async with self.store.transaction(code):
            room, players = await self._load(code)
            if room.status != Status.ENDED:
                raise InvalidState("Only a finished game can be restarted")

            for p in players:
                p.is_alive = True
                p.votes = 0
                p.voted_for = None
                p.role = None
                p.word = None
                p.clue = None

            now = self.clock()
            room.options = []
            room.winner = None
            room.round = 0
            room.domain = None
            room.secret_word = None
            room.current_turn_player_id = None
            room.lobby_started_at = now if len(players) >= MIN_PLAYERS else None
            self._set_status(room, Status.LOBBY)
            room.log("Back to the lobby for a new game.", now)
            await self.store.save(room, players)
        return RoomState(room=room, players=players)

    def configure(self, cfg: Dict[str, Any]) -> PhaseTimers:
        try:
            if "lobbyTime" in cfg:
                self.timers.lobby_seconds = max(10, min(300, int(cfg["lobbyTime"])))
            if "selectTime" in cfg:
                self.timers.selecting_seconds = max(10, min(300, int(cfg["selectTime"])))
            if "voteTime" in cfg:
                self.timers.voting_seconds = max(10, min(120, int(cfg["voteTime"])))
        except (TypeError, ValueError):
            raise ValidationError("Timer values must be integers") from None
        return self.timers

    async def tick(self, code: str) -> Tuple[Optional[DueAction], RoomState]:
        """Run whatever the deadline policy says is due for this room, if anything."""
        code = validate_code(code)
        async with self.store.transaction(code):
            room, players = await self._load(code)
            action = due_action(room, len(players), self.clock(), self.timers)
            result = None
            if action == DueAction.START:
                self._start(room, players)
            elif action == DueAction.ADVANCE:
                result = self._advance(room, players)
            if action is not None:
                logger.info("[%s] deadline passed, ran %s", code, action.value)
                await self.store.save(room, players)
        return action, RoomState(room=room, players=players, result=result)
