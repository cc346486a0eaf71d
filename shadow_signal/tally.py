from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import InvalidState
from .models import SPECIAL_ROLES, Player, Winner, alive_players

# Fewer living players than this after an ordinary elimination hands the win to the special role.
ATTRITION_LIMIT = 2


@dataclass
class TallyResult:
    eliminated: Optional[Player] = None
    winner: Optional[Winner] = None
    tally: List[Tuple[str, int]] = field(default_factory=list)


def pick_target(players: List[Player]) -> Optional[Player]:
    """Highest vote count wins; ties go to whoever comes first in roster order."""
    max_votes = 0
    target = None
    for p in players:
        if p.votes > max_votes:
            max_votes = p.votes
            target = p
    return target


def check_winner(players: List[Player], eliminated: Player) -> Optional[Winner]:
    if eliminated.role in SPECIAL_ROLES:
        return Winner.CITIZENS
    remaining = [p for p in alive_players(players) if p.id != eliminated.id]
    if len(remaining) <= ATTRITION_LIMIT:
        return Winner.SPECIAL
    return None


def resolve_votes(players: List[Player]) -> TallyResult:
    if not players:
        raise InvalidState("Cannot tally votes for an empty room")

    tally = sorted(
        ((p.id, p.votes) for p in players if p.votes > 0),
        key=lambda x: -x[1],
    )
    result = TallyResult(tally=tally)

    target = pick_target(players)
    if target is not None:
        target.is_alive = False
        result.eliminated = target
        result.winner = check_winner(players, target)

    for p in players:
        p.votes = 0
        p.voted_for = None
    return result
