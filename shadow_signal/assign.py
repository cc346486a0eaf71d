from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .errors import DataIntegrityError, InvalidState
from .models import MIN_PLAYERS, OPTIONS_COUNT, ROLE_PAIRS, Mode, Player, Role
from .words import Domain, WordBank

RELATED_COUNT = OPTIONS_COUNT // 2
DECOY_COUNT = OPTIONS_COUNT - RELATED_COUNT


@dataclass
class Assignment:
    special_id: str
    turn_player_id: str
    domain: str
    common_word: str
    special_word: str
    options: List[str] = field(default_factory=list)
    roles: Dict[str, Tuple[Role, str]] = field(default_factory=dict)


def build_options(bank: WordBank, domain: Domain, common_word: str, rng: random.Random) -> List[str]:
    """Two words related to the secret one plus two decoys from elsewhere, shuffled.

    A domain with fewer than three words yields fewer related options; that is
    accepted rather than treated as an error.
    """
    related_pool = [w for w in domain.word_list() if w != common_word]
    related = rng.sample(related_pool, min(RELATED_COUNT, len(related_pool)))

    others = [d for d in bank.domains if d.name != domain.name and d.words]
    if others:
        decoy_pool = rng.choice(others).word_list()
    else:
        decoy_pool = [w for w in related_pool if w not in related]
    decoys = rng.sample(decoy_pool, min(DECOY_COUNT, len(decoy_pool)))

    options = related + decoys
    rng.shuffle(options)
    return options


def assign_roles(players: List[Player], mode: Mode, bank: WordBank, rng: random.Random) -> Assignment:
    if bank.is_empty():
        raise DataIntegrityError("Word bank is empty")
    if len(players) < MIN_PLAYERS:
        raise InvalidState(f"Need at least {MIN_PLAYERS} players")

    ids = [p.id for p in players]
    turn_order = list(ids)
    rng.shuffle(turn_order)
    special_id = rng.choice(ids)

    domain = rng.choice([d for d in bank.domains if d.words])
    entry = rng.choice(domain.words)
    common_word = entry.word

    special_word = ""
    if mode == Mode.SPY:
        similar = [s for s in entry.similar if s != common_word]
        if not similar:
            raise DataIntegrityError(f"Word {common_word!r} has no similar words for spy mode")
        special_word = rng.choice(similar)

    special_role, ordinary_role = ROLE_PAIRS[mode]
    roles: Dict[str, Tuple[Role, str]] = {}
    for pid in ids:
        if pid == special_id:
            roles[pid] = (special_role, special_word)
        else:
            roles[pid] = (ordinary_role, common_word)

    return Assignment(
        special_id=special_id,
        turn_player_id=turn_order[0],
        domain=domain.name,
        common_word=common_word,
        special_word=special_word,
        options=build_options(bank, domain, common_word, rng),
        roles=roles,
    )


def apply_assignment(players: List[Player], assignment: Assignment) -> None:
    for p in players:
        role, word = assignment.roles[p.id]
        p.role = role
        p.word = word
        p.clue = None
        p.votes = 0
        p.voted_for = None
        p.is_alive = True
