from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import DataIntegrityError


@dataclass(frozen=True)
class WordEntry:
    word: str
    similar: tuple = ()


@dataclass(frozen=True)
class Domain:
    name: str
    words: tuple = ()

    def word_list(self) -> List[str]:
        return [w.word for w in self.words]


@dataclass
class WordBank:
    domains: List[Domain] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(d.words for d in self.domains)

    def domain(self, name: Optional[str]) -> Domain:
        for d in self.domains:
            if d.name == name:
                return d
        raise DataIntegrityError(f"Unknown word domain: {name!r}")


def _entry(word: str, *similar: str) -> WordEntry:
    return WordEntry(word=word, similar=tuple(similar))


DEFAULT_WORD_BANK = WordBank(domains=[
    Domain("Animals", (
        _entry("Lion", "Tiger", "Leopard", "Panther"),
        _entry("Dolphin", "Whale", "Porpoise", "Seal"),
        _entry("Eagle", "Hawk", "Falcon", "Vulture"),
        _entry("Wolf", "Fox", "Coyote", "Jackal"),
        _entry("Horse", "Donkey", "Zebra", "Mule"),
        _entry("Frog", "Toad", "Salamander", "Newt"),
    )),
    Domain("Food", (
        _entry("Pizza", "Flatbread", "Calzone", "Focaccia"),
        _entry("Sushi", "Sashimi", "Onigiri", "Poke"),
        _entry("Burger", "Sandwich", "Hot Dog", "Wrap"),
        _entry("Pancake", "Waffle", "Crepe", "French Toast"),
        _entry("Soup", "Stew", "Broth", "Chowder"),
        _entry("Ice Cream", "Gelato", "Sorbet", "Frozen Yogurt"),
    )),
    Domain("Places", (
        _entry("Beach", "Lake", "Riverbank", "Harbor"),
        _entry("Library", "Bookstore", "Archive", "Study Hall"),
        _entry("Hospital", "Clinic", "Pharmacy", "Infirmary"),
        _entry("Airport", "Train Station", "Bus Terminal", "Seaport"),
        _entry("Museum", "Gallery", "Exhibition", "Planetarium"),
        _entry("Casino", "Arcade", "Racetrack", "Bowling Alley"),
    )),
    Domain("Sports", (
        _entry("Football", "Rugby", "Handball", "Lacrosse"),
        _entry("Tennis", "Badminton", "Squash", "Table Tennis"),
        _entry("Swimming", "Diving", "Water Polo", "Rowing"),
        _entry("Boxing", "Wrestling", "Judo", "Karate"),
        _entry("Skiing", "Snowboarding", "Skating", "Sledding"),
        _entry("Golf", "Mini Golf", "Croquet", "Bowling"),
    )),
    Domain("Professions", (
        _entry("Doctor", "Nurse", "Surgeon", "Paramedic"),
        _entry("Chef", "Baker", "Cook", "Butcher"),
        _entry("Pilot", "Astronaut", "Captain", "Navigator"),
        _entry("Teacher", "Professor", "Tutor", "Coach"),
        _entry("Detective", "Police Officer", "Spy", "Inspector"),
        _entry("Farmer", "Gardener", "Rancher", "Beekeeper"),
    )),
    Domain("Objects", (
        _entry("Umbrella", "Raincoat", "Parasol", "Awning"),
        _entry("Guitar", "Violin", "Banjo", "Ukulele"),
        _entry("Candle", "Lantern", "Torch", "Lamp"),
        _entry("Clock", "Watch", "Hourglass", "Timer"),
        _entry("Mirror", "Window", "Glass", "Lens"),
        _entry("Backpack", "Suitcase", "Handbag", "Briefcase"),
    )),
])


def parse_word_bank(data: Dict[str, Any]) -> WordBank:
    """Build a WordBank from the ``{"domains": [...]}`` JSON layout."""
    if not isinstance(data, dict) or not isinstance(data.get("domains"), list):
        raise DataIntegrityError("Word bank must be an object with a 'domains' list")

    domains: List[Domain] = []
    for raw in data["domains"]:
        if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
            raise DataIntegrityError("Every domain needs a 'name'")
        entries = []
        for w in raw.get("words") or []:
            if not isinstance(w, dict) or not isinstance(w.get("word"), str) or not w["word"].strip():
                raise DataIntegrityError(f"Malformed word entry in domain {raw['name']!r}")
            similar = [s for s in (w.get("similar") or []) if isinstance(s, str) and s.strip()]
            entries.append(WordEntry(word=w["word"].strip(), similar=tuple(s.strip() for s in similar)))
        domains.append(Domain(name=raw["name"], words=tuple(entries)))
    return WordBank(domains=domains)


def load_word_bank(path: Optional[str] = None) -> WordBank:
    if not path:
        return DEFAULT_WORD_BANK
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataIntegrityError(f"Could not read word bank {path}: {e}") from e
    return parse_word_bank(data)
