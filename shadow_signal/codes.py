from __future__ import annotations

import random
import string
from typing import Awaitable, Callable

from .errors import DataIntegrityError, ValidationError

ROOM_CODE_LENGTH = 4
ROOM_CODE_ALPHABET = string.ascii_uppercase


def generate_code(rng: random.Random, length: int = ROOM_CODE_LENGTH) -> str:
    return "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


def validate_code(code: str) -> str:
    """Normalize a user-supplied code and reject anything but 4 letters."""
    upper = normalize_code(code)
    if len(upper) != ROOM_CODE_LENGTH or any(c not in ROOM_CODE_ALPHABET for c in upper):
        raise ValidationError(f"Invalid room code: {code!r}")
    return upper


async def allocate_code(
    is_taken: Callable[[str], Awaitable[bool]],
    rng: random.Random,
    attempts: int = 10,
) -> str:
    for _ in range(max(1, attempts)):
        code = generate_code(rng)
        if not await is_taken(code):
            return code
    raise DataIntegrityError(f"Could not allocate a free room code after {attempts} attempts")
