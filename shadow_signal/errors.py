"""Error taxonomy surfaced by the game engine.

Every failure the engine signals is one of these, so callers (the HTTP layer,
tests) can tell a missing room from an out-of-phase action. None of them is
raised after a partial mutation: the engine validates before it writes.
"""
from __future__ import annotations


class ShadowSignalError(Exception):
    kind = "error"
    status_code = 400


class NotFound(ShadowSignalError):
    """The room code (or a player id inside a room) does not exist."""

    kind = "not_found"
    status_code = 404


class InvalidState(ShadowSignalError):
    """The action is not allowed in the room's current phase."""

    kind = "invalid_state"
    status_code = 409


class ValidationError(ShadowSignalError):
    """Malformed input: empty name, bad room code, unknown mode."""

    kind = "validation_error"
    status_code = 422


class DataIntegrityError(ShadowSignalError):
    """An internal invariant does not hold. Signals a defect, not bad input."""

    kind = "data_integrity_error"
    status_code = 500
