from .engine import GameEngine, RoomState
from .errors import DataIntegrityError, InvalidState, NotFound, ShadowSignalError, ValidationError
from .models import Mode, Player, Role, Room, Status, Winner
from .store import MemoryStore, RoomStore

__all__ = [
    "GameEngine",
    "RoomState",
    "ShadowSignalError",
    "NotFound",
    "InvalidState",
    "ValidationError",
    "DataIntegrityError",
    "Mode",
    "Player",
    "Role",
    "Room",
    "Status",
    "Winner",
    "MemoryStore",
    "RoomStore",
]
