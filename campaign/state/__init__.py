"""
State module - the game snapshot and its lifecycle.

Provides:
- GameState model and its parts
- Scene, difficulty and character enumerations
- New game creation
- The session's live state store
"""

from campaign.state.types import (
    SceneType,
    MAZE_SCENES,
    Difficulty,
    Facing,
    Race,
    CharacterClass,
    Alignment,
    CharacterStatus,
)
from campaign.state.models import (
    GameState,
    Character,
    Party,
    Formation,
    PartyPosition,
    DungeonState,
    GameSettings,
)
from campaign.state.initialization import create_new_game
from campaign.state.store import GameStateStore

__all__ = [
    "SceneType",
    "MAZE_SCENES",
    "Difficulty",
    "Facing",
    "Race",
    "CharacterClass",
    "Alignment",
    "CharacterStatus",
    "GameState",
    "Character",
    "Party",
    "Formation",
    "PartyPosition",
    "DungeonState",
    "GameSettings",
    "create_new_game",
    "GameStateStore",
]
