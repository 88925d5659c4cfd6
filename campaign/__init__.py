"""
Campaign layer: game state, new-game setup and persistence.

Quick Start:
    from campaign import GameStateStore, SaveService, SaveConfig

    saves = SaveService(config=SaveConfig.from_env())
    store = GameStateStore(saves)

    if await saves.validate_save_data():
        await store.load_game()
"""

__version__ = "0.1.0"

from campaign.state import (
    GameState,
    Character,
    Party,
    Formation,
    PartyPosition,
    DungeonState,
    GameSettings,
    SceneType,
    Difficulty,
    create_new_game,
    GameStateStore,
)
from campaign.save import (
    SaveService,
    SaveConfig,
    SaveLoadError,
    SaveNotFoundError,
    SaveCorruptedError,
    FileSaveStorage,
    MemorySaveStorage,
)

__all__ = [
    "GameState",
    "Character",
    "Party",
    "Formation",
    "PartyPosition",
    "DungeonState",
    "GameSettings",
    "SceneType",
    "Difficulty",
    "create_new_game",
    "GameStateStore",
    "SaveService",
    "SaveConfig",
    "SaveLoadError",
    "SaveNotFoundError",
    "SaveCorruptedError",
    "FileSaveStorage",
    "MemorySaveStorage",
]
