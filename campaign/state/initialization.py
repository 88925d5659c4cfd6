"""Fresh game creation."""

from campaign.state.models import (
    DungeonState,
    Formation,
    GameSettings,
    GameState,
    Party,
)
from campaign.state.types import Difficulty, SceneType


def create_new_game() -> GameState:
    """
    Create a new game with default values.

    Title screen, empty roster, empty party outside the maze, dungeon
    level 1, NORMAL difficulty. Every call returns an independent
    instance; nothing is read or written.
    """
    return GameState(
        current_scene=SceneType.TITLE_SCREEN,
        roster={},
        party=Party(
            in_maze=False,
            members=[],
            formation=Formation(front_row=[], back_row=[]),
        ),
        dungeon=DungeonState(current_level=1),
        settings=GameSettings(difficulty=Difficulty.NORMAL),
    )
