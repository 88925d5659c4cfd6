"""
Game state model - the snapshot of a playthrough.

Models are data-only pydantic containers:
- validation on construction and assignment
- JSON encoding for the save slot
- value equality, so a loaded game compares equal to the saved one

Keep rules (party size, formation consistency, stat ranges) out of
here; gameplay code owns them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from campaign.state.types import (
    Alignment,
    CharacterClass,
    CharacterStatus,
    Difficulty,
    Facing,
    Race,
    SceneType,
)


class StateModel(BaseModel):
    """Base for every part of the game state."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    def clone(self):
        """Deep copy."""
        return self.model_copy(deep=True)


class Character(StateModel):
    """
    A roster character.

    Attributes:
        id: Unique roster key
        strength..luck: Core stats (3-18 base range)
        ac: Armor class, lower is better
        inventory: Item ids, at most 8 by game rule
        created_at, last_modified: Unix timestamps in milliseconds
    """
    id: str
    name: str
    race: Race
    character_class: CharacterClass
    alignment: Alignment
    status: CharacterStatus = CharacterStatus.GOOD

    strength: int
    intelligence: int
    piety: int
    vitality: int
    agility: int
    luck: int

    level: int = 1
    experience: int = 0
    hp: int
    max_hp: int
    ac: int = 10

    inventory: list[str] = Field(default_factory=list)
    equipped_weapon: Optional[str] = None
    equipped_armor: Optional[str] = None

    password: str = ""
    created_at: int = 0
    last_modified: int = 0


class Formation(StateModel):
    """Battle rows; each active party member sits in exactly one."""
    front_row: list[str] = Field(default_factory=list)
    back_row: list[str] = Field(default_factory=list)


class PartyPosition(StateModel):
    x: int = 0
    y: int = 0
    facing: Facing = Facing.NORTH


class Party(StateModel):
    """The active party. Members are character ids into the roster."""
    in_maze: bool = False
    members: list[str] = Field(default_factory=list)
    formation: Formation = Field(default_factory=Formation)
    position: PartyPosition = Field(default_factory=PartyPosition)


class DungeonState(StateModel):
    """Dungeon progress. Tile keys are opaque to the core."""
    current_level: int = 1
    visited_tiles: dict[str, bool] = Field(default_factory=dict)
    encounters: list[str] = Field(default_factory=list)


class GameSettings(StateModel):
    difficulty: Difficulty = Difficulty.NORMAL
    sound_enabled: bool = True
    music_enabled: bool = True


class GameState(StateModel):
    """Root aggregate: one live instance per session."""
    current_scene: SceneType = SceneType.TITLE_SCREEN
    roster: dict[str, Character] = Field(default_factory=dict)
    party: Party = Field(default_factory=Party)
    dungeon: DungeonState = Field(default_factory=DungeonState)
    settings: GameSettings = Field(default_factory=GameSettings)

    def add_to_roster(self, character: Character) -> None:
        """Insert or replace a character under its id."""
        self.roster[character.id] = character

    def party_characters(self) -> list[Character]:
        """Party members resolved against the roster, in party order."""
        return [self.roster[m] for m in self.party.members if m in self.roster]
