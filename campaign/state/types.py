"""
Enumerations used by the game state.

All members are string-valued so a saved game reads naturally and
survives reordering of the members.
"""

from enum import Enum


class SceneType(str, Enum):
    """Every scene the game can be in."""

    # System
    TITLE_SCREEN = "TITLE_SCREEN"

    # Castle / town
    CASTLE_MENU = "CASTLE_MENU"
    TRAINING_GROUNDS = "TRAINING_GROUNDS"
    CHARACTER_CREATION = "CHARACTER_CREATION"
    CHARACTER_LIST = "CHARACTER_LIST"
    CHARACTER_INSPECTION = "CHARACTER_INSPECTION"
    EDGE_OF_TOWN = "EDGE_OF_TOWN"
    TAVERN = "TAVERN"
    INN = "INN"
    TEMPLE = "TEMPLE"
    SHOP = "SHOP"

    # Dungeon
    CAMP = "CAMP"
    MAZE = "MAZE"
    COMBAT = "COMBAT"


# Scenes where the party is exposed; autosave is skipped here.
MAZE_SCENES = frozenset({SceneType.MAZE, SceneType.COMBAT})


class Difficulty(str, Enum):
    EASY = "EASY"
    NORMAL = "NORMAL"
    HARD = "HARD"


class Facing(str, Enum):
    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"


class Race(str, Enum):
    HUMAN = "HUMAN"
    ELF = "ELF"
    DWARF = "DWARF"
    GNOME = "GNOME"
    HOBBIT = "HOBBIT"


class CharacterClass(str, Enum):
    """Basic and advanced classes."""
    FIGHTER = "FIGHTER"
    MAGE = "MAGE"
    PRIEST = "PRIEST"
    THIEF = "THIEF"
    BISHOP = "BISHOP"
    SAMURAI = "SAMURAI"
    LORD = "LORD"
    NINJA = "NINJA"


class Alignment(str, Enum):
    GOOD = "GOOD"
    NEUTRAL = "NEUTRAL"
    EVIL = "EVIL"


class CharacterStatus(str, Enum):
    """Current health/life state of a character."""
    GOOD = "GOOD"
    INJURED = "INJURED"
    DEAD = "DEAD"
    ASHES = "ASHES"
    LOST_FOREVER = "LOST_FOREVER"
    PARALYZED = "PARALYZED"
    STONED = "STONED"
    POISONED = "POISONED"
    ASLEEP = "ASLEEP"
