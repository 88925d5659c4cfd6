import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure crawler/campaign modules can be imported
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.key'), \
         patch('pygame.mouse'):

        import pygame
        pygame.key.name = MagicMock(side_effect=lambda key: chr(key) if 0 < key < 128 else "")

        yield

@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from crawler.core.events import EventBus
    return EventBus()

@pytest.fixture
def elements():
    """Element registry with a start button at (10, 10) 100x30."""
    from crawler.input.elements import ElementRegistry
    from crawler.ui.button import ButtonState

    registry = ElementRegistry()
    registry.add("start-button", ButtonState(x=10, y=10, width=100, height=30, text="Start", key="s"))
    return registry

@pytest.fixture
def dispatcher(elements):
    """Fresh InputDispatcher wired to the element registry."""
    from crawler.input.dispatcher import InputDispatcher
    return InputDispatcher(elements=elements)

@pytest.fixture
def storage():
    from campaign.save.storage import MemorySaveStorage
    return MemorySaveStorage()

@pytest.fixture
def save_service(storage):
    from campaign.save.service import SaveService
    return SaveService(storage=storage)

@pytest.fixture
def make_character():
    """Factory for roster characters with override support."""
    from campaign.state.models import Character
    from campaign.state.types import Alignment, CharacterClass, Race

    def _make(char_id: str = "char_1", **overrides):
        values = dict(
            id=char_id,
            name="TestCharacter",
            race=Race.HUMAN,
            character_class=CharacterClass.FIGHTER,
            alignment=Alignment.GOOD,
            strength=15,
            intelligence=10,
            piety=10,
            vitality=14,
            agility=12,
            luck=10,
            hp=10,
            max_hp=10,
            password="test123",
            created_at=1700000000000,
            last_modified=1700000000000,
        )
        values.update(overrides)
        return Character(**values)

    return _make
