"""
Game state store - the single live GameState of a session.

All state changes go through ``update`` with a function that returns the
next state. Every change made through ``update`` or ``reset`` schedules a
debounced autosave; ``save_game`` saves at once. Autosave is skipped while
the party is in the maze so a save can never capture a half-finished
dungeon turn.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable

from crawler.core.events import SaveEvent
from campaign.save.errors import SaveLoadError
from campaign.state.initialization import create_new_game
from campaign.state.models import GameState
from campaign.state.types import MAZE_SCENES

if TYPE_CHECKING:
    from campaign.save.service import SaveService

logger = logging.getLogger(__name__)


class GameStateStore:
    """
    Owns the current GameState.

    Args:
        save_service: Where saves go
        autosave_delay: Seconds of quiet before a scheduled autosave runs
    """

    def __init__(
        self,
        save_service: SaveService,
        autosave_delay: float = 0.5,
        initial_state: GameState | None = None,
    ):
        self.save_service = save_service
        self.autosave_delay = autosave_delay
        self._state = initial_state if initial_state is not None else create_new_game()
        self._autosave_task: asyncio.Task | None = None

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_in_maze(self) -> bool:
        return self._state.current_scene in MAZE_SCENES

    def update(self, update_fn: Callable[[GameState], GameState]) -> GameState:
        """
        Replace the state with ``update_fn(state)``.

        Usage:
            store.update(lambda s: s.model_copy(update={"current_scene": SceneType.CASTLE_MENU}))
        """
        new_state = update_fn(self._state)
        if not isinstance(new_state, GameState):
            raise TypeError(f"update function returned {type(new_state).__name__}, expected GameState")
        self._state = new_state
        self.schedule_autosave()
        return new_state

    def reset(self) -> GameState:
        """Discard the current game and start a new one."""
        self._state = create_new_game()
        self.schedule_autosave()
        return self._state

    async def load_game(self) -> GameState:
        """Replace the state with the saved game. Errors propagate unchanged."""
        self.cancel_autosave()
        self._state = await self.save_service.load_game()
        return self._state

    async def save_game(self) -> None:
        await self.save_service.save_game(self._state)

    # Auto-save

    @property
    def autosave_pending(self) -> bool:
        return self._autosave_task is not None and not self._autosave_task.done()

    def schedule_autosave(self) -> bool:
        """
        Debounce an autosave of the current state.

        A later call replaces a pending one. Does nothing inside the maze
        or when no event loop is running.

        Returns:
            True if an autosave was scheduled
        """
        if self.is_in_maze:
            return False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, autosave skipped")
            return False
        self.cancel_autosave()
        self._autosave_task = loop.create_task(self._autosave_after_delay())
        return True

    def cancel_autosave(self) -> None:
        if self._autosave_task is not None and not self._autosave_task.done():
            self._autosave_task.cancel()
        self._autosave_task = None

    async def _autosave_after_delay(self) -> None:
        await asyncio.sleep(self.autosave_delay)
        if self.is_in_maze:
            return
        if self.save_service.event_bus:
            self.save_service.event_bus.publish(SaveEvent.AUTO_SAVE_TRIGGERED)
        try:
            await self.save_service.save_game(self._state)
        except SaveLoadError as e:
            logger.error(f"Auto-save failed: {e}")
