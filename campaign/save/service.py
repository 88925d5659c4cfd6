"""
Save/Load service - single-slot game state persistence.

Provides:
- Save the live GameState to one durable slot
- Load it back, telling "nothing saved" apart from "saved but unreadable"
- Non-throwing checks for menus (``check_for_save_data``, ``validate_save_data``)
- Save integrity validation (envelope schema, version, checksum, strict model)

The slot holds a JSON envelope:

    {
        "version": "1.0.0",
        "timestamp": 1767225600000,
        "state": { ...GameState... },
        "checksum": "<base64 sha256 of the other three fields>"
    }
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
import json
import logging
import time
from typing import Any, Callable

import jsonschema
from pydantic import ValidationError

from crawler.core.events import EventBus, SaveEvent
from campaign.save.config import SaveConfig
from campaign.save.errors import SaveCorruptedError, SaveLoadError, SaveNotFoundError
from campaign.save.storage import FileSaveStorage, SaveStorage
from campaign.state.models import GameState

logger = logging.getLogger(__name__)


SAVE_ENVELOPE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["version", "timestamp", "state"],
    "properties": {
        "version": {"type": "string", "minLength": 1},
        "timestamp": {"type": "integer", "minimum": 0},
        "checksum": {"type": "string"},
        "state": {
            "type": "object",
            "required": ["current_scene", "roster", "party", "dungeon", "settings"],
        },
    },
    "additionalProperties": False,
}


def calculate_checksum(envelope: dict[str, Any]) -> str:
    """Base64 SHA-256 over the canonical JSON of everything but the checksum."""
    body = {k: v for k, v in envelope.items() if k != "checksum"}
    canonical = json.dumps(body, sort_keys=True, separators=(',', ':'))
    digest = hashlib.sha256(canonical.encode('utf-8')).digest()
    return base64.b64encode(digest).decode('ascii')


class SaveService:
    """
    Reads and writes the single save slot.

    Usage:
        saves = SaveService(config=SaveConfig(save_dir="~/.crawler"))
        await saves.save_game(state)

        if saves.check_for_save_data() and await saves.validate_save_data():
            state = await saves.load_game()
    """

    def __init__(
        self,
        storage: SaveStorage | None = None,
        config: SaveConfig | None = None,
        event_bus: EventBus | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or SaveConfig()
        self.storage = storage if storage is not None else FileSaveStorage(self.config.save_dir)
        self.event_bus = event_bus
        self._clock = clock

    @property
    def slot_key(self) -> str:
        return self.config.slot_key

    def check_for_save_data(self) -> bool:
        """Whether the slot holds anything. Never raises."""
        try:
            return self.storage.exists(self.slot_key)
        except OSError as e:
            logger.warning(f"Could not check save slot '{self.slot_key}': {e}")
            return False

    async def save_game(self, state: GameState) -> None:
        """
        Serialize ``state`` into the slot, replacing any previous save.

        Raises:
            SaveLoadError: The storage write failed; the old save is intact
        """
        self._publish(SaveEvent.SAVE_STARTED)
        try:
            serialized = self.serialize(state)
            await asyncio.to_thread(self.storage.write, self.slot_key, serialized)
        except Exception as e:
            logger.error(f"Save failed: {e}")
            self._publish(SaveEvent.SAVE_FAILED, error=str(e))
            if isinstance(e, OSError):
                raise SaveLoadError(f"Could not write save data: {e}") from e
            raise

        logger.info(f"Game saved to slot '{self.slot_key}'")
        self._publish(SaveEvent.SAVE_COMPLETED)

    async def load_game(self) -> GameState:
        """
        Read and decode the slot.

        Raises:
            SaveNotFoundError: The slot is empty
            SaveCorruptedError: The slot content is not a valid save
        """
        self._publish(SaveEvent.LOAD_STARTED)
        try:
            try:
                raw = await asyncio.to_thread(self.storage.read, self.slot_key)
            except (OSError, UnicodeDecodeError) as e:
                raise SaveCorruptedError(f"unreadable ({e})") from e
            if not raw:
                raise SaveNotFoundError()
            state = self.deserialize(raw)
        except SaveLoadError as e:
            logger.warning(f"Load failed: {e}")
            self._publish(SaveEvent.LOAD_FAILED, error=str(e))
            raise

        self._publish(SaveEvent.LOAD_COMPLETED)
        return state

    async def validate_save_data(self) -> bool:
        """True exactly when ``load_game`` would succeed. Never raises."""
        try:
            await self.load_game()
        except SaveLoadError:
            return False
        return True

    async def delete_save(self) -> None:
        """Remove the slot. Deleting an empty slot is not an error."""
        try:
            await asyncio.to_thread(self.storage.delete, self.slot_key)
        except OSError as e:
            raise SaveLoadError(f"Could not delete save data: {e}") from e
        logger.info(f"Deleted save slot '{self.slot_key}'")
        self._publish(SaveEvent.SAVE_DELETED)

    # Encoding

    def serialize(self, state: GameState) -> str:
        envelope: dict[str, Any] = {
            "version": self.config.version,
            "timestamp": int(self._clock() * 1000),
            "state": state.model_dump(mode="json"),
        }
        envelope["checksum"] = calculate_checksum(envelope)
        return json.dumps(envelope, indent=self.config.indent)

    def deserialize(self, raw: str) -> GameState:
        """
        Decode slot text into a GameState.

        Raises:
            SaveCorruptedError: On any decoding or validation failure
        """
        try:
            envelope = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise SaveCorruptedError("invalid JSON") from e

        try:
            jsonschema.validate(instance=envelope, schema=SAVE_ENVELOPE_SCHEMA)
        except jsonschema.ValidationError as e:
            raise SaveCorruptedError(f"missing required fields ({e.message})") from e

        version = envelope["version"]
        if version.split(".", 1)[0] != self.config.major_version:
            raise SaveCorruptedError(f"unsupported version {version}")

        checksum = envelope.get("checksum")
        if self.config.verify_checksum and checksum is not None:
            try:
                matches = calculate_checksum(envelope) == checksum
            except RecursionError as e:
                raise SaveCorruptedError("nested too deeply") from e
            if not matches:
                raise SaveCorruptedError("checksum mismatch")

        try:
            return GameState.model_validate_json(json.dumps(envelope["state"]), strict=True)
        except ValidationError as e:
            raise SaveCorruptedError(f"invalid game state ({e.error_count()} errors)") from e
        except RecursionError as e:
            raise SaveCorruptedError("nested too deeply") from e

    def _publish(self, event_type: SaveEvent, **data: Any) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, slot=self.slot_key, **data)
